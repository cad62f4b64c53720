"""Property domain service."""

from dataclasses import replace
from typing import Optional

from rentsheet.domain.entities import AppState, Property, generate_id
from rentsheet.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    property_not_found,
)
from rentsheet.domain.monthly import order_properties


class PropertyService:
    """Service for managing properties of a state."""

    def __init__(self, state: AppState):
        """Initialize property service.

        Args:
            state: Application state to read and mutate
        """
        self.state = state

    def create_property(
        self,
        name: str,
        address: str = "",
        tenant_name: str = "",
        rent_amount: float = 0.0,
        due_day: int = 1,
    ) -> Property:
        """Create a regular property.

        Args:
            name: Display name
            address: Street address
            tenant_name: Current tenant
            rent_amount: Expected monthly rent
            due_day: Day of month the rent is due (1-31)

        Returns:
            Created property

        Raises:
            ValueError: If a field is invalid
        """
        prop = Property(
            id=generate_id(),
            name=name.strip() if name else "",
            address=address,
            tenant_name=tenant_name,
            rent_amount=float(rent_amount),
            due_day=int(due_day),
        )
        self._validate(prop)
        self.state.properties.append(prop)
        return prop

    def update_property(
        self,
        property_id: str,
        name: Optional[str] = None,
        address: Optional[str] = None,
        tenant_name: Optional[str] = None,
        rent_amount: Optional[float] = None,
        due_day: Optional[int] = None,
    ) -> Property:
        """Update property fields in place.

        Args:
            property_id: Property to update
            name: Optional new name
            address: Optional new address
            tenant_name: Optional new tenant
            rent_amount: Optional new rent
            due_day: Optional new due day

        Returns:
            Updated property

        Raises:
            ValueError: If the property doesn't exist or a field is invalid
        """
        current = self.require_property(property_id)

        changes = {}
        if name is not None:
            changes["name"] = name.strip()
        if address is not None:
            changes["address"] = address
        if tenant_name is not None:
            changes["tenant_name"] = tenant_name
        if rent_amount is not None:
            changes["rent_amount"] = float(rent_amount)
        if due_day is not None:
            changes["due_day"] = int(due_day)

        updated = replace(current, **changes)
        self._validate(updated)
        self.save(updated)
        return updated

    def save(self, prop: Property) -> Property:
        """Insert a property or replace the one with the same id.

        Raises:
            ConflictError: If the change would leave zero or two common properties
        """
        self._validate(prop)
        existing = self.state.get_property(prop.id)
        if existing is None:
            if prop.is_common and self.state.common_property() is not None:
                raise ConflictError("A common property already exists")
            self.state.properties.append(prop)
            return prop

        if existing.is_common != prop.is_common:
            raise ConflictError("The common flag of a property cannot be changed")
        self.state.properties = [
            prop if p.id == prop.id else p for p in self.state.properties
        ]
        return prop

    def get_property(self, property_id: str) -> Optional[Property]:
        """Get property by ID."""
        return self.state.get_property(property_id)

    def require_property(self, property_id: str) -> Property:
        """Get property by ID or raise NotFoundError."""
        prop = self.state.get_property(property_id)
        if prop is None:
            raise NotFoundError(property_not_found(property_id))
        return prop

    def find_property(self, name_or_id: str) -> Property:
        """Resolve a property by ID, or by case-insensitive name.

        Raises:
            NotFoundError: If nothing matches
        """
        prop = self.state.get_property(name_or_id)
        if prop is not None:
            return prop
        wanted = name_or_id.strip().lower()
        for candidate in self.state.properties:
            if candidate.name.lower() == wanted:
                return candidate
        raise NotFoundError(property_not_found(name_or_id))

    def list_properties(self) -> list[Property]:
        """List properties, common property last."""
        return order_properties(self.state.properties)

    def _validate(self, prop: Property) -> None:
        if not prop.name:
            raise ValidationError("Property name is required")
        if prop.rent_amount < 0:
            raise ValidationError("Rent amount cannot be negative")
        if not 1 <= prop.due_day <= 31:
            raise ValidationError("Due day must be between 1 and 31")
