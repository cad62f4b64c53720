"""Service checklist domain service."""

from dataclasses import replace

from rentsheet.domain.entities import (
    AppState,
    ServiceRecord,
    ServiceType,
    empty_services,
    generate_id,
    services_for,
)
from rentsheet.domain.errors import NotFoundError, ValidationError, property_not_found
from rentsheet.domain.periods import validate_period


class ServiceRecordService:
    """Service for toggling the monthly paid/pending service flags."""

    def __init__(self, state: AppState):
        """Initialize service record service.

        Args:
            state: Application state to read and mutate
        """
        self.state = state

    def toggle_service(
        self, property_id: str, month: int, year: int, service: ServiceType
    ) -> ServiceRecord:
        """Flip one service flag, creating the month's record on first use.

        Args:
            property_id: Property ID
            month: Zero-based month
            year: Year
            service: Flag to flip

        Returns:
            The created or updated record

        Raises:
            ValueError: If the property doesn't exist, the period is invalid or
                the service isn't tracked for this kind of property
        """
        prop = self.state.get_property(property_id)
        if prop is None:
            raise NotFoundError(property_not_found(property_id))
        validate_period(month, year)
        service = ServiceType(service)
        if service not in services_for(prop):
            raise ValidationError(
                f"Service '{service.value}' is not tracked for '{prop.name}'"
            )

        record = self.state.find_service_record(property_id, month, year)
        if record is None:
            services = empty_services(prop)
            services[service] = True
            record = ServiceRecord(
                id=generate_id(),
                property_id=property_id,
                month=month,
                year=year,
                services=services,
            )
            self.state.service_records.append(record)
            return record

        services = dict(record.services)
        services[service] = not services.get(service, False)
        updated = replace(record, services=services)
        self.state.service_records = [
            updated if r.id == record.id else r for r in self.state.service_records
        ]
        return updated

    def get_services(self, property_id: str, month: int, year: int) -> dict[ServiceType, bool]:
        """Return the flags of a property for a month, all pending when unrecorded.

        Raises:
            ValueError: If the property doesn't exist
        """
        prop = self.state.get_property(property_id)
        if prop is None:
            raise NotFoundError(property_not_found(property_id))
        services = empty_services(prop)
        record = self.state.find_service_record(property_id, month, year)
        if record is not None:
            services.update(record.services)
        return services
