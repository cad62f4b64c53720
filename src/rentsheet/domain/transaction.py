"""Transaction domain service."""

from dataclasses import replace
from datetime import date
from typing import Any, Optional

from rentsheet.domain.entities import (
    AppState,
    ExpenseCategory,
    Transaction,
    TransactionAgent,
    TransactionType,
    generate_id,
)
from rentsheet.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_income,
    property_not_found,
    transaction_not_found,
)
from rentsheet.domain.periods import income_matches, is_relevant, month_name, validate_period

_UNSET: Any = object()


class TransactionService:
    """Service for managing transactions of a state."""

    def __init__(self, state: AppState):
        """Initialize transaction service.

        Args:
            state: Application state to read and mutate
        """
        self.state = state

    def create_transaction(
        self,
        property_id: str,
        date: date,
        amount: float,
        type: TransactionType,
        description: str = "",
        category: Optional[ExpenseCategory] = None,
        rent_month: Optional[int] = None,
        rent_year: Optional[int] = None,
        handled_by: TransactionAgent = TransactionAgent.ME,
    ) -> Transaction:
        """Create a transaction and place it first in the collection.

        Args:
            property_id: Property the movement belongs to
            date: Real date of the movement
            amount: Non-negative amount
            type: INCOME or EXPENSE
            description: Free text
            category: Expense category (required for expenses, ignored for income)
            rent_month: Optional zero-based accounting month
            rent_year: Optional accounting year
            handled_by: Partner who handled the cash

        Returns:
            Created transaction

        Raises:
            ValueError: If the property doesn't exist, a field is invalid or the
                period already has an income for this property
        """
        txn = Transaction(
            id=generate_id(),
            property_id=property_id,
            date=date,
            amount=float(amount),
            type=TransactionType(type),
            description=description or "",
            category=category,
            rent_month=rent_month,
            rent_year=rent_year,
            handled_by=TransactionAgent(handled_by),
        )
        txn = self._validate(txn)
        self.state.transactions.insert(0, txn)
        return txn

    def update_transaction(
        self,
        transaction_id: str,
        property_id: Optional[str] = None,
        date: Optional[date] = None,
        amount: Optional[float] = None,
        type: Optional[TransactionType] = None,
        description: Optional[str] = None,
        category: Optional[ExpenseCategory] = None,
        rent_month: Any = _UNSET,
        rent_year: Any = _UNSET,
        handled_by: Optional[TransactionAgent] = None,
    ) -> Transaction:
        """Update transaction fields in place.

        Passing ``rent_month=None`` and ``rent_year=None`` clears the period.

        Args:
            transaction_id: Transaction ID to update
            property_id: Optional new property
            date: Optional new date
            amount: Optional new amount
            type: Optional new type
            description: Optional new description
            category: Optional new category
            rent_month: New accounting month, or None to clear
            rent_year: New accounting year, or None to clear
            handled_by: Optional new handler

        Returns:
            Updated transaction

        Raises:
            ValueError: If the transaction doesn't exist or the result is invalid
        """
        current = self.require_transaction(transaction_id)

        changes: dict[str, Any] = {}
        if property_id is not None:
            changes["property_id"] = property_id
        if date is not None:
            changes["date"] = date
        if amount is not None:
            changes["amount"] = float(amount)
        if type is not None:
            changes["type"] = TransactionType(type)
        if description is not None:
            changes["description"] = description
        if category is not None:
            changes["category"] = category
        if rent_month is not _UNSET:
            changes["rent_month"] = rent_month
        if rent_year is not _UNSET:
            changes["rent_year"] = rent_year
        if handled_by is not None:
            changes["handled_by"] = TransactionAgent(handled_by)

        updated = replace(current, **changes)
        if updated.is_expense and updated.category is None:
            updated = replace(updated, category=ExpenseCategory.OTHER)
        updated = self._validate(updated)

        self.state.transactions = [
            updated if t.id == transaction_id else t for t in self.state.transactions
        ]
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            ValueError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.state.transactions = [
            t for t in self.state.transactions if t.id != transaction_id
        ]

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        return self.state.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: str) -> Transaction:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.state.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def list_transactions(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
        property_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with filters.

        Args:
            month: Optional zero-based month (requires year)
            year: Optional year (requires month)
            property_id: Optional property filter

        Returns:
            Transactions that happened in, or are attributed to, the month
        """
        transactions = list(self.state.transactions)
        if month is not None and year is not None:
            transactions = [t for t in transactions if is_relevant(t, month, year)]
        if property_id is not None:
            transactions = [t for t in transactions if t.property_id == property_id]
        return transactions

    def draft_for_sheet(
        self,
        property_id: str,
        type: TransactionType,
        month: int,
        year: int,
        today: Optional[date] = None,
    ) -> dict[str, Any]:
        """Return the pre-filled fields for a transaction started from a sheet cell.

        Income defaults to the property's rent for the viewed period; an
        expense defaults to maintenance, attributed to the viewed period so it
        shows up on the sheet it was added from.
        """
        prop = self.state.get_property(property_id)
        if prop is None:
            raise NotFoundError(property_not_found(property_id))
        validate_period(month, year)

        draft: dict[str, Any] = {
            "property_id": property_id,
            "type": TransactionType(type),
            "date": today or date.today(),
            "rent_month": month,
            "rent_year": year,
            "handled_by": TransactionAgent.ME,
        }
        if draft["type"] == TransactionType.INCOME:
            draft["amount"] = prop.rent_amount
            draft["description"] = (
                "Ingreso Varios" if prop.is_common else f"Alquiler {month_name(month)}"
            )
        else:
            draft["amount"] = 0.0
            draft["category"] = ExpenseCategory.MAINTENANCE
            draft["description"] = ""
        return draft

    def _validate(self, txn: Transaction) -> Transaction:
        prop = self.state.get_property(txn.property_id)
        if prop is None:
            raise NotFoundError(property_not_found(txn.property_id))
        if txn.amount < 0:
            raise ValidationError("Amount cannot be negative")
        if (txn.rent_month is None) != (txn.rent_year is None):
            raise ValidationError("Rent month and rent year must be given together")
        if txn.has_period:
            validate_period(txn.rent_month, txn.rent_year)

        if txn.is_expense:
            if txn.category is None:
                raise ValidationError("Category is required for expenses")
            return txn

        txn = replace(txn, category=None)
        if txn.has_period:
            for other in self.state.transactions:
                if (
                    other.id != txn.id
                    and other.property_id == txn.property_id
                    and income_matches(other, txn.rent_month, txn.rent_year)
                ):
                    raise ConflictError(
                        duplicate_income(prop.name, txn.rent_month, txn.rent_year)
                    )
        return txn
