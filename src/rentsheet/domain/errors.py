"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a second rent payment for the same period."""


class InvalidSnapshotError(ValidationError):
    """Imported or stored document is not a valid state snapshot."""


class StorageError(RuntimeError):
    """Reading or writing the local store failed."""


class SyncError(RuntimeError):
    """Reading or writing the shared remote document failed."""


INVALID_SNAPSHOT = "Invalid or corrupted file"


def property_not_found(property_id: str) -> str:
    """Return message for missing property."""
    return f"Property '{property_id}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def duplicate_income(property_name: str, month: int, year: int) -> str:
    """Return message for a second income in the same accounting period."""
    return (
        f"Property '{property_name}' already has an income recorded for "
        f"{month + 1:02d}/{year}"
    )


def invalid_period(month: int, year: int) -> str:
    """Return message for an out-of-range accounting period."""
    return f"Invalid period {month}/{year}: month must be 0-11 and year positive"
