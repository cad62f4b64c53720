"""Conversion between AppState and its JSON document shape.

The document keeps the camelCase keys used by the shared remote copy and by
backup files. Loading is the single place where optional fields get their
defaults, so the sheet builders can rely on a fully populated model.
"""

import logging
import math
from typing import Any

from dateutil import parser as date_parser

from rentsheet.domain.entities import (
    AppState,
    COMMON_PROPERTY_ID,
    ExpenseCategory,
    Property,
    ServiceRecord,
    ServiceType,
    Transaction,
    TransactionAgent,
    TransactionType,
)
from rentsheet.domain.errors import INVALID_SNAPSHOT, InvalidSnapshotError

logger = logging.getLogger(__name__)

COMMON_PROPERTY = Property(
    id=COMMON_PROPERTY_ID,
    name="VARIOS / GASTOS COMUNES",
    address="Compartido",
    tenant_name="N/A",
    rent_amount=0.0,
    due_day=1,
    is_common=True,
)

INITIAL_PROPERTIES = (
    Property("1", "Depto Centro", "Av. Corrientes 1234", "Juan Pérez", 150000.0, 5),
    Property("2", "Casa Quinta", "Los Alamos 440", "Maria Rodriguez", 220000.0, 10),
    Property("3", "Local Comercial", "San Martin 880", "Carlos Gomez", 300000.0, 1),
    Property("4", "Depto 2 Ambientes", "Belgrano 450", "Lucía Fernández", 120000.0, 5),
    Property("5", "Cochera / Depósito", "Mitre 200", "Roberto Díaz", 50000.0, 1),
)

REQUIRED_KEYS = ("properties", "transactions")


def initial_state() -> AppState:
    """Return the seeded state used on first run."""
    return AppState(properties=[*INITIAL_PROPERTIES, COMMON_PROPERTY])


def ensure_common_property(state: AppState) -> AppState:
    """Append the shared-expenses property if the state lacks one."""
    if state.get_property(COMMON_PROPERTY_ID) is None:
        state.properties.append(COMMON_PROPERTY)
    return state


# Serialization


def property_to_dict(prop: Property) -> dict[str, Any]:
    return {
        "id": prop.id,
        "name": prop.name,
        "address": prop.address,
        "tenantName": prop.tenant_name,
        "rentAmount": prop.rent_amount,
        "dueDay": prop.due_day,
        "isCommon": prop.is_common,
    }


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": txn.id,
        "propertyId": txn.property_id,
        "date": txn.date.isoformat(),
        "amount": txn.amount,
        "type": txn.type.value,
        "description": txn.description,
        "handledBy": txn.handled_by.value,
    }
    if txn.category is not None:
        data["category"] = txn.category.value
    if txn.rent_month is not None:
        data["rentMonth"] = txn.rent_month
    if txn.rent_year is not None:
        data["rentYear"] = txn.rent_year
    return data


def service_record_to_dict(record: ServiceRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "propertyId": record.property_id,
        "month": record.month,
        "year": record.year,
        "services": {service.value: paid for service, paid in record.services.items()},
    }


def state_to_dict(state: AppState) -> dict[str, Any]:
    """Convert a state into its JSON-ready document."""
    return {
        "properties": [property_to_dict(p) for p in state.properties],
        "transactions": [transaction_to_dict(t) for t in state.transactions],
        "serviceRecords": [service_record_to_dict(r) for r in state.service_records],
    }


# Deserialization


def _amount(value: Any) -> float:
    amount = float(value)
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"amount must be a non-negative number, got {value!r}")
    return amount


def _month(value: Any) -> int:
    month = int(value)
    if not 0 <= month <= 11:
        raise ValueError(f"month must be between 0 and 11, got {value!r}")
    return month


def property_from_dict(data: dict[str, Any]) -> Property:
    return Property(
        id=str(data["id"]),
        name=data.get("name", ""),
        address=data.get("address", ""),
        tenant_name=data.get("tenantName", ""),
        rent_amount=_amount(data.get("rentAmount") or 0),
        due_day=int(data.get("dueDay") or 1),
        is_common=bool(data.get("isCommon", False)),
    )


def transaction_from_dict(data: dict[str, Any]) -> Transaction:
    txn_type = TransactionType(data["type"])

    category = None
    if txn_type == TransactionType.EXPENSE:
        raw_category = data.get("category")
        category = ExpenseCategory(raw_category) if raw_category else ExpenseCategory.OTHER

    rent_month = data.get("rentMonth")
    rent_year = data.get("rentYear")

    return Transaction(
        id=str(data["id"]),
        property_id=str(data["propertyId"]),
        date=date_parser.isoparse(data["date"]).date(),
        amount=_amount(data["amount"]),
        type=txn_type,
        description=data.get("description") or "",
        category=category,
        rent_month=_month(rent_month) if rent_month is not None else None,
        rent_year=int(rent_year) if rent_year is not None else None,
        handled_by=TransactionAgent(data.get("handledBy") or TransactionAgent.ME.value),
    )


def service_record_from_dict(data: dict[str, Any]) -> ServiceRecord:
    services: dict[ServiceType, bool] = {}
    for key, paid in (data.get("services") or {}).items():
        try:
            services[ServiceType(key)] = bool(paid)
        except ValueError:
            logger.warning("Ignoring unknown service flag '%s' on record %s", key, data.get("id"))
    return ServiceRecord(
        id=str(data["id"]),
        property_id=str(data["propertyId"]),
        month=_month(data["month"]),
        year=int(data["year"]),
        services=services,
    )


def state_from_dict(data: Any, ensure_common: bool = True) -> AppState:
    """Build a normalized state from a document.

    Args:
        data: Parsed JSON document
        ensure_common: Append the shared-expenses property when missing

    Returns:
        Normalized AppState

    Raises:
        InvalidSnapshotError: If required keys are missing or an entry is malformed
    """
    if not isinstance(data, dict) or any(key not in data for key in REQUIRED_KEYS):
        raise InvalidSnapshotError(INVALID_SNAPSHOT)

    try:
        state = AppState(
            properties=[property_from_dict(p) for p in data["properties"]],
            transactions=[transaction_from_dict(t) for t in data["transactions"]],
            service_records=[
                service_record_from_dict(r) for r in data.get("serviceRecords") or []
            ],
        )
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise InvalidSnapshotError(f"{INVALID_SNAPSHOT}: {e}") from e

    if ensure_common:
        ensure_common_property(state)
    return state
