"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the stored schema can evolve
without touching the domain entities.
"""

import logging

from rentsheet.domain import entities as domain
from rentsheet.database.models import (
    Property as ORMProperty,
    Transaction as ORMTransaction,
    ServiceRecord as ORMServiceRecord,
    ServiceFlag as ORMServiceFlag,
)

logger = logging.getLogger(__name__)


def property_to_domain(orm_property: ORMProperty) -> domain.Property:
    """Convert SQLAlchemy Property model to domain Property entity."""
    return domain.Property(
        id=orm_property.id,
        name=orm_property.name,
        address=orm_property.address or "",
        tenant_name=orm_property.tenant_name or "",
        rent_amount=orm_property.rent_amount,
        due_day=orm_property.due_day,
        is_common=bool(orm_property.is_common),
    )


def property_to_orm(prop: domain.Property, position: int) -> ORMProperty:
    """Convert domain Property entity to SQLAlchemy Property model."""
    return ORMProperty(
        id=prop.id,
        position=position,
        name=prop.name,
        address=prop.address,
        tenant_name=prop.tenant_name,
        rent_amount=prop.rent_amount,
        due_day=prop.due_day,
        is_common=prop.is_common,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    txn_type = domain.TransactionType(orm_transaction.type)
    category = None
    if txn_type == domain.TransactionType.EXPENSE:
        category = domain.ExpenseCategory(
            orm_transaction.category or domain.ExpenseCategory.OTHER.value
        )
    return domain.Transaction(
        id=orm_transaction.id,
        property_id=orm_transaction.property_id,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        type=txn_type,
        description=orm_transaction.description or "",
        category=category,
        rent_month=orm_transaction.rent_month,
        rent_year=orm_transaction.rent_year,
        handled_by=domain.TransactionAgent(
            orm_transaction.handled_by or domain.TransactionAgent.ME.value
        ),
    )


def transaction_to_orm(txn: domain.Transaction, position: int) -> ORMTransaction:
    """Convert domain Transaction entity to SQLAlchemy Transaction model."""
    return ORMTransaction(
        id=txn.id,
        position=position,
        property_id=txn.property_id,
        date=txn.date,
        amount=txn.amount,
        type=txn.type.value,
        category=txn.category.value if txn.category else None,
        description=txn.description,
        rent_month=txn.rent_month,
        rent_year=txn.rent_year,
        handled_by=txn.handled_by.value,
    )


def service_record_to_domain(orm_record: ORMServiceRecord) -> domain.ServiceRecord:
    """Convert SQLAlchemy ServiceRecord model to domain ServiceRecord entity."""
    services: dict[domain.ServiceType, bool] = {}
    for flag in orm_record.flags:
        try:
            services[domain.ServiceType(flag.service)] = bool(flag.paid)
        except ValueError:
            logger.warning("Skipping unknown service flag '%s' on record %s", flag.service, orm_record.id)
    return domain.ServiceRecord(
        id=orm_record.id,
        property_id=orm_record.property_id,
        month=orm_record.month,
        year=orm_record.year,
        services=services,
    )


def service_record_to_orm(record: domain.ServiceRecord, position: int) -> ORMServiceRecord:
    """Convert domain ServiceRecord entity to SQLAlchemy ServiceRecord model."""
    return ORMServiceRecord(
        id=record.id,
        position=position,
        property_id=record.property_id,
        month=record.month,
        year=record.year,
        flags=[
            ORMServiceFlag(service=service.value, paid=paid)
            for service, paid in record.services.items()
        ],
    )
