"""Tests for the SQLAlchemy state store and its mappers."""

from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from rentsheet.database.factories import create_sqlite_store
from rentsheet.database.mappers import (
    service_record_to_domain,
    service_record_to_orm,
    transaction_to_domain,
)
from rentsheet.database.models import ServiceFlag as ORMServiceFlag
from rentsheet.database.models import ServiceRecord as ORMServiceRecord
from rentsheet.database.models import Transaction as ORMTransaction
from rentsheet.domain.entities import (
    AppState,
    COMMON_PROPERTY_ID,
    ExpenseCategory,
    ServiceRecord,
    ServiceType,
    TransactionAgent,
)
from rentsheet.domain.errors import StorageError
from rentsheet.domain.snapshot import initial_state


class TestMappers:
    """Tests for ORM mappers."""

    def test_expense_without_category_maps_to_other(self):
        orm_transaction = ORMTransaction(
            id="t1",
            position=0,
            property_id="p1",
            date=date(2024, 4, 1),
            amount=100.0,
            type="EXPENSE",
            category=None,
            description=None,
            handled_by=None,
        )

        txn = transaction_to_domain(orm_transaction)

        assert txn.category == ExpenseCategory.OTHER
        assert txn.description == ""
        assert txn.handled_by == TransactionAgent.ME

    def test_service_record_flags(self):
        record = ServiceRecord(
            id="r1",
            property_id="p1",
            month=3,
            year=2024,
            services={ServiceType.GAS: True, ServiceType.LIGHT: False},
        )

        orm_record = service_record_to_orm(record, position=2)

        assert orm_record.position == 2
        assert {(f.service, f.paid) for f in orm_record.flags} == {("Gas", True), ("Luz", False)}
        assert service_record_to_domain(orm_record) == record

    def test_unknown_flag_is_skipped(self):
        orm_record = ORMServiceRecord(
            id="r1",
            property_id="p1",
            month=3,
            year=2024,
            flags=[ORMServiceFlag(service="Cable", paid=True)],
        )

        assert service_record_to_domain(orm_record).services == {}


def test_empty_store_loads_none(temp_db, save_count):
    assert temp_db.load_state() is None
    assert save_count(temp_db) == 0


def test_save_and_load_round_trip(temp_db, sample_state, save_count):
    sample_state.service_records.append(
        ServiceRecord(id="r1", property_id="p1", month=3, year=2024, services={ServiceType.GAS: True})
    )

    temp_db.save_state(sample_state)
    loaded = temp_db.load_state()

    assert loaded == sample_state
    assert [t.id for t in loaded.transactions] == ["t1", "t2", "t3"]
    assert save_count(temp_db) == 1


def test_save_replaces_everything(temp_db, sample_state, save_count):
    temp_db.save_state(sample_state)
    sample_state.transactions.pop()
    sample_state.properties = [p for p in sample_state.properties if p.id != "p2"]

    temp_db.save_state(sample_state)
    loaded = temp_db.load_state()

    assert [t.id for t in loaded.transactions] == ["t1", "t2"]
    assert "p2" not in [p.id for p in loaded.properties]
    assert save_count(temp_db) == 2


def test_save_twice_with_same_records(temp_db):
    state = initial_state()
    state.service_records.append(
        ServiceRecord(id="r1", property_id="1", month=0, year=2024, services={ServiceType.ABL: True})
    )

    temp_db.save_state(state)
    temp_db.save_state(state)

    assert temp_db.load_state() == state


def test_load_adds_common_property(temp_db, make_property):
    temp_db.save_state(AppState(properties=[make_property()]))

    loaded = temp_db.load_state()

    assert [p.id for p in loaded.properties] == ["p1", COMMON_PROPERTY_ID]


def test_state_survives_reopen(temp_db, sample_state):
    temp_db.save_state(sample_state)
    temp_db.disconnect()

    reopened = create_sqlite_store(database_path=temp_db.database_path)

    assert reopened.load_state() == sample_state


def test_env_var_selects_path(monkeypatch, tmp_path):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("RENTSHEET_DB_PATH", str(db_path))

    store = create_sqlite_store()
    store.save_state(initial_state())

    assert db_path.exists()


def test_save_failure_raises_storage_error(temp_db, sample_state, monkeypatch):
    session = temp_db._get_session()

    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("disk full"))

    monkeypatch.setattr(session, "commit", broken_commit)

    with pytest.raises(StorageError):
        temp_db.save_state(sample_state)


def test_duplicate_records_and_ids_are_stored(temp_db, sample_state, make_transaction):
    sample_state.service_records.extend(
        [
            ServiceRecord(id="r1", property_id="p1", month=3, year=2024, services={ServiceType.GAS: True}),
            ServiceRecord(id="r2", property_id="p1", month=3, year=2024, services={ServiceType.WATER: True}),
            ServiceRecord(id="r2", property_id="p2", month=3, year=2024, services={}),
        ]
    )
    sample_state.transactions.append(make_transaction("t1", amount=5.0))

    temp_db.save_state(sample_state)

    assert temp_db.load_state() == sample_state
