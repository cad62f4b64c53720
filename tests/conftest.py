"""Shared pytest fixtures for rentsheet tests."""

import logging
import tempfile
import os
from datetime import date
import pytest

from rentsheet.database.factories import create_remote_store, create_sqlite_store
from rentsheet.database.models import StoreMeta
from rentsheet.domain.entities import (
    AppState,
    ExpenseCategory,
    Property,
    Transaction,
    TransactionAgent,
    TransactionType,
)
from rentsheet.domain.snapshot import COMMON_PROPERTY


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the handlers and levels installed by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    levels = {name: logging.getLogger(name).level for name in ("", "rentsheet", "sqlalchemy")}
    yield
    for handler in root.handlers[:]:
        if handler not in handlers and type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def _temp_path(suffix: str) -> str:
    fd, path = tempfile.mkstemp(suffix=suffix)
    os.close(fd)
    return path


@pytest.fixture
def temp_db():
    """Create a temporary SQLite state store for testing."""
    # Create a temporary file for the database
    db_path = _temp_path(".db")

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def save_count():
    """Return how many snapshots a store has written."""

    def count(store) -> int:
        with store.session_factory() as session:
            meta = session.query(StoreMeta).first()
            return meta.save_count if meta is not None else 0

    return count


@pytest.fixture
def remote_url():
    """SQLAlchemy URL of a temporary shared database."""
    db_path = _temp_path(".db")
    yield f"sqlite:///{db_path}"
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def remote_store(remote_url):
    """Create a remote document store on a temporary database."""
    return create_remote_store(remote_url, "test_document")


def _make_property(id="p1", name="Depto Centro", rent_amount=150000.0, due_day=5, **kwargs):
    """Build a regular property with sensible defaults."""
    return Property(
        id=id,
        name=name,
        address=kwargs.pop("address", "Av. Corrientes 1234"),
        tenant_name=kwargs.pop("tenant_name", "Juan Perez"),
        rent_amount=rent_amount,
        due_day=due_day,
        **kwargs,
    )


def _make_transaction(
    id,
    property_id="p1",
    amount=1000.0,
    type=TransactionType.INCOME,
    txn_date=date(2024, 4, 10),
    **kwargs,
):
    """Build a transaction with sensible defaults."""
    if type == TransactionType.EXPENSE:
        kwargs.setdefault("category", ExpenseCategory.REPAIR)
    return Transaction(
        id=id,
        property_id=property_id,
        date=txn_date,
        amount=amount,
        type=type,
        **kwargs,
    )


@pytest.fixture
def make_property():
    """Factory for regular properties."""
    return _make_property


@pytest.fixture
def make_transaction():
    """Factory for transactions."""
    return _make_transaction


@pytest.fixture
def sample_state():
    """State with two properties, the common one, and an April 2024 month of activity."""
    centro = _make_property()
    quinta = _make_property(
        id="p2", name="Casa Quinta", rent_amount=220000.0, due_day=10, tenant_name="Maria"
    )
    transactions = [
        _make_transaction(
            "t1",
            amount=150000.0,
            description="Alquiler abril",
            rent_month=3,
            rent_year=2024,
        ),
        _make_transaction(
            "t2",
            amount=50000.0,
            type=TransactionType.EXPENSE,
            category=ExpenseCategory.REPAIR,
            rent_month=3,
            rent_year=2024,
            handled_by=TransactionAgent.SISTER,
        ),
        _make_transaction(
            "t3",
            property_id="p2",
            amount=220000.0,
            description="Alquiler abril",
            rent_month=3,
            rent_year=2024,
            handled_by=TransactionAgent.SISTER,
        ),
    ]
    return AppState(properties=[centro, quinta, COMMON_PROPERTY], transactions=transactions)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
