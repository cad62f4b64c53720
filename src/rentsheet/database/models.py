"""SQLAlchemy models for rentsheet database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Float,
    Boolean,
    Text,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Property(Base):
    """Property model.

    Rows are keyed by ``row_id``; the domain ``id`` is stored as plain data so
    a snapshot is written back exactly as it was loaded.
    """

    __tablename__ = "properties"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False, default="")
    tenant_name = Column(String, nullable=False, default="")
    rent_amount = Column(Float, nullable=False, default=0.0)
    due_day = Column(Integer, nullable=False, default=1)
    is_common = Column(Boolean, default=False, nullable=False)


class Transaction(Base):
    """Transaction model.

    ``position`` keeps the snapshot order (newest first). Property references
    are not enforced so any snapshot can be stored as-is.
    """

    __tablename__ = "transactions"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    property_id = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False)
    amount = Column(Float, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=True)
    description = Column(String, nullable=False, default="")
    rent_month = Column(Integer, nullable=True)
    rent_year = Column(Integer, nullable=True)
    handled_by = Column(String, nullable=False, default="ME")


class ServiceRecord(Base):
    """Monthly service checklist of a property.

    One record per property and month is kept by the services, not by the
    table, so imported or synced snapshots are stored unchanged.
    """

    __tablename__ = "service_records"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    property_id = Column(String, nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)

    # Relationships
    flags = relationship("ServiceFlag", back_populates="record", cascade="all, delete-orphan")


class ServiceFlag(Base):
    """Paid/pending flag of one service within a record."""

    __tablename__ = "service_flags"

    id = Column(Integer, primary_key=True)
    record_id = Column(Integer, ForeignKey("service_records.row_id"), nullable=False)
    service = Column(String, nullable=False)
    paid = Column(Boolean, default=False, nullable=False)

    # Relationships
    record = relationship("ServiceRecord", back_populates="flags")


class StoreMeta(Base):
    """Single-row bookkeeping of local saves."""

    __tablename__ = "store_meta"

    id = Column(Integer, primary_key=True)
    save_count = Column(Integer, nullable=False, default=0)
    saved_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class SharedDocument(Base):
    """Whole-state JSON document shared between sessions."""

    __tablename__ = "shared_documents"

    doc_id = Column(String, primary_key=True)
    payload = Column(Text, nullable=False)
    revision = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
