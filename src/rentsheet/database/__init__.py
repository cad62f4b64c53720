"""Database layer for rentsheet application."""

from rentsheet.database.base import StateStore
from rentsheet.database.factories import create_remote_store, create_sqlite_store
from rentsheet.database.remote import RemoteDocumentStore

__all__ = ["StateStore", "RemoteDocumentStore", "create_sqlite_store", "create_remote_store"]
