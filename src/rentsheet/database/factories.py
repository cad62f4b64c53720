"""Store factory functions for creating local and remote stores."""

import os
from pathlib import Path
from typing import Optional

from rentsheet.database.remote import RemoteDocumentStore
from rentsheet.database.sqlalchemy_db import SQLAlchemyStateStore

DEFAULT_DOCUMENT_ID = "shared_family_state"


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyStateStore:
    """Create a SQLite state store.

    Args:
        database_path: Path to SQLite database file. If None, checks RENTSHEET_DB_PATH
            environment variable, then defaults to ~/.rentsheet/rentsheet.db

    Returns:
        SQLAlchemyStateStore instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("RENTSHEET_DB_PATH")

    if database_path is None:
        # Default to ~/.rentsheet/rentsheet.db
        home = Path.home()
        db_dir = home / ".rentsheet"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "rentsheet.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyStateStore(database_url)


def create_remote_store(
    database_url: Optional[str], doc_id: str = DEFAULT_DOCUMENT_ID
) -> Optional[RemoteDocumentStore]:
    """Create the shared remote document store, or None when no URL is configured.

    Args:
        database_url: SQLAlchemy URL of the shared database
        doc_id: Key of the shared document

    Returns:
        RemoteDocumentStore instance, or None for local-only mode
    """
    if not database_url:
        return None
    return RemoteDocumentStore(database_url, doc_id)
