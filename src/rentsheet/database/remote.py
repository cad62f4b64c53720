"""Shared remote document holding the whole state.

Both partners point at the same database row. Every push overwrites the
full document (last writer wins) and bumps its revision; sessions notice
foreign writes by polling the revision.
"""

import json
import logging
from datetime import datetime, UTC
from typing import Callable, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rentsheet.database.models import SharedDocument, create_session_factory
from rentsheet.domain.entities import AppState
from rentsheet.domain.errors import InvalidSnapshotError, SyncError
from rentsheet.domain.snapshot import state_from_dict, state_to_dict

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[AppState], None]


class RemoteDocumentStore:
    """Remote copy of the state stored as one JSON document."""

    def __init__(self, database_url: str, doc_id: str):
        """Initialize remote document store.

        Args:
            database_url: SQLAlchemy URL of the shared database
            doc_id: Key of the shared document
        """
        self.database_url = database_url
        self.doc_id = doc_id
        self.session_factory = create_session_factory(database_url)
        self._subscribers: list[SnapshotCallback] = []
        self._last_revision: Optional[int] = None

    def _open_session(self) -> Session:
        return self.session_factory()

    @property
    def last_revision(self) -> Optional[int]:
        """Revision of the document last pulled or pushed by this session."""
        return self._last_revision

    def pull(self) -> Optional[AppState]:
        """Fetch the shared document.

        Returns:
            The remote state, or None if nobody has written it yet

        Raises:
            SyncError: If the database can't be read or the document is corrupt
        """
        try:
            with self._open_session() as session:
                document = session.get(SharedDocument, self.doc_id)
                if document is None:
                    logger.info("Remote document '%s' does not exist yet", self.doc_id)
                    return None
                payload = document.payload
                revision = document.revision
        except SQLAlchemyError as e:
            raise SyncError(f"Could not read remote document '{self.doc_id}': {e}") from e

        try:
            state = state_from_dict(json.loads(payload))
        except (json.JSONDecodeError, InvalidSnapshotError) as e:
            raise SyncError(f"Remote document '{self.doc_id}' is corrupt: {e}") from e

        self._last_revision = revision
        logger.info("Pulled remote document '%s' (revision %d)", self.doc_id, revision)
        return state

    def push(self, state: AppState) -> int:
        """Overwrite the shared document with the given state.

        Returns:
            New revision number

        Raises:
            SyncError: If the database write fails
        """
        payload = json.dumps(state_to_dict(state), ensure_ascii=False)
        try:
            with self._open_session() as session:
                document = session.get(SharedDocument, self.doc_id)
                if document is None:
                    document = SharedDocument(doc_id=self.doc_id, revision=0)
                    session.add(document)
                document.payload = payload
                document.revision = (document.revision or 0) + 1
                document.updated_at = datetime.now(UTC)
                revision = document.revision
                session.commit()
        except SQLAlchemyError as e:
            raise SyncError(f"Could not write remote document '{self.doc_id}': {e}") from e

        self._last_revision = revision
        logger.info("Pushed remote document '%s' (revision %d)", self.doc_id, revision)
        return revision

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register a callback for remote snapshots delivered by poll().

        Returns:
            Function that removes the callback
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def remote_revision(self) -> Optional[int]:
        """Return the current revision of the shared document, if it exists.

        Raises:
            SyncError: If the database can't be read
        """
        try:
            with self._open_session() as session:
                document = session.get(SharedDocument, self.doc_id)
                return document.revision if document is not None else None
        except SQLAlchemyError as e:
            raise SyncError(f"Could not read remote document '{self.doc_id}': {e}") from e

    def poll(self) -> bool:
        """Deliver the remote state to subscribers if it changed since last seen.

        Returns:
            True if a new snapshot was delivered

        Raises:
            SyncError: If the database can't be read or the document is corrupt
        """
        revision = self.remote_revision()
        if revision is None or revision == self._last_revision:
            return False

        state = self.pull()
        if state is None:
            return False
        for callback in list(self._subscribers):
            callback(state)
        return True
