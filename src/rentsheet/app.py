"""Application shell owning the in-memory state.

User actions mutate the state in memory first, then the whole snapshot is
mirrored to the local store and, when configured, to the shared remote
document. A failed mirror never rolls the in-memory change back.
"""

import logging
from typing import Any, Optional

from rentsheet.database.base import StateStore
from rentsheet.database.remote import RemoteDocumentStore
from rentsheet.domain.entities import (
    AppState,
    MonthlySheet,
    Property,
    ServiceRecord,
    ServiceType,
    Transaction,
    YearlySummary,
)
from rentsheet.domain.errors import StorageError, SyncError
from rentsheet.domain.monthly import DEFAULT_SETTLEMENT_THRESHOLD, MonthlySheetService
from rentsheet.domain.property import PropertyService
from rentsheet.domain.service_record import ServiceRecordService
from rentsheet.domain.snapshot import ensure_common_property, initial_state
from rentsheet.domain.transaction import TransactionService
from rentsheet.domain.yearly import YearlySummaryService

logger = logging.getLogger(__name__)


class RentApp:
    """Orchestrates state mutations, persistence and sheet building."""

    def __init__(
        self,
        store: StateStore,
        remote: Optional[RemoteDocumentStore] = None,
        settlement_threshold: float = DEFAULT_SETTLEMENT_THRESHOLD,
    ):
        """Initialize the application shell.

        Args:
            store: Local store for the snapshot
            remote: Optional shared remote document
            settlement_threshold: Dead-zone of the monthly settlement
        """
        self.store = store
        self.remote = remote
        self.state = AppState()
        self.monthly_service = MonthlySheetService(settlement_threshold)
        self.yearly_service = YearlySummaryService()
        self._unsubscribe = None

    def load(self, sync: bool = True) -> AppState:
        """Load the local snapshot and, if configured, adopt a newer remote one.

        Args:
            sync: Check the remote document after loading

        Returns:
            The loaded state
        """
        loaded = self.store.load_state()
        if loaded is None:
            # First run: seed locally only, a shared document may already exist
            self.state = initial_state()
            try:
                self.store.save_state(self.state)
            except StorageError as e:
                logger.error("Local save failed: %s", e)
        else:
            self.state = loaded

        if self.remote is not None:
            if self._unsubscribe is None:
                self._unsubscribe = self.remote.subscribe(self.on_remote_snapshot)
            if sync:
                self.refresh_from_remote()
        return self.state

    def close(self) -> None:
        """Stop listening to the remote document."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # Persistence

    def persist(self) -> None:
        """Mirror the current state locally and remotely.

        Failures are logged; the in-memory state stays as the truth of this
        session until the next successful write.
        """
        try:
            self.store.save_state(self.state)
        except StorageError as e:
            logger.error("Local save failed: %s", e)
        self.push_remote()

    def push_remote(self) -> bool:
        """Push the current state to the remote document, if configured.

        Returns:
            True if the push succeeded
        """
        if self.remote is None:
            return False
        try:
            self.remote.push(self.state)
        except SyncError as e:
            logger.warning("Remote push failed, keeping local state: %s", e)
            return False
        return True

    def refresh_from_remote(self) -> bool:
        """Poll the remote document and adopt it if it changed.

        Returns:
            True if a remote snapshot replaced the local state
        """
        if self.remote is None:
            return False
        try:
            return self.remote.poll()
        except SyncError as e:
            logger.warning("Remote read failed, keeping local state: %s", e)
            return False

    def on_remote_snapshot(self, state: AppState) -> None:
        """Replace the whole local state with a remote snapshot."""
        self.state = ensure_common_property(state)
        try:
            self.store.save_state(self.state)
        except StorageError as e:
            logger.error("Local save of remote snapshot failed: %s", e)
        logger.info("Adopted remote snapshot")

    def replace_state(self, state: AppState) -> None:
        """Replace the whole state (e.g. from an imported backup) and persist it."""
        self.state = ensure_common_property(state)
        self.persist()

    # Mutations

    def add_transaction(self, **fields: Any) -> Transaction:
        txn = TransactionService(self.state).create_transaction(**fields)
        self.persist()
        return txn

    def edit_transaction(self, transaction_id: str, **fields: Any) -> Transaction:
        txn = TransactionService(self.state).update_transaction(transaction_id, **fields)
        self.persist()
        return txn

    def delete_transaction(self, transaction_id: str) -> None:
        TransactionService(self.state).delete_transaction(transaction_id)
        self.persist()

    def create_property(self, **fields: Any) -> Property:
        prop = PropertyService(self.state).create_property(**fields)
        self.persist()
        return prop

    def edit_property(self, property_id: str, **fields: Any) -> Property:
        prop = PropertyService(self.state).update_property(property_id, **fields)
        self.persist()
        return prop

    def toggle_service(
        self, property_id: str, month: int, year: int, service: ServiceType
    ) -> ServiceRecord:
        record = ServiceRecordService(self.state).toggle_service(
            property_id, month, year, service
        )
        self.persist()
        return record

    # Views

    def monthly_sheet(self, month: int, year: int) -> MonthlySheet:
        return self.monthly_service.build_sheet(self.state, month, year)

    def yearly_summary(self, year: int) -> YearlySummary:
        return self.yearly_service.build_summary(self.state, year)
