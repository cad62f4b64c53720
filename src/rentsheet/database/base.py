"""Abstract state store interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from rentsheet.domain.entities import AppState


class StateStore(ABC):
    """Abstract local store holding one whole-state snapshot."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    @abstractmethod
    def load_state(self) -> Optional[AppState]:
        """Load the last saved snapshot.

        Returns None when nothing was ever saved. A loaded snapshot always
        contains the common property.
        """
        pass

    @abstractmethod
    def save_state(self, state: AppState) -> None:
        """Replace the stored snapshot with the given state, atomically."""
        pass
