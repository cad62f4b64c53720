"""Configuration for rentsheet."""

import os
from dataclasses import dataclass
from typing import Optional

from rentsheet.database.factories import DEFAULT_DOCUMENT_ID
from rentsheet.domain.monthly import DEFAULT_SETTLEMENT_THRESHOLD


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        db_path: Local SQLite file, None for the default location.
        remote_url: SQLAlchemy URL of the shared database, None for local-only.
        document_id: Key of the shared document.
        settlement_threshold: Differences below this amount count as settled.
        log_level: Logging level name.
    """

    db_path: Optional[str] = None
    remote_url: Optional[str] = None
    document_id: str = DEFAULT_DOCUMENT_ID
    settlement_threshold: float = DEFAULT_SETTLEMENT_THRESHOLD
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: If RENTSHEET_SETTLEMENT_THRESHOLD is not a number
        """
        raw_threshold = os.getenv("RENTSHEET_SETTLEMENT_THRESHOLD")
        threshold = DEFAULT_SETTLEMENT_THRESHOLD
        if raw_threshold:
            try:
                threshold = float(raw_threshold)
            except ValueError as e:
                raise ValueError(
                    f"RENTSHEET_SETTLEMENT_THRESHOLD must be a number, got '{raw_threshold}'"
                ) from e

        return cls(
            db_path=os.getenv("RENTSHEET_DB_PATH") or None,
            remote_url=os.getenv("RENTSHEET_REMOTE_URL") or None,
            document_id=os.getenv("RENTSHEET_DOCUMENT_ID") or DEFAULT_DOCUMENT_ID,
            settlement_threshold=threshold,
            log_level=os.getenv("RENTSHEET_LOG_LEVEL", "WARNING").upper(),
        )
