"""Export and import domain service.

Produces the monthly CSV report, the empty CSV template and the full JSON
backup, and reads a backup back into a state.
"""

import csv
import io
import json
import logging
from datetime import date
from typing import Iterable, Sequence

from rentsheet.domain.entities import (
    AppState,
    Property,
    ServiceType,
    Transaction,
    TransactionAgent,
)
from rentsheet.domain.errors import INVALID_SNAPSHOT, InvalidSnapshotError
from rentsheet.domain.periods import is_relevant
from rentsheet.domain.snapshot import state_from_dict, state_to_dict

logger = logging.getLogger(__name__)

PERIOD_HEADER = [
    "Date",
    "Property",
    "Type",
    "Category/Description",
    "Handler",
    "Income(+)",
    "Expense(-)",
    "ServicesPaid",
]

# Column order of the service block
SERVICE_COLUMNS: tuple[tuple[str, ServiceType], ...] = (
    ("Water", ServiceType.WATER),
    ("Light", ServiceType.LIGHT),
    ("Gas", ServiceType.GAS),
    ("ABL", ServiceType.ABL),
)

TEMPLATE_HEADER = [
    "Date",
    "Property",
    "Concept",
    "Handler (ME/SISTER)",
    "Income",
    "Expense",
    "Notes",
]

TEMPLATE_FILENAME = "rent_control_template.csv"

HANDLER_LABELS = {
    TransactionAgent.ME: "Me",
    TransactionAgent.SISTER: "Sister",
}


def period_filename(month: int, year: int) -> str:
    """Return the download name of a monthly report."""
    return f"rent_control_{month + 1}_{year}.csv"


def backup_filename(today: date | None = None) -> str:
    """Return the download name of a full backup stamped with the export date."""
    return f"rent_backup_{(today or date.today()).isoformat()}.json"


def format_amount(amount: float) -> str:
    """Render an amount without a trailing .0 for whole values."""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def _write_csv(rows: Iterable[Sequence[str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


class ExportService:
    """Service for turning a state into downloadable files and back."""

    def export_period(self, state: AppState, month: int, year: int) -> bytes:
        """Export the transactions and service status of a month as CSV.

        A transaction is included when its date falls in the month or when it
        is attributed to the month.

        Args:
            state: Current application state
            month: Zero-based month
            year: Year

        Returns:
            UTF-8 encoded CSV content
        """
        rows: list[list[str]] = [["Monthly Report", f"{month + 1}/{year}"], []]
        rows.append(PERIOD_HEADER)

        relevant = [t for t in state.transactions if is_relevant(t, month, year)]
        for txn in relevant:
            rows.append(self._transaction_row(state, txn))

        has_records = any(
            r.month == month and r.year == year for r in state.service_records
        )
        if has_records:
            rows.append([])
            rows.append(["Service Status (SI=paid NO=pending)"])
            rows.append(["Property", *(label for label, _ in SERVICE_COLUMNS)])
            for prop in state.properties:
                record = state.find_service_record(prop.id, month, year)
                if record is None:
                    continue
                rows.append(
                    [
                        prop.name,
                        *(
                            "SI" if record.services.get(service) else "NO"
                            for _, service in SERVICE_COLUMNS
                        ),
                    ]
                )

        logger.debug("Exported %d transactions for %02d/%d", len(relevant), month + 1, year)
        return _write_csv(rows)

    def export_template(self, properties: Sequence[Property]) -> bytes:
        """Export an empty CSV template with one example row per property.

        Args:
            properties: Properties to prefill

        Returns:
            UTF-8 encoded CSV content
        """
        rows: list[list[str]] = [
            ["RENT CONTROL TEMPLATE", ""],
            ["Instructions:", "Fill one row for each money movement."],
            [],
            TEMPLATE_HEADER,
        ]
        for prop in properties:
            rows.append(
                ["", prop.name, "Rent collection", "ME", format_amount(prop.rent_amount), "", ""]
            )
        return _write_csv(rows)

    def export_full(self, state: AppState) -> bytes:
        """Export the full state as pretty-printed JSON."""
        return json.dumps(state_to_dict(state), indent=2, ensure_ascii=False).encode("utf-8")

    def import_full(self, data: bytes | str) -> AppState:
        """Parse a full JSON backup into a new state.

        Args:
            data: File content

        Returns:
            Normalized AppState

        Raises:
            InvalidSnapshotError: If the content isn't JSON or lacks required keys
        """
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8-sig")
            document = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidSnapshotError(f"{INVALID_SNAPSHOT}: {e}") from e
        return state_from_dict(document)

    def _transaction_row(self, state: AppState, txn: Transaction) -> list[str]:
        prop = state.get_property(txn.property_id)
        if txn.is_income:
            kind = "Rent"
            detail = txn.description
        else:
            kind = "Expense"
            detail = txn.category.value if txn.category else "Expense"
        return [
            txn.date.strftime("%d/%m/%Y"),
            prop.name if prop else "Unknown",
            kind,
            detail,
            HANDLER_LABELS[txn.handled_by],
            format_amount(txn.amount) if txn.is_income else "0",
            format_amount(txn.amount) if txn.is_expense else "0",
            "-",
        ]
