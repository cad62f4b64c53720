"""Tests for CSV reports and JSON backups."""

import csv
import io
import json
from datetime import date

import pytest

from rentsheet.domain.entities import ServiceRecord, ServiceType
from rentsheet.domain.errors import InvalidSnapshotError
from rentsheet.domain.export import (
    TEMPLATE_FILENAME,
    ExportService,
    backup_filename,
    format_amount,
    period_filename,
)
from rentsheet.domain.snapshot import initial_state


def _rows(content: bytes):
    return list(csv.reader(io.StringIO(content.decode("utf-8"))))


def test_filenames():
    assert period_filename(3, 2024) == "rent_control_4_2024.csv"
    assert backup_filename(date(2024, 5, 7)) == "rent_backup_2024-05-07.json"
    assert TEMPLATE_FILENAME == "rent_control_template.csv"


def test_format_amount():
    assert format_amount(150000.0) == "150000"
    assert format_amount(99.5) == "99.5"


def test_export_period(sample_state, make_transaction):
    sample_state.transactions.append(
        make_transaction("ghost", property_id="gone", amount=10.0, description="Legacy")
    )

    rows = _rows(ExportService().export_period(sample_state, 3, 2024))

    assert rows[0] == ["Monthly Report", "4/2024"]
    assert rows[1] == []
    assert rows[2] == [
        "Date",
        "Property",
        "Type",
        "Category/Description",
        "Handler",
        "Income(+)",
        "Expense(-)",
        "ServicesPaid",
    ]
    assert rows[3] == ["10/04/2024", "Depto Centro", "Rent", "Alquiler abril", "Me", "150000", "0", "-"]
    assert rows[4] == ["10/04/2024", "Depto Centro", "Expense", "REPAIR", "Sister", "0", "50000", "-"]
    assert rows[5][1:3] == ["Casa Quinta", "Rent"]
    assert rows[6][1] == "Unknown"
    # No service records for the month, no service section
    assert len(rows) == 7


def test_export_period_includes_attributed_transactions(sample_state, make_transaction):
    sample_state.transactions.append(
        make_transaction("late", amount=150000.0, txn_date=date(2024, 6, 2), rent_month=4, rent_year=2024)
    )

    may = _rows(ExportService().export_period(sample_state, 4, 2024))
    june = _rows(ExportService().export_period(sample_state, 5, 2024))

    assert len(may) == 4
    assert len(june) == 4


def test_export_period_service_section(sample_state):
    sample_state.service_records.append(
        ServiceRecord(
            id="r1",
            property_id="p1",
            month=3,
            year=2024,
            services={ServiceType.WATER: True, ServiceType.GAS: True},
        )
    )

    rows = _rows(ExportService().export_period(sample_state, 3, 2024))

    assert rows[-4] == []
    assert rows[-3] == ["Service Status (SI=paid NO=pending)"]
    assert rows[-2] == ["Property", "Water", "Light", "Gas", "ABL"]
    assert rows[-1] == ["Depto Centro", "SI", "NO", "SI", "NO"]


def test_export_template():
    state = initial_state()

    rows = _rows(ExportService().export_template(state.properties[:2]))

    assert rows[0][0] == "RENT CONTROL TEMPLATE"
    assert rows[3] == [
        "Date",
        "Property",
        "Concept",
        "Handler (ME/SISTER)",
        "Income",
        "Expense",
        "Notes",
    ]
    assert rows[4] == ["", "Depto Centro", "Rent collection", "ME", "150000", "", ""]
    assert len(rows) == 6


def test_export_full_is_pretty_json(sample_state):
    content = ExportService().export_full(sample_state)

    document = json.loads(content)
    assert set(document) == {"properties", "transactions", "serviceRecords"}
    assert b'\n  "properties"' in content


def test_full_round_trip(sample_state):
    sample_state.service_records.append(
        ServiceRecord(id="r1", property_id="p1", month=3, year=2024, services={ServiceType.GAS: True})
    )
    service = ExportService()

    assert service.import_full(service.export_full(sample_state)) == sample_state


def test_import_accepts_text_and_bom(sample_state):
    service = ExportService()
    text = service.export_full(sample_state).decode("utf-8")

    assert service.import_full(text) == sample_state
    assert service.import_full(b"\xef\xbb\xbf" + text.encode("utf-8")) == sample_state


@pytest.mark.parametrize(
    "content",
    [b"not json", b'{"properties": []}', b"[1, 2]", b"\xff\xfe\x00"],
)
def test_import_invalid_file(content):
    with pytest.raises(InvalidSnapshotError, match="Invalid or corrupted file"):
        ExportService().import_full(content)


def test_import_rejects_nan_amount():
    content = (
        b'{"properties": [{"id": "p1", "name": "Casa"}], "transactions": '
        b'[{"id": "t1", "propertyId": "p1", "date": "2024-04-10", "amount": NaN, '
        b'"type": "INCOME", "rentMonth": 3, "rentYear": 2024}]}'
    )

    with pytest.raises(InvalidSnapshotError, match="non-negative"):
        ExportService().import_full(content)
