"""Tests for the service checklist."""

import pytest

from rentsheet.domain.entities import COMMON_PROPERTY_ID, ServiceType
from rentsheet.domain.errors import NotFoundError, ValidationError
from rentsheet.domain.service_record import ServiceRecordService


@pytest.fixture
def record_service(sample_state):
    return ServiceRecordService(sample_state)


def test_first_toggle_creates_record(record_service):
    record = record_service.toggle_service("p1", 3, 2024, ServiceType.GAS)

    assert record.services == {
        ServiceType.LIGHT: False,
        ServiceType.GAS: True,
        ServiceType.WATER: False,
        ServiceType.ABL: False,
    }
    assert record_service.state.service_records == [record]


def test_toggle_flips_existing_record(record_service):
    first = record_service.toggle_service("p1", 3, 2024, ServiceType.GAS)
    second = record_service.toggle_service("p1", 3, 2024, ServiceType.GAS)
    third = record_service.toggle_service("p1", 3, 2024, ServiceType.WATER)

    assert second.id == first.id
    assert second.services[ServiceType.GAS] is False
    assert third.services[ServiceType.WATER] is True
    assert len(record_service.state.service_records) == 1


def test_records_are_per_period(record_service):
    record_service.toggle_service("p1", 3, 2024, ServiceType.GAS)
    record_service.toggle_service("p1", 4, 2024, ServiceType.GAS)
    record_service.toggle_service("p2", 3, 2024, ServiceType.GAS)

    assert len(record_service.state.service_records) == 3


def test_common_property_checklist(record_service):
    record = record_service.toggle_service(COMMON_PROPERTY_ID, 3, 2024, ServiceType.RENTAS)

    assert record.services == {ServiceType.RENTAS: True, ServiceType.EXPENSAS_EXTRA: False}
    with pytest.raises(ValidationError):
        record_service.toggle_service(COMMON_PROPERTY_ID, 3, 2024, ServiceType.GAS)


def test_regular_property_rejects_common_services(record_service):
    with pytest.raises(ValidationError):
        record_service.toggle_service("p1", 3, 2024, ServiceType.RENTAS)


def test_toggle_validation(record_service):
    with pytest.raises(NotFoundError):
        record_service.toggle_service("missing", 3, 2024, ServiceType.GAS)
    with pytest.raises(ValidationError):
        record_service.toggle_service("p1", 12, 2024, ServiceType.GAS)


def test_get_services(record_service):
    assert not any(record_service.get_services("p1", 3, 2024).values())

    record_service.toggle_service("p1", 3, 2024, ServiceType.ABL)

    assert record_service.get_services("p1", 3, 2024)[ServiceType.ABL] is True
