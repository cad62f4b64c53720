"""Tests for property domain service."""

from dataclasses import replace

import pytest

from rentsheet.domain.entities import AppState
from rentsheet.domain.errors import ConflictError, NotFoundError, ValidationError
from rentsheet.domain.property import PropertyService
from rentsheet.domain.snapshot import COMMON_PROPERTY, initial_state


@pytest.fixture
def property_service():
    return PropertyService(initial_state())


def test_create_property(property_service):
    prop = property_service.create_property(
        name="  Casa Sur ", address="Calle 1", tenant_name="Ana", rent_amount=90000, due_day=15
    )

    assert prop.name == "Casa Sur"
    assert prop.rent_amount == 90000.0
    assert not prop.is_common
    assert property_service.get_property(prop.id) == prop
    assert property_service.state.properties[-1] == prop


@pytest.mark.parametrize(
    "fields",
    [
        {"name": ""},
        {"name": "X", "rent_amount": -1},
        {"name": "X", "due_day": 0},
        {"name": "X", "due_day": 32},
    ],
)
def test_create_property_validation(property_service, fields):
    count = len(property_service.state.properties)

    with pytest.raises(ValidationError):
        property_service.create_property(**fields)
    assert len(property_service.state.properties) == count


def test_update_property(property_service):
    updated = property_service.update_property("1", rent_amount=180000, tenant_name="Nuevo")

    assert updated.rent_amount == 180000
    assert updated.tenant_name == "Nuevo"
    assert updated.name == "Depto Centro"
    assert property_service.require_property("1") == updated
    # Position is preserved
    assert property_service.state.properties[0].id == "1"


def test_update_unknown_property(property_service):
    with pytest.raises(NotFoundError):
        property_service.update_property("missing", name="X")


def test_save_rejects_second_common_property(property_service):
    duplicate = replace(COMMON_PROPERTY, id="other-common")

    with pytest.raises(ConflictError):
        property_service.save(duplicate)


def test_save_rejects_changing_common_flag(property_service):
    with pytest.raises(ConflictError):
        property_service.save(replace(COMMON_PROPERTY, is_common=False))
    with pytest.raises(ConflictError):
        property_service.save(replace(property_service.require_property("1"), is_common=True))


def test_save_inserts_new_property():
    service = PropertyService(AppState())

    saved = service.save(COMMON_PROPERTY)

    assert service.state.properties == [COMMON_PROPERTY]
    assert saved == COMMON_PROPERTY


def test_find_property_by_id_or_name(property_service):
    assert property_service.find_property("2").name == "Casa Quinta"
    assert property_service.find_property("casa quinta").id == "2"
    with pytest.raises(NotFoundError):
        property_service.find_property("Nowhere")


def test_list_properties_common_last(property_service):
    property_service.state.properties.insert(0, property_service.state.properties.pop())

    listed = property_service.list_properties()

    assert listed[-1].is_common
    assert [p.id for p in listed[:-1]] == ["1", "2", "3", "4", "5"]
