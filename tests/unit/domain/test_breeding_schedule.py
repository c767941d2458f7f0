from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from src.application.errors import InvariantViolation
from src.application.services.breeding_schedule import derive_follow_ups, resolved_entry_types
from src.application.services.breeding_transitions import TransitionResult, apply_event
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import BreedingEvent
from src.domain.models.breeding_settings import BreedingSettings
from src.domain.models.calendar_entry import CalendarEventType, CalendarStatus
from src.domain.value_objects.production_status import ProductionStatus


def _follow_ups(animal, event_type, when, settings, **details):
    event = BreedingEvent.create(
        farm_id=animal.farm_id,
        animal_id=animal.id,
        event_type=event_type,
        event_date=when,
        **details,
    )
    result = apply_event(animal, event, settings)
    return event, result, derive_follow_ups(animal, event, result, settings)


@pytest.fixture()
def farm_id():
    return uuid4()


def test_insemination_schedules_pregnancy_check(farm_id):
    settings = BreedingSettings(farm_id=farm_id, pregnancy_check_days=45)
    heifer = Animal.create(farm_id=farm_id, tag="H-1")
    event, _, entries = _follow_ups(heifer, "insemination", date(2024, 1, 1), settings)
    assert [(e.event_type, e.scheduled_date) for e in entries] == [
        ("pregnancy_check", date(2024, 2, 15))
    ]
    assert entries[0].source_event_id == event.id
    assert entries[0].status == CalendarStatus.SCHEDULED.value


def test_insemination_without_auto_schedule_creates_nothing(farm_id):
    settings = BreedingSettings(farm_id=farm_id, auto_schedule_pregnancy_check=False)
    heifer = Animal.create(farm_id=farm_id, tag="H-1")
    _, _, entries = _follow_ups(heifer, "insemination", date(2024, 1, 1), settings)
    assert entries == []


def test_positive_check_schedules_dry_off_and_calving(farm_id):
    settings = BreedingSettings.defaults(farm_id)
    cow = Animal.create(farm_id=farm_id, tag="C-1", production_status="served")
    _, _, entries = _follow_ups(
        cow, "pregnancy_check", date(2024, 2, 15), settings, pregnancy_result="pregnant"
    )
    scheduled = {e.event_type: e.scheduled_date for e in entries}
    assert scheduled == {
        "dry_off_scheduled": date(2024, 9, 22),
        "calving_expected": date(2024, 11, 21),
    }


def test_calving_expected_is_unconditional(farm_id):
    settings = BreedingSettings(farm_id=farm_id, auto_create_dry_off=False)
    cow = Animal.create(farm_id=farm_id, tag="C-1", production_status="served")
    _, _, entries = _follow_ups(
        cow, "pregnancy_check", date(2024, 2, 15), settings, pregnancy_result="pregnant"
    )
    assert [e.event_type for e in entries] == ["calving_expected"]


def test_calving_schedules_breeding_eligible_regardless_of_toggles(farm_id):
    settings = BreedingSettings(
        farm_id=farm_id,
        auto_schedule_pregnancy_check=False,
        auto_create_dry_off=False,
        auto_create_lactation=False,
    )
    cow = Animal.create(farm_id=farm_id, tag="C-1", production_status="served")
    _, result, entries = _follow_ups(cow, "calving", date(2025, 1, 10), settings)
    assert result.new_status is ProductionStatus.LACTATING
    assert [(e.event_type, e.scheduled_date) for e in entries] == [
        ("breeding_eligible", date(2025, 3, 11))
    ]


def test_heat_detection_and_open_check_schedule_nothing(farm_id):
    settings = BreedingSettings.defaults(farm_id)
    cow = Animal.create(farm_id=farm_id, tag="C-1", production_status="served")
    assert _follow_ups(cow, "heat_detection", date(2024, 2, 1), settings)[2] == []
    assert (
        _follow_ups(
            cow, "pregnancy_check", date(2024, 2, 15), settings, pregnancy_result="not_pregnant"
        )[2]
        == []
    )


def test_follow_up_before_trigger_is_an_invariant_violation(farm_id):
    settings = BreedingSettings.defaults(farm_id)
    cow = Animal.create(farm_id=farm_id, tag="C-1", production_status="served")
    event = BreedingEvent.create(
        farm_id=farm_id,
        animal_id=cow.id,
        event_type="pregnancy_check",
        event_date=date(2024, 2, 15),
        pregnancy_result="pregnant",
    )
    broken = TransitionResult(
        previous_status=ProductionStatus.SERVED,
        new_status=ProductionStatus.SERVED,
        field_updates={"expected_calving_date": date(2024, 3, 1)},
    )
    with pytest.raises(InvariantViolation):
        derive_follow_ups(cow, event, broken, settings)


def test_resolution_rules(farm_id):
    settings = BreedingSettings.defaults(farm_id)
    cow = Animal.create(farm_id=farm_id, tag="C-1", production_status="served")
    event, result, _ = _follow_ups(
        cow, "pregnancy_check", date(2024, 2, 15), settings, pregnancy_result="not_pregnant"
    )
    assert resolved_entry_types(event, result) == {
        CalendarEventType.PREGNANCY_CHECK: CalendarStatus.COMPLETED,
        CalendarEventType.CALVING_EXPECTED: CalendarStatus.CANCELLED,
        CalendarEventType.DRY_OFF_SCHEDULED: CalendarStatus.CANCELLED,
    }

    event, result, _ = _follow_ups(cow, "calving", date(2024, 11, 20), settings)
    assert resolved_entry_types(event, result) == {
        CalendarEventType.CALVING_EXPECTED: CalendarStatus.COMPLETED,
        CalendarEventType.DRY_OFF_SCHEDULED: CalendarStatus.CANCELLED,
    }


def test_reinsemination_cancels_previous_pregnancy_check(farm_id):
    settings = BreedingSettings.defaults(farm_id)
    cow = Animal.create(farm_id=farm_id, tag="C-1", production_status="served")
    cow.service_date = date(2024, 1, 1)
    event, result, entries = _follow_ups(cow, "insemination", date(2024, 1, 22), settings)
    assert resolved_entry_types(event, result) == {
        CalendarEventType.BREEDING_ELIGIBLE: CalendarStatus.COMPLETED,
        CalendarEventType.PREGNANCY_CHECK: CalendarStatus.CANCELLED,
    }
    assert [e.scheduled_date for e in entries] == [date(2024, 3, 7)]


def test_backdated_event_schedules_and_resolves_nothing(farm_id):
    settings = BreedingSettings.defaults(farm_id)
    cow = Animal.create(farm_id=farm_id, tag="C-1", production_status="served")
    cow.service_date = date(2024, 3, 1)
    event, result, entries = _follow_ups(
        cow, "pregnancy_check", date(2024, 2, 15), settings, pregnancy_result="pregnant"
    )
    assert result.out_of_order
    assert entries == []
    assert resolved_entry_types(event, result) == {}
