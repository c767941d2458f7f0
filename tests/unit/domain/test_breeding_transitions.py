from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from src.application.errors import (
    AnimalNotFound,
    InvalidEventDate,
    InvalidTransition,
    ValidationError,
)
from src.application.services.breeding_transitions import apply_event, validate_event
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import BreedingEvent
from src.domain.models.breeding_settings import BreedingSettings
from src.domain.value_objects.production_status import ProductionStatus


def make_animal(status: str = "heifer", **overrides) -> Animal:
    animal = Animal.create(farm_id=uuid4(), tag="A-1", production_status=status)
    for key, value in overrides.items():
        setattr(animal, key, value)
    return animal


def make_event(animal: Animal, event_type: str, when: date, **details) -> BreedingEvent:
    return BreedingEvent.create(
        farm_id=animal.farm_id,
        animal_id=animal.id,
        event_type=event_type,
        event_date=when,
        **details,
    )


@pytest.fixture()
def settings() -> BreedingSettings:
    return BreedingSettings.defaults(uuid4())


def test_heat_detection_is_informational(settings):
    animal = make_animal("lactating")
    result = apply_event(animal, make_event(animal, "heat_detection", date(2024, 1, 1)), settings)
    assert result.new_status is ProductionStatus.LACTATING
    assert result.field_updates == {}
    assert result.warnings == []


@pytest.mark.parametrize("status", ["heifer", "dry", "lactating"])
def test_insemination_moves_to_served(settings, status):
    animal = make_animal(status)
    result = apply_event(animal, make_event(animal, "insemination", date(2024, 1, 1)), settings)
    assert result.new_status is ProductionStatus.SERVED
    assert result.field_updates["service_date"] == date(2024, 1, 1)
    assert result.field_updates["pre_service_status"] == status
    assert result.field_updates["production_status"] == "served"
    assert result.warnings == []


def test_positive_check_sets_expected_calving(settings):
    animal = make_animal("served", service_date=date(2024, 1, 1), pre_service_status="heifer")
    event = make_event(
        animal, "pregnancy_check", date(2024, 2, 15), pregnancy_result="pregnant"
    )
    result = apply_event(animal, event, settings)
    assert result.new_status is ProductionStatus.SERVED
    assert not result.status_changed
    assert result.field_updates == {"expected_calving_date": date(2024, 11, 21)}


@pytest.mark.parametrize("pre_service", ["heifer", "dry", "lactating", None])
def test_open_check_never_leaves_animal_served(settings, pre_service):
    animal = make_animal(
        "served", service_date=date(2024, 1, 1), pre_service_status=pre_service
    )
    event = make_event(
        animal, "pregnancy_check", date(2024, 2, 15), pregnancy_result="not_pregnant"
    )
    result = apply_event(animal, event, settings)
    assert result.new_status is not ProductionStatus.SERVED
    assert result.new_status.value == (pre_service or "heifer")
    assert result.field_updates["service_date"] is None
    assert result.field_updates["expected_calving_date"] is None


def test_uncertain_check_changes_nothing(settings):
    animal = make_animal("served", service_date=date(2024, 1, 1))
    event = make_event(
        animal, "pregnancy_check", date(2024, 2, 15), pregnancy_result="uncertain"
    )
    result = apply_event(animal, event, settings)
    assert result.new_status is ProductionStatus.SERVED
    assert result.field_updates == {}


def test_calving_moves_to_lactating_and_requests_calf(settings):
    animal = make_animal(
        "served", service_date=date(2024, 1, 1), expected_calving_date=date(2024, 10, 8)
    )
    event = make_event(animal, "calving", date(2024, 10, 6), create_calf=True)
    result = apply_event(animal, event, settings)
    assert result.new_status is ProductionStatus.LACTATING
    assert result.field_updates["service_date"] is None
    assert result.field_updates["expected_calving_date"] is None
    assert result.calf_requested
    assert result.warnings == []


def test_calving_out_of_order_is_applied_with_warning(settings):
    animal = make_animal("heifer")
    result = apply_event(animal, make_event(animal, "calving", date(2024, 10, 6)), settings)
    assert result.new_status is ProductionStatus.LACTATING
    assert len(result.warnings) == 1
    assert "heifer" in result.warnings[0]


def test_unexpected_pair_raises_in_strict_mode(settings):
    animal = make_animal("heifer")
    with pytest.raises(InvalidTransition):
        apply_event(animal, make_event(animal, "calving", date(2024, 10, 6)), settings, strict=True)


def test_reinsemination_moves_service_date(settings):
    animal = make_animal("served", service_date=date(2024, 1, 1), pre_service_status="dry")
    result = apply_event(animal, make_event(animal, "insemination", date(2024, 1, 22)), settings)
    assert result.new_status is ProductionStatus.SERVED
    assert result.field_updates == {"service_date": date(2024, 1, 22)}
    assert result.warnings


def test_same_day_reinsemination_is_a_resubmission(settings):
    animal = make_animal("served", service_date=date(2024, 1, 1), pre_service_status="dry")
    result = apply_event(animal, make_event(animal, "insemination", date(2024, 1, 1)), settings)
    assert result.field_updates == {}
    assert result.warnings == []


def test_backdated_open_check_leaves_current_cycle_alone(settings):
    animal = make_animal("served", service_date=date(2024, 3, 1), pre_service_status="heifer")
    event = make_event(
        animal, "pregnancy_check", date(2024, 2, 15), pregnancy_result="not_pregnant"
    )
    result = apply_event(animal, event, settings)
    assert result.out_of_order
    assert result.new_status is ProductionStatus.SERVED
    assert result.field_updates == {}
    assert len(result.warnings) == 1
    assert "2024-03-01" in result.warnings[0]


def test_backdated_insemination_keeps_service_date(settings):
    animal = make_animal("served", service_date=date(2024, 3, 1), pre_service_status="heifer")
    result = apply_event(animal, make_event(animal, "insemination", date(2024, 2, 1)), settings)
    assert result.out_of_order
    assert result.field_updates == {}
    assert result.warnings


def test_backdated_event_raises_in_strict_mode(settings):
    animal = make_animal("served", service_date=date(2024, 3, 1))
    with pytest.raises(InvalidTransition):
        apply_event(
            animal,
            make_event(animal, "calving", date(2024, 2, 20)),
            settings,
            strict=True,
        )


def test_validate_rejects_future_dates():
    animal = make_animal()
    event = make_event(animal, "heat_detection", date(2024, 3, 5))
    with pytest.raises(InvalidEventDate):
        validate_event(animal, event, today=date(2024, 3, 1), future_tolerance_days=1)
    assert validate_event(animal, event, today=date(2024, 3, 4), future_tolerance_days=1) is animal


def test_validate_rejects_animal_of_other_farm():
    animal = make_animal()
    event = BreedingEvent.create(
        farm_id=uuid4(), animal_id=animal.id, event_type="insemination", event_date=date(2024, 1, 1)
    )
    with pytest.raises(AnimalNotFound):
        validate_event(animal, event, today=date(2024, 1, 2))
    with pytest.raises(AnimalNotFound):
        validate_event(None, event, today=date(2024, 1, 2))


def test_validate_rejects_unknown_type_and_missing_result():
    animal = make_animal("served")
    with pytest.raises(ValidationError):
        validate_event(animal, make_event(animal, "abortion", date(2024, 1, 1)), today=date(2024, 1, 2))
    with pytest.raises(ValidationError) as excinfo:
        validate_event(
            animal, make_event(animal, "pregnancy_check", date(2024, 1, 1)), today=date(2024, 1, 2)
        )
    assert excinfo.value.code == "validation_error"


def test_validate_rejects_unknown_detail_choices():
    animal = make_animal()
    with pytest.raises(ValidationError):
        validate_event(
            animal,
            make_event(animal, "insemination", date(2024, 1, 1), insemination_method="embryo"),
            today=date(2024, 1, 2),
        )
