from __future__ import annotations

from datetime import date
from uuid import uuid4

from src.application.services.breeding_eligibility import check_breeding_eligibility
from src.domain.models.animal import Animal
from src.domain.models.breeding_settings import BreedingSettings

TODAY = date(2024, 6, 1)


def _animal(**fields) -> Animal:
    animal = Animal.create(farm_id=uuid4(), tag="E-1", birth_date=date(2022, 1, 1))
    for key, value in fields.items():
        setattr(animal, key, value)
    return animal


def test_adult_heifer_can_breed():
    animal = _animal()
    result = check_breeding_eligibility(animal, BreedingSettings.defaults(animal.farm_id), today=TODAY)
    assert result.can_breed
    assert result.blockers == []
    assert any("First time breeding" in r for r in result.recommendations)


def test_males_and_young_animals_are_blocked():
    settings = BreedingSettings.defaults(uuid4())
    bull = _animal(sex="MALE")
    assert not check_breeding_eligibility(bull, settings, today=TODAY).can_breed

    young = _animal(birth_date=date(2024, 1, 1))
    result = check_breeding_eligibility(young, settings, today=TODAY)
    assert not result.can_breed
    assert "Too young" in result.blockers[0]


def test_pregnant_animal_is_blocked():
    animal = _animal(production_status="served", expected_calving_date=date(2024, 9, 1))
    result = check_breeding_eligibility(animal, BreedingSettings.defaults(animal.farm_id), today=TODAY)
    assert not result.can_breed
    assert result.blockers == ["Animal is currently pregnant"]


def test_postpartum_delay_reports_next_breeding_date():
    animal = _animal(production_status="lactating")
    result = check_breeding_eligibility(
        animal,
        BreedingSettings.defaults(animal.farm_id),
        today=TODAY,
        last_calving_date=date(2024, 5, 1),
    )
    assert not result.can_breed
    assert result.next_breeding_date == date(2024, 6, 30)


def test_recent_breeding_is_a_recommendation_not_a_blocker():
    animal = _animal(production_status="dry")
    result = check_breeding_eligibility(
        animal,
        BreedingSettings.defaults(animal.farm_id),
        today=TODAY,
        last_breeding_date=date(2024, 5, 25),
    )
    assert result.can_breed
    assert any("Recently bred 7 days ago" in r for r in result.recommendations)


def test_sick_animal_is_blocked():
    animal = _animal(health_status="Sick")
    result = check_breeding_eligibility(animal, BreedingSettings.defaults(animal.farm_id), today=TODAY)
    assert not result.can_breed
