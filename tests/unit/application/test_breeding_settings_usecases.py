from __future__ import annotations

from types import SimpleNamespace
from uuid import uuid4

import pytest

from src.application.errors import InvariantViolation, ValidationError
from src.application.use_cases.breeding import get_breeding_settings, update_breeding_settings
from src.domain.models.breeding_settings import BreedingSettings


class StubSettingsRepo:
    def __init__(self, stored: BreedingSettings | None = None) -> None:
        self.stored = stored
        self.upserts = 0

    async def get(self, farm_id):
        return self.stored

    async def upsert(self, settings):
        self.upserts += 1
        self.stored = settings
        return settings


@pytest.mark.asyncio
async def test_missing_settings_fall_back_to_defaults():
    farm_id = uuid4()
    uow = SimpleNamespace(breeding_settings=StubSettingsRepo())
    settings = await get_breeding_settings.execute(uow, farm_id)
    assert settings.farm_id == farm_id
    assert settings.default_gestation_days == 280
    assert settings.pregnancy_check_days == 45
    assert settings.dry_period_days == 60


@pytest.mark.asyncio
async def test_inconsistent_stored_settings_are_an_invariant_violation():
    farm_id = uuid4()
    broken = BreedingSettings(farm_id=farm_id, days_pregnant_at_dryoff=300)
    uow = SimpleNamespace(breeding_settings=StubSettingsRepo(broken))
    with pytest.raises(InvariantViolation):
        await get_breeding_settings.execute(uow, farm_id)


@pytest.mark.asyncio
async def test_partial_update_merges_with_current_values():
    farm_id = uuid4()
    repo = StubSettingsRepo()
    uow = SimpleNamespace(breeding_settings=repo)
    updated = await update_breeding_settings.execute(
        uow,
        farm_id,
        update_breeding_settings.UpdateBreedingSettingsInput(
            pregnancy_check_days=35, auto_create_dry_off=False
        ),
    )
    assert updated.pregnancy_check_days == 35
    assert updated.auto_create_dry_off is False
    assert updated.default_gestation_days == 280
    assert repo.upserts == 1


@pytest.mark.asyncio
async def test_invalid_update_is_rejected():
    repo = StubSettingsRepo()
    uow = SimpleNamespace(breeding_settings=repo)
    with pytest.raises(ValidationError) as exc_info:
        await update_breeding_settings.execute(
            uow,
            uuid4(),
            update_breeding_settings.UpdateBreedingSettingsInput(
                default_gestation_days=200, pregnancy_check_days=0
            ),
        )
    assert len(exc_info.value.details["problems"]) == 2
    assert repo.upserts == 0
