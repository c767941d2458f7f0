from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_settings import BreedingSettings


@dataclass(slots=True)
class UpdateBreedingSettingsInput:
    default_gestation_days: int | None = None
    pregnancy_check_days: int | None = None
    days_pregnant_at_dryoff: int | None = None
    postpartum_breeding_delay_days: int | None = None
    minimum_breeding_age_months: int | None = None
    default_cycle_interval: int | None = None
    auto_schedule_pregnancy_check: bool | None = None
    auto_create_dry_off: bool | None = None
    auto_create_lactation: bool | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: UpdateBreedingSettingsInput,
) -> BreedingSettings:
    current = await uow.breeding_settings.get(farm_id) or BreedingSettings.defaults(farm_id)
    changes = {
        f.name: getattr(payload, f.name)
        for f in fields(payload)
        if getattr(payload, f.name) is not None
    }
    candidate = replace(current, **changes, updated_at=datetime.now(timezone.utc))
    problems = candidate.problems()
    if problems:
        raise ValidationError("Invalid breeding settings", details={"problems": problems})
    return await uow.breeding_settings.upsert(candidate)
