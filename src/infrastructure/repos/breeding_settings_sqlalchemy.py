from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.breeding_settings import (
    BreedingSettingsRepository,
)
from src.domain.models.breeding_settings import BreedingSettings
from src.infrastructure.db.orm.breeding_settings import BreedingSettingsORM
from src.utils.datetime_tz import ensure_utc

_FIELDS = (
    "default_gestation_days",
    "pregnancy_check_days",
    "days_pregnant_at_dryoff",
    "postpartum_breeding_delay_days",
    "minimum_breeding_age_months",
    "default_cycle_interval",
    "auto_schedule_pregnancy_check",
    "auto_create_dry_off",
    "auto_create_lactation",
)


class BreedingSettingsSQLAlchemyRepository(BreedingSettingsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingSettingsORM) -> BreedingSettings:
        return BreedingSettings(
            farm_id=orm.farm_id,
            updated_at=ensure_utc(orm.updated_at),
            **{name: getattr(orm, name) for name in _FIELDS},
        )

    async def get(self, farm_id: UUID) -> BreedingSettings | None:
        result = await self.session.execute(
            select(BreedingSettingsORM).where(BreedingSettingsORM.farm_id == farm_id)
        )
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def upsert(self, settings: BreedingSettings) -> BreedingSettings:
        orm = await self.session.get(BreedingSettingsORM, settings.farm_id)
        if orm is None:
            orm = BreedingSettingsORM(
                farm_id=settings.farm_id,
                updated_at=settings.updated_at,
                **{name: getattr(settings, name) for name in _FIELDS},
            )
            self.session.add(orm)
            await self.session.flush()
            return self._to_domain(orm)
        for name in _FIELDS:
            setattr(orm, name, getattr(settings, name))
        orm.updated_at = settings.updated_at
        await self.session.flush()
        return self._to_domain(orm)
