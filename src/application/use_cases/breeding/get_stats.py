from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services.breeding_stats import compute_stats
from src.application.use_cases.breeding import get_breeding_settings
from src.domain.models.breeding_stats import BreedingStats


async def execute(uow: UnitOfWork, farm_id: UUID, as_of: date | None = None) -> BreedingStats:
    as_of = as_of or datetime.now(timezone.utc).date()
    settings = await get_breeding_settings.execute(uow, farm_id)
    events = await uow.breeding_events.list_by_farm(farm_id)
    return compute_stats(
        farm_id, events, as_of, gestation_days=settings.default_gestation_days
    )
