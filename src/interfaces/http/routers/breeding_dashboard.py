from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends

from src.application.use_cases.breeding import get_alerts, get_stats
from src.config.settings import Settings
from src.interfaces.http.deps import get_app_settings, get_farm_id, get_uow
from src.interfaces.http.schemas.breeding import AlertResponse, BreedingStatsResponse
from src.utils.datetime_tz import local_today

router = APIRouter(prefix="/breeding", tags=["breeding-dashboard"])


@router.get("/stats", response_model=BreedingStatsResponse)
async def breeding_stats(
    as_of: date | None = None,
    farm_id: UUID = Depends(get_farm_id),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    return await get_stats.execute(
        uow, farm_id, as_of or local_today(settings.default_timezone)
    )


@router.get("/alerts", response_model=list[AlertResponse])
async def breeding_alerts(
    as_of: date | None = None,
    farm_id: UUID = Depends(get_farm_id),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    return await get_alerts.execute(
        uow, farm_id, as_of or local_today(settings.default_timezone)
    )
