from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends

from src.application.use_cases.breeding import list_calendar
from src.interfaces.http.deps import get_farm_id, get_uow
from src.interfaces.http.schemas.breeding import CalendarEntryResponse

router = APIRouter(prefix="/breeding/calendar", tags=["breeding-calendar"])


@router.get("", response_model=list[CalendarEntryResponse])
async def list_calendar_endpoint(
    status: str | None = None,
    animal_id: UUID | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
):
    return await list_calendar.execute(
        uow,
        farm_id,
        status=status,
        animal_id=animal_id,
        date_from=date_from,
        date_to=date_to,
    )
