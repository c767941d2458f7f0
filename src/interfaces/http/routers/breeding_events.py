from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status

from src.application.events.dispatcher import dispatch_events
from src.application.use_cases.breeding import check_eligibility, list_events, submit_event
from src.config.settings import Settings
from src.domain.models.breeding_event import CalfDetails
from src.interfaces.http.deps import get_app_settings, get_farm_id, get_uow
from src.interfaces.http.schemas.breeding import (
    BreedingEventCreate,
    BreedingEventResponse,
    EligibilityResponse,
    SubmitEventResponse,
)
from src.utils.datetime_tz import local_today

router = APIRouter(prefix="/breeding", tags=["breeding"])


@router.post(
    "/events", response_model=SubmitEventResponse, status_code=status.HTTP_201_CREATED
)
async def submit_event_endpoint(
    payload: BreedingEventCreate,
    background_tasks: BackgroundTasks,
    farm_id: UUID = Depends(get_farm_id),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    data = payload.model_dump(exclude={"calf"})
    calf = CalfDetails(**payload.calf.model_dump()) if payload.calf else None
    input_data = submit_event.SubmitEventInput(**data, calf=calf)
    result = await submit_event.execute(
        uow,
        farm_id,
        input_data,
        today=local_today(settings.default_timezone),
        future_tolerance_days=settings.breeding_future_tolerance_days,
        duplicate_window_days=settings.breeding_duplicate_window_days,
        strict=settings.breeding_strict_transitions,
    )

    # Publish domain events in background (post-commit)
    events = uow.drain_events()
    if events:
        background_tasks.add_task(dispatch_events, events)
    return result


@router.get("/events", response_model=list[BreedingEventResponse])
async def list_events_endpoint(
    animal_id: UUID | None = None,
    event_type: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
):
    return await list_events.execute(
        uow, farm_id, animal_id=animal_id, event_type=event_type, limit=limit
    )


@router.get("/animals/{animal_id}/eligibility", response_model=EligibilityResponse)
async def eligibility_endpoint(
    animal_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    result = await check_eligibility.execute(
        uow, farm_id, animal_id, today=local_today(settings.default_timezone)
    )
    return EligibilityResponse(
        animal_id=animal_id,
        can_breed=result.can_breed,
        reasons=result.reasons,
        blockers=result.blockers,
        recommendations=result.recommendations,
        next_breeding_date=result.next_breeding_date,
    )
