from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID

from src.application.errors import AppError, ConflictError
from src.application.events.models import (
    BreedingEventRecordedEvent,
    FollowUpSchedulingFailedEvent,
    FollowUpsScheduledEvent,
)
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services.breeding_transitions import (
    TransitionResult,
    apply_event,
    validate_event,
)
from src.application.use_cases.breeding import get_breeding_settings, schedule_follow_ups
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import (
    BreedingEvent,
    BreedingEventType,
    CalfDetails,
    PregnancyResult,
)
from src.domain.models.calendar_entry import CalendarEntry
from src.domain.value_objects.production_status import ProductionStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SubmitEventInput:
    animal_id: UUID
    event_type: str
    event_date: date
    notes: str | None = None
    recorded_by: str | None = None
    heat_signs: list[str] | None = None
    heat_action_taken: str | None = None
    insemination_method: str | None = None
    semen_bull_code: str | None = None
    semen_batch: str | None = None
    technician_name: str | None = None
    pregnancy_result: str | None = None
    examination_method: str | None = None
    veterinarian_name: str | None = None
    estimated_due_date: date | None = None
    calving_outcome: str | None = None
    calf: CalfDetails | None = None
    create_calf: bool = False


@dataclass(slots=True)
class SubmitEventOutput:
    event: BreedingEvent
    animal: Animal
    previous_status: str
    new_status: str
    field_updates: dict = field(default_factory=dict)
    calendar_entries: list[CalendarEntry] = field(default_factory=list)
    resolved_entries: list[CalendarEntry] = field(default_factory=list)
    calf_created: Animal | None = None
    warnings: list[str] = field(default_factory=list)
    message: str | None = None


def _build_event(farm_id: UUID, payload: SubmitEventInput) -> BreedingEvent:
    return BreedingEvent.create(
        farm_id=farm_id,
        animal_id=payload.animal_id,
        event_type=payload.event_type,
        event_date=payload.event_date,
        notes=payload.notes,
        recorded_by=payload.recorded_by,
        heat_signs=list(payload.heat_signs or []),
        heat_action_taken=payload.heat_action_taken,
        insemination_method=payload.insemination_method,
        semen_bull_code=payload.semen_bull_code,
        semen_batch=payload.semen_batch,
        technician_name=payload.technician_name,
        pregnancy_result=payload.pregnancy_result,
        examination_method=payload.examination_method,
        veterinarian_name=payload.veterinarian_name,
        estimated_due_date=payload.estimated_due_date,
        calving_outcome=payload.calving_outcome,
        calf=payload.calf,
        create_calf=payload.create_calf,
    )


def default_calf_tag(dam: Animal, calving_date: date) -> str:
    return f"{dam.tag}-{calving_date:%y%m}C"


def _calf_attrs(event: BreedingEvent, dam: Animal) -> dict:
    calf = event.calf or CalfDetails()
    tag = calf.tag_number or default_calf_tag(dam, event.event_date)
    return {
        "tag": tag,
        "name": calf.name or f"Calf {tag}",
        "sex": (calf.gender or "female").upper(),
        "breed": calf.breed or dam.breed,
        "birth_date": event.event_date,
        "weight_kg": calf.weight_kg,
        "health_status": calf.health_status,
        "notes": calf.father_info,
    }


async def _create_calf(
    uow: UnitOfWork, dam: Animal, event: BreedingEvent, warnings: list[str]
) -> Animal | None:
    try:
        calf = await uow.animals.create_calf(dam, _calf_attrs(event, dam))
        await uow.commit()
        return calf
    except AppError as exc:
        await uow.rollback()
        logger.warning("Calf creation failed for calving %s: %s", event.id, exc.message)
        warnings.append(f"Event recorded but failed to create calf: {exc.message}")
        return None


async def _schedule(
    uow: UnitOfWork,
    animal: Animal,
    event: BreedingEvent,
    result: TransitionResult,
    settings,
    duplicate_window_days: int,
    output: SubmitEventOutput,
) -> None:
    try:
        scheduled = await schedule_follow_ups.execute(
            uow,
            animal,
            event,
            result,
            settings,
            duplicate_window_days=duplicate_window_days,
        )
        uow.add_event(
            FollowUpsScheduledEvent(
                farm_id=event.farm_id,
                animal_id=animal.id,
                event_id=event.id,
                entry_ids=tuple(e.id for e in scheduled.created),
                reused_entry_ids=tuple(e.id for e in scheduled.reused),
            )
        )
        await uow.commit()
    except Exception as exc:
        await uow.rollback()
        reason = exc.message if isinstance(exc, AppError) else str(exc)
        logger.error(
            "Follow-up scheduling failed for event %s (animal %s): %s",
            event.id,
            animal.id,
            reason,
            exc_info=True,
        )
        output.warnings.append(f"Event recorded but follow-up scheduling failed: {reason}")
        uow.add_event(
            FollowUpSchedulingFailedEvent(
                farm_id=event.farm_id, animal_id=animal.id, event_id=event.id, reason=reason
            )
        )
        return
    output.calendar_entries = scheduled.entries
    output.resolved_entries = scheduled.resolved


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: SubmitEventInput,
    *,
    today: date | None = None,
    future_tolerance_days: int = 0,
    duplicate_window_days: int = 3,
    strict: bool = False,
) -> SubmitEventOutput:
    """Record a reproductive event, transition the animal and schedule follow-ups.

    The event and the animal update are committed before any scheduling work,
    so a failing calendar store never loses the primary fact. Scheduling and
    calf-creation failures come back as ``warnings``.
    """

    today = today or datetime.now(timezone.utc).date()
    event = _build_event(farm_id, payload)

    animal = await uow.animals.get(farm_id, payload.animal_id)
    animal = validate_event(animal, event, today=today, future_tolerance_days=future_tolerance_days)
    settings = await get_breeding_settings.execute(uow, farm_id)

    result = apply_event(animal, event, settings, strict=strict)
    if (
        event.type is BreedingEventType.PREGNANCY_CHECK
        and event.pregnancy_result == PregnancyResult.PREGNANT.value
        and event.estimated_due_date is None
    ):
        event.estimated_due_date = result.field_updates.get("expected_calving_date")

    recorded = await uow.breeding_events.append(event)
    updated_animal = animal
    if result.field_updates:
        updated_animal = await uow.animals.update_fields(
            farm_id, animal.id, result.field_updates, expected_version=animal.version
        )
        if updated_animal is None:
            raise ConflictError(
                f"Animal {animal.id} was modified concurrently; reload and resubmit the event"
            )
    uow.add_event(
        BreedingEventRecordedEvent(
            farm_id=farm_id,
            animal_id=animal.id,
            event_id=recorded.id,
            event_type=recorded.event_type,
            event_date=recorded.event_date,
            previous_status=result.previous_status.value,
            new_status=result.new_status.value,
            tag=animal.tag,
        )
    )
    await uow.commit()

    output = SubmitEventOutput(
        event=recorded,
        animal=updated_animal,
        previous_status=result.previous_status.value,
        new_status=result.new_status.value,
        field_updates=dict(result.field_updates),
        warnings=list(result.warnings),
    )

    if result.calf_requested:
        output.calf_created = await _create_calf(uow, updated_animal, recorded, output.warnings)

    await _schedule(uow, updated_animal, recorded, result, settings, duplicate_window_days, output)

    if result.new_status is ProductionStatus.LACTATING and result.status_changed:
        output.message = "Calving recorded, animal is now lactating"
    elif result.status_changed:
        output.message = f"Status changed from {result.previous_status.value} to {result.new_status.value}"
    else:
        output.message = f"{recorded.event_type} recorded"
    return output
