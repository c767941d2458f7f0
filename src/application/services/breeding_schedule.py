from __future__ import annotations

from datetime import timedelta

from src.application.errors import InvariantViolation
from src.application.services.breeding_transitions import TransitionResult
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import BreedingEvent, BreedingEventType, PregnancyResult
from src.domain.models.breeding_settings import BreedingSettings
from src.domain.models.calendar_entry import CalendarEntry, CalendarEventType, CalendarStatus
from src.domain.value_objects.production_status import ProductionStatus


def _entry(
    animal: Animal, event: BreedingEvent, event_type: CalendarEventType, when, notes: str
) -> CalendarEntry:
    return CalendarEntry.create(
        farm_id=event.farm_id,
        animal_id=animal.id,
        event_type=event_type.value,
        scheduled_date=when,
        notes=notes,
        source_event_id=event.id,
    )


def derive_follow_ups(
    animal: Animal,
    event: BreedingEvent,
    result: TransitionResult,
    settings: BreedingSettings,
) -> list[CalendarEntry]:
    """Calendar entries that follow from an applied event.

    Pure: nothing is persisted here. Idempotent insertion is handled by the
    caller against the calendar store.
    """

    if result.out_of_order:
        return []
    event_type = event.type
    entries: list[CalendarEntry] = []

    if event_type is BreedingEventType.INSEMINATION:
        if result.new_status is ProductionStatus.SERVED and settings.auto_schedule_pregnancy_check:
            entries.append(
                _entry(
                    animal,
                    event,
                    CalendarEventType.PREGNANCY_CHECK,
                    event.event_date + timedelta(days=settings.pregnancy_check_days),
                    f"Auto-scheduled {settings.pregnancy_check_days} days after breeding",
                )
            )

    elif event_type is BreedingEventType.PREGNANCY_CHECK:
        expected = result.field_updates.get("expected_calving_date")
        if event.pregnancy_result == PregnancyResult.PREGNANT.value and expected is not None:
            if settings.auto_create_dry_off:
                entries.append(
                    _entry(
                        animal,
                        event,
                        CalendarEventType.DRY_OFF_SCHEDULED,
                        expected - timedelta(days=settings.dry_period_days),
                        f"Auto-scheduled dry-off {settings.dry_period_days} days before calving",
                    )
                )
            entries.append(
                _entry(
                    animal,
                    event,
                    CalendarEventType.CALVING_EXPECTED,
                    expected,
                    "Expected calving date",
                )
            )

    elif event_type is BreedingEventType.CALVING:
        if result.new_status is ProductionStatus.LACTATING:
            delay = settings.postpartum_breeding_delay_days
            entries.append(
                _entry(
                    animal,
                    event,
                    CalendarEventType.BREEDING_ELIGIBLE,
                    event.event_date + timedelta(days=delay),
                    f"Eligible for breeding after {delay}-day postpartum delay",
                )
            )

    for entry in entries:
        if entry.scheduled_date < event.event_date:
            raise InvariantViolation(
                f"Follow-up {entry.event_type} scheduled on {entry.scheduled_date.isoformat()} "
                f"before its triggering event on {event.event_date.isoformat()}",
                details={"event_id": str(event.id), "event_type": event.event_type},
            )
    return entries


def resolved_entry_types(
    event: BreedingEvent, result: TransitionResult
) -> dict[CalendarEventType, CalendarStatus]:
    """Open calendar entries an actual event closes, and how they are closed."""

    if result.out_of_order:
        return {}
    event_type = event.type
    if event_type is BreedingEventType.INSEMINATION:
        resolved = {CalendarEventType.BREEDING_ELIGIBLE: CalendarStatus.COMPLETED}
        service_moved = "service_date" in result.field_updates
        if result.previous_status is ProductionStatus.SERVED and service_moved:
            # the new service replaces the check planned for the previous one
            resolved[CalendarEventType.PREGNANCY_CHECK] = CalendarStatus.CANCELLED
        return resolved
    if event_type is BreedingEventType.PREGNANCY_CHECK:
        resolved = {CalendarEventType.PREGNANCY_CHECK: CalendarStatus.COMPLETED}
        if event.pregnancy_result == PregnancyResult.NOT_PREGNANT.value:
            resolved[CalendarEventType.CALVING_EXPECTED] = CalendarStatus.CANCELLED
            resolved[CalendarEventType.DRY_OFF_SCHEDULED] = CalendarStatus.CANCELLED
        return resolved
    if event_type is BreedingEventType.CALVING:
        return {
            CalendarEventType.CALVING_EXPECTED: CalendarStatus.COMPLETED,
            CalendarEventType.DRY_OFF_SCHEDULED: CalendarStatus.CANCELLED,
        }
    return {}
