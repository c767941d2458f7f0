from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services.breeding_schedule import derive_follow_ups, resolved_entry_types
from src.application.services.breeding_transitions import TransitionResult
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import BreedingEvent
from src.domain.models.breeding_settings import BreedingSettings
from src.domain.models.calendar_entry import CalendarEntry, CalendarStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScheduleFollowUpsOutput:
    created: list[CalendarEntry] = field(default_factory=list)
    reused: list[CalendarEntry] = field(default_factory=list)
    resolved: list[CalendarEntry] = field(default_factory=list)

    @property
    def entries(self) -> list[CalendarEntry]:
        return [*self.created, *self.reused]


async def _resolve_open_entries(
    uow: UnitOfWork, animal: Animal, event: BreedingEvent, result: TransitionResult
) -> list[CalendarEntry]:
    resolutions = resolved_entry_types(event, result)
    if not resolutions:
        return []
    open_entries = await uow.calendar.list_open_for_animal(
        event.farm_id, animal.id, [t.value for t in resolutions]
    )
    resolved = []
    for entry in open_entries:
        outcome = next(s for t, s in resolutions.items() if t.value == entry.event_type)
        if outcome is CalendarStatus.COMPLETED:
            entry.complete(event.id)
        else:
            entry.cancel(event.id)
        resolved.append(await uow.calendar.update(entry))
    return resolved


async def execute(
    uow: UnitOfWork,
    animal: Animal,
    event: BreedingEvent,
    result: TransitionResult,
    settings: BreedingSettings,
    *,
    duplicate_window_days: int = 3,
) -> ScheduleFollowUpsOutput:
    """Close the calendar entries the event fulfils and insert its follow-ups.

    A follow-up that already exists as a scheduled entry of the same type for
    the same animal within ``duplicate_window_days`` is reused, so retried
    submissions never double-schedule.
    """

    output = ScheduleFollowUpsOutput()
    output.resolved = await _resolve_open_entries(uow, animal, event, result)

    window = timedelta(days=duplicate_window_days)
    for planned in derive_follow_ups(animal, event, result, settings):
        existing = await uow.calendar.find_existing(
            planned.farm_id,
            planned.animal_id,
            planned.event_type,
            (planned.scheduled_date - window, planned.scheduled_date + window),
        )
        if existing is not None:
            logger.info(
                "Calendar entry %s (%s on %s) already scheduled for animal %s, reusing it",
                existing.id,
                existing.event_type,
                existing.scheduled_date.isoformat(),
                animal.id,
            )
            output.reused.append(existing)
            continue
        output.created.append(await uow.calendar.insert(planned))
    return output
