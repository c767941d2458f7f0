from __future__ import annotations

from uuid import UUID

from src.application.errors import AnimalNotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_event import BreedingEvent, BreedingEventType


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    animal_id: UUID | None = None,
    event_type: str | None = None,
    limit: int = 50,
) -> list[BreedingEvent]:
    """Most recent events first."""

    if limit <= 0 or limit > 500:
        raise ValidationError("limit must be between 1 and 500")
    if event_type is not None and event_type not in {t.value for t in BreedingEventType}:
        raise ValidationError(f"Unknown event type {event_type!r}")

    if animal_id is not None:
        animal = await uow.animals.get(farm_id, animal_id)
        if not animal:
            raise AnimalNotFound(f"Animal {animal_id} not found")
        events = await uow.breeding_events.list_by_animal(farm_id, animal_id)
        if event_type is not None:
            events = [e for e in events if e.event_type == event_type]
    else:
        events = await uow.breeding_events.list_by_farm(farm_id, event_type=event_type)

    events = sorted(events, key=lambda e: e.sort_key(), reverse=True)
    return events[:limit]
