from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class BreedingEventRecordedEvent:
    farm_id: UUID
    animal_id: UUID
    event_id: UUID
    event_type: str
    event_date: date
    previous_status: str
    new_status: str
    tag: str | None = None


@dataclass(frozen=True)
class FollowUpsScheduledEvent:
    farm_id: UUID
    animal_id: UUID
    event_id: UUID
    entry_ids: tuple[UUID, ...] = ()
    reused_entry_ids: tuple[UUID, ...] = ()


@dataclass(frozen=True)
class FollowUpSchedulingFailedEvent:
    farm_id: UUID
    animal_id: UUID
    event_id: UUID
    reason: str
