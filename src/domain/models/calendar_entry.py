from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class CalendarEventType(str, Enum):
    PREGNANCY_CHECK = "pregnancy_check"
    DRY_OFF_SCHEDULED = "dry_off_scheduled"
    CALVING_EXPECTED = "calving_expected"
    BREEDING_ELIGIBLE = "breeding_eligible"


class CalendarStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class CalendarEntry:
    id: UUID
    farm_id: UUID
    animal_id: UUID
    event_type: str
    scheduled_date: date
    status: str = CalendarStatus.SCHEDULED.value
    notes: str | None = None
    source_event_id: UUID | None = None
    completed_event_id: UUID | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        event_type: str,
        scheduled_date: date,
        notes: str | None = None,
        source_event_id: UUID | None = None,
    ) -> CalendarEntry:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            event_type=event_type,
            scheduled_date=scheduled_date,
            notes=notes,
            source_event_id=source_event_id,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_open(self) -> bool:
        return self.status == CalendarStatus.SCHEDULED.value

    def is_overdue(self, as_of: date) -> bool:
        return self.is_open and self.scheduled_date < as_of

    def complete(self, event_id: UUID | None = None) -> None:
        self.status = CalendarStatus.COMPLETED.value
        self.completed_event_id = event_id
        self.updated_at = datetime.now(timezone.utc)

    def cancel(self, event_id: UUID | None = None) -> None:
        self.status = CalendarStatus.CANCELLED.value
        self.completed_event_id = event_id
        self.updated_at = datetime.now(timezone.utc)
