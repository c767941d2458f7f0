from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.calendar_entry import CalendarEntry


class CalendarRepository(Protocol):
    async def find_existing(
        self,
        farm_id: UUID,
        animal_id: UUID,
        event_type: str,
        date_window: tuple[date, date],
    ) -> CalendarEntry | None: ...

    async def insert(self, entry: CalendarEntry) -> CalendarEntry: ...

    async def update(self, entry: CalendarEntry) -> CalendarEntry: ...

    async def list_open_for_animal(
        self,
        farm_id: UUID,
        animal_id: UUID,
        event_types: list[str] | None = None,
    ) -> list[CalendarEntry]: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        status: str | None = None,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[CalendarEntry]: ...
