from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.breeding_event import BreedingEvent


class BreedingEventLedger(Protocol):
    """Append-only store of reproductive events."""

    async def append(self, event: BreedingEvent) -> BreedingEvent: ...

    async def list_by_animal(self, farm_id: UUID, animal_id: UUID) -> list[BreedingEvent]: ...

    async def list_by_farm(
        self,
        farm_id: UUID,
        since: date | None = None,
        *,
        event_type: str | None = None,
    ) -> list[BreedingEvent]: ...
