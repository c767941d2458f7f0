from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.animals import AnimalRepository
from src.application.interfaces.repositories.breeding_events import BreedingEventLedger
from src.application.interfaces.repositories.breeding_settings import (
    BreedingSettingsRepository,
)
from src.application.interfaces.repositories.calendar_entries import CalendarRepository


class UnitOfWork(Protocol):
    animals: AnimalRepository
    breeding_events: BreedingEventLedger
    breeding_settings: BreedingSettingsRepository
    calendar: CalendarRepository
    # Domain events collected during the transaction
    events: list

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    # Record a domain event during the transaction
    def add_event(self, event: object) -> None: ...

    # Drain collected events (used for post-commit dispatch)
    def drain_events(self) -> list: ...
