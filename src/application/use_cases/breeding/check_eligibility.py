from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID

from src.application.errors import AnimalNotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services.breeding_eligibility import (
    BreedingEligibility,
    check_breeding_eligibility,
)
from src.application.use_cases.breeding import get_breeding_settings
from src.domain.models.breeding_event import BreedingEventType


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    animal_id: UUID,
    today: date | None = None,
) -> BreedingEligibility:
    today = today or datetime.now(timezone.utc).date()
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise AnimalNotFound(f"Animal {animal_id} not found")
    settings = await get_breeding_settings.execute(uow, farm_id)
    history = await uow.breeding_events.list_by_animal(farm_id, animal_id)

    def latest(event_type: BreedingEventType) -> date | None:
        dates = [e.event_date for e in history if e.event_type == event_type.value]
        return max(dates) if dates else None

    return check_breeding_eligibility(
        animal,
        settings,
        today=today,
        last_calving_date=latest(BreedingEventType.CALVING),
        last_breeding_date=latest(BreedingEventType.INSEMINATION),
    )
