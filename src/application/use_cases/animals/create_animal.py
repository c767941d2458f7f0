from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal import Animal
from src.domain.value_objects.production_status import ProductionStatus


@dataclass(slots=True)
class CreateAnimalInput:
    tag: str
    name: str | None = None
    breed: str | None = None
    birth_date: date | None = None
    sex: str | None = None
    dam_id: UUID | None = None
    weight_kg: float | None = None
    health_status: str | None = None
    notes: str | None = None
    production_status: str = ProductionStatus.HEIFER.value


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: CreateAnimalInput,
) -> Animal:
    valid_statuses = {s.value for s in ProductionStatus}
    if payload.production_status not in valid_statuses:
        raise ValidationError(
            f"Invalid production_status. Must be one of: {', '.join(sorted(valid_statuses))}"
        )
    if payload.production_status == ProductionStatus.SERVED.value:
        raise ValidationError("Animals enter SERVED through an insemination event")

    animal = Animal.create(
        farm_id=farm_id,
        tag=payload.tag,
        name=payload.name,
        breed=payload.breed,
        birth_date=payload.birth_date,
        sex=payload.sex,
        dam_id=payload.dam_id,
        weight_kg=payload.weight_kg,
        health_status=payload.health_status,
        notes=payload.notes,
        production_status=payload.production_status,
    )
    created = await uow.animals.add(animal)
    await uow.commit()
    return created
