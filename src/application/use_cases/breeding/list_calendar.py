from __future__ import annotations

from datetime import date
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.calendar_entry import CalendarEntry, CalendarStatus


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    status: str | None = None,
    animal_id: UUID | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[CalendarEntry]:
    if status is not None and status not in {s.value for s in CalendarStatus}:
        raise ValidationError(f"Unknown calendar status {status!r}")
    if date_from and date_to and date_from > date_to:
        raise ValidationError("date_from must be on or before date_to")
    return await uow.calendar.list(
        farm_id,
        status=status,
        animal_id=animal_id,
        date_from=date_from,
        date_to=date_to,
    )
