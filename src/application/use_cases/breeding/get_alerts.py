from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services.breeding_stats import PREGNANCY_CHECK_MAX_DAYS, compute_alerts
from src.domain.models.breeding_stats import Alert
from src.domain.models.calendar_entry import CalendarStatus


async def execute(uow: UnitOfWork, farm_id: UUID, as_of: date | None = None) -> list[Alert]:
    as_of = as_of or datetime.now(timezone.utc).date()
    animals = await uow.animals.list(farm_id)
    entries = await uow.calendar.list(farm_id, status=CalendarStatus.SCHEDULED.value)
    events = await uow.breeding_events.list_by_farm(
        farm_id, since=as_of - timedelta(days=PREGNANCY_CHECK_MAX_DAYS)
    )
    return compute_alerts(farm_id, animals, entries, as_of, events=events)
