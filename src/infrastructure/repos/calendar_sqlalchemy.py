from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import NotFound, PersistenceFailure
from src.application.interfaces.repositories.calendar_entries import CalendarRepository
from src.domain.models.calendar_entry import CalendarEntry, CalendarStatus
from src.infrastructure.db.orm.calendar_entry import CalendarEntryORM
from src.utils.datetime_tz import ensure_utc


class CalendarSQLAlchemyRepository(CalendarRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: CalendarEntryORM) -> CalendarEntry:
        return CalendarEntry(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            event_type=orm.event_type,
            scheduled_date=orm.scheduled_date,
            status=orm.status,
            notes=orm.notes,
            source_event_id=orm.source_event_id,
            completed_event_id=orm.completed_event_id,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def find_existing(
        self,
        farm_id: UUID,
        animal_id: UUID,
        event_type: str,
        date_window: tuple[date, date],
    ) -> CalendarEntry | None:
        start, end = date_window
        stmt = (
            select(CalendarEntryORM)
            .where(CalendarEntryORM.farm_id == farm_id)
            .where(CalendarEntryORM.animal_id == animal_id)
            .where(CalendarEntryORM.event_type == event_type)
            .where(CalendarEntryORM.status == CalendarStatus.SCHEDULED.value)
            .where(CalendarEntryORM.scheduled_date.between(start, end))
            .order_by(CalendarEntryORM.scheduled_date)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def insert(self, entry: CalendarEntry) -> CalendarEntry:
        orm = CalendarEntryORM(
            id=entry.id,
            farm_id=entry.farm_id,
            animal_id=entry.animal_id,
            event_type=entry.event_type,
            scheduled_date=entry.scheduled_date,
            status=entry.status,
            notes=entry.notes,
            source_event_id=entry.source_event_id,
            completed_event_id=entry.completed_event_id,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceFailure("Failed to insert calendar entry") from exc
        return self._to_domain(orm)

    async def update(self, entry: CalendarEntry) -> CalendarEntry:
        orm = await self.session.get(CalendarEntryORM, entry.id)
        if orm is None or orm.farm_id != entry.farm_id:
            raise NotFound(f"Calendar entry {entry.id} not found")
        orm.status = entry.status
        orm.notes = entry.notes
        orm.completed_event_id = entry.completed_event_id
        orm.updated_at = entry.updated_at
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceFailure("Failed to update calendar entry") from exc
        return self._to_domain(orm)

    async def list_open_for_animal(
        self,
        farm_id: UUID,
        animal_id: UUID,
        event_types: list[str] | None = None,
    ) -> list[CalendarEntry]:
        stmt = (
            select(CalendarEntryORM)
            .where(CalendarEntryORM.farm_id == farm_id)
            .where(CalendarEntryORM.animal_id == animal_id)
            .where(CalendarEntryORM.status == CalendarStatus.SCHEDULED.value)
        )
        if event_types is not None:
            stmt = stmt.where(CalendarEntryORM.event_type.in_(event_types))
        stmt = stmt.order_by(CalendarEntryORM.scheduled_date)
        result = await self.session.execute(stmt)
        return [self._to_domain(item) for item in result.scalars().all()]

    async def list(
        self,
        farm_id: UUID,
        *,
        status: str | None = None,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[CalendarEntry]:
        stmt = select(CalendarEntryORM).where(CalendarEntryORM.farm_id == farm_id)
        if status is not None:
            stmt = stmt.where(CalendarEntryORM.status == status)
        if animal_id is not None:
            stmt = stmt.where(CalendarEntryORM.animal_id == animal_id)
        if date_from is not None:
            stmt = stmt.where(CalendarEntryORM.scheduled_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(CalendarEntryORM.scheduled_date <= date_to)
        stmt = stmt.order_by(CalendarEntryORM.scheduled_date, CalendarEntryORM.created_at)
        result = await self.session.execute(stmt)
        return [self._to_domain(item) for item in result.scalars().all()]
