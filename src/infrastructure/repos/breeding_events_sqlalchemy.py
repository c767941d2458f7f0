from __future__ import annotations

from dataclasses import asdict
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, PersistenceFailure
from src.application.interfaces.repositories.breeding_events import BreedingEventLedger
from src.domain.models.breeding_event import BreedingEvent, CalfDetails
from src.infrastructure.db.orm.breeding_event import BreedingEventORM
from src.utils.datetime_tz import ensure_utc


class BreedingEventsSQLAlchemyRepository(BreedingEventLedger):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingEventORM) -> BreedingEvent:
        return BreedingEvent(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            event_type=orm.event_type,
            event_date=orm.event_date,
            notes=orm.notes,
            recorded_by=orm.recorded_by,
            heat_signs=list(orm.heat_signs or []),
            heat_action_taken=orm.heat_action_taken,
            insemination_method=orm.insemination_method,
            semen_bull_code=orm.semen_bull_code,
            semen_batch=orm.semen_batch,
            technician_name=orm.technician_name,
            pregnancy_result=orm.pregnancy_result,
            examination_method=orm.examination_method,
            veterinarian_name=orm.veterinarian_name,
            estimated_due_date=orm.estimated_due_date,
            calving_outcome=orm.calving_outcome,
            calf=CalfDetails(**orm.calf) if orm.calf else None,
            create_calf=orm.create_calf,
            created_at=ensure_utc(orm.created_at),
        )

    async def append(self, event: BreedingEvent) -> BreedingEvent:
        orm = BreedingEventORM(
            id=event.id,
            farm_id=event.farm_id,
            animal_id=event.animal_id,
            event_type=event.event_type,
            event_date=event.event_date,
            notes=event.notes,
            recorded_by=event.recorded_by,
            heat_signs=list(event.heat_signs),
            heat_action_taken=event.heat_action_taken,
            insemination_method=event.insemination_method,
            semen_bull_code=event.semen_bull_code,
            semen_batch=event.semen_batch,
            technician_name=event.technician_name,
            pregnancy_result=event.pregnancy_result,
            examination_method=event.examination_method,
            veterinarian_name=event.veterinarian_name,
            estimated_due_date=event.estimated_due_date,
            calving_outcome=event.calving_outcome,
            calf=asdict(event.calf) if event.calf else None,
            create_calf=event.create_calf,
            created_at=event.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                f"Breeding event {event.id} already recorded",
                details={"event_id": str(event.id)},
            ) from exc
        except SQLAlchemyError as exc:
            raise PersistenceFailure("Failed to append breeding event") from exc
        return self._to_domain(orm)

    async def list_by_animal(self, farm_id: UUID, animal_id: UUID) -> list[BreedingEvent]:
        stmt = (
            select(BreedingEventORM)
            .where(BreedingEventORM.farm_id == farm_id)
            .where(BreedingEventORM.animal_id == animal_id)
            .order_by(BreedingEventORM.event_date, BreedingEventORM.created_at)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(item) for item in result.scalars().all()]

    async def list_by_farm(
        self,
        farm_id: UUID,
        since: date | None = None,
        *,
        event_type: str | None = None,
    ) -> list[BreedingEvent]:
        stmt = select(BreedingEventORM).where(BreedingEventORM.farm_id == farm_id)
        if since is not None:
            stmt = stmt.where(BreedingEventORM.event_date >= since)
        if event_type is not None:
            stmt = stmt.where(BreedingEventORM.event_type == event_type)
        stmt = stmt.order_by(BreedingEventORM.event_date, BreedingEventORM.created_at)
        result = await self.session.execute(stmt)
        return [self._to_domain(item) for item in result.scalars().all()]
