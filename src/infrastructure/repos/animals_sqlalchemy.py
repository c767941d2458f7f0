from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, PersistenceFailure
from src.application.interfaces.repositories.animals import AnimalRepository
from src.domain.models.animal import REPRODUCTIVE_FIELDS, Animal
from src.domain.value_objects.production_status import ProductionStatus
from src.infrastructure.db.orm.animal import AnimalORM
from src.utils.datetime_tz import ensure_utc


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            farm_id=orm.farm_id,
            tag=orm.tag,
            name=orm.name,
            breed=orm.breed,
            birth_date=orm.birth_date,
            sex=orm.sex,
            dam_id=orm.dam_id,
            weight_kg=orm.weight_kg,
            health_status=orm.health_status,
            notes=orm.notes,
            production_status=orm.production_status,
            pre_service_status=orm.pre_service_status,
            service_date=orm.service_date,
            expected_calving_date=orm.expected_calving_date,
            deleted_at=ensure_utc(orm.deleted_at),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
            version=orm.version,
        )

    async def add(self, animal: Animal) -> Animal:
        orm = AnimalORM(
            id=animal.id,
            farm_id=animal.farm_id,
            tag=animal.tag,
            name=animal.name,
            breed=animal.breed,
            birth_date=animal.birth_date,
            sex=animal.sex,
            dam_id=animal.dam_id,
            weight_kg=animal.weight_kg,
            health_status=animal.health_status,
            notes=animal.notes,
            production_status=animal.production_status,
            pre_service_status=animal.pre_service_status,
            service_date=animal.service_date,
            expected_calving_date=animal.expected_calving_date,
            created_at=animal.created_at,
            updated_at=animal.updated_at,
            version=animal.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                f"Animal tag {animal.tag} already exists for farm",
                details={"tag": animal.tag},
            ) from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None:
        stmt = (
            select(AnimalORM)
            .where(AnimalORM.farm_id == farm_id)
            .where(AnimalORM.id == animal_id)
            .where(AnimalORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        farm_id: UUID,
        *,
        production_statuses: list[str] | None = None,
    ) -> list[Animal]:
        stmt = select(AnimalORM).where(AnimalORM.farm_id == farm_id)
        stmt = stmt.where(AnimalORM.deleted_at.is_(None))
        if production_statuses is not None:
            stmt = stmt.where(AnimalORM.production_status.in_(production_statuses))
        stmt = stmt.order_by(AnimalORM.tag)
        result = await self.session.execute(stmt)
        return [self._to_domain(item) for item in result.scalars().all()]

    async def update_fields(
        self,
        farm_id: UUID,
        animal_id: UUID,
        fields: dict,
        expected_version: int,
    ) -> Animal | None:
        unknown = set(fields) - REPRODUCTIVE_FIELDS
        if unknown:
            raise PersistenceFailure(
                "Refusing to write non-reproductive animal fields",
                details={"fields": sorted(unknown)},
            )
        values = {**fields, "version": expected_version + 1, "updated_at": func.now()}
        stmt = (
            update(AnimalORM)
            .where(AnimalORM.farm_id == farm_id, AnimalORM.id == animal_id)
            .where(AnimalORM.version == expected_version)
            .where(AnimalORM.deleted_at.is_(None))
            .values(**values)
            .returning(AnimalORM)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceFailure(f"Failed to update animal {animal_id}") from exc
        orm = result.scalar_one_or_none()
        if not orm:
            return None
        return self._to_domain(orm)

    async def create_calf(self, parent: Animal, attrs: dict) -> Animal:
        calf = Animal.create(
            farm_id=parent.farm_id,
            dam_id=parent.id,
            production_status=ProductionStatus.CALF.value,
            **attrs,
        )
        return await self.add(calf)
