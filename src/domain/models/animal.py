from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.production_status import ProductionStatus

# Fields the breeding engine is allowed to write on an animal
REPRODUCTIVE_FIELDS = frozenset(
    {"production_status", "pre_service_status", "service_date", "expected_calving_date"}
)


@dataclass(slots=True)
class Animal:
    id: UUID
    farm_id: UUID
    tag: str
    name: str | None = None
    breed: str | None = None
    birth_date: date | None = None
    sex: str | None = None
    dam_id: UUID | None = None
    weight_kg: float | None = None
    health_status: str | None = None
    notes: str | None = None

    # Reproductive fields
    production_status: str = ProductionStatus.HEIFER.value
    # Status held right before the animal entered SERVED, used to revert on an open check
    pre_service_status: str | None = None
    service_date: date | None = None
    expected_calving_date: date | None = None

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        tag: str,
        name: str | None = None,
        breed: str | None = None,
        birth_date: date | None = None,
        sex: str | None = None,
        dam_id: UUID | None = None,
        weight_kg: float | None = None,
        health_status: str | None = None,
        notes: str | None = None,
        production_status: str = ProductionStatus.HEIFER.value,
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            tag=tag,
            name=name,
            breed=breed,
            birth_date=birth_date,
            sex=sex,
            dam_id=dam_id,
            weight_kg=weight_kg,
            health_status=health_status,
            notes=notes,
            production_status=production_status,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def status(self) -> ProductionStatus:
        return ProductionStatus(self.production_status)

    def is_pregnant(self) -> bool:
        return self.status is ProductionStatus.SERVED and self.expected_calving_date is not None
