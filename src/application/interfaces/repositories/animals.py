from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.animal import Animal


class AnimalRepository(Protocol):
    """Animal Registry port. The breeding engine only writes reproductive fields."""

    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        production_statuses: list[str] | None = None,
    ) -> list[Animal]: ...

    async def update_fields(
        self,
        farm_id: UUID,
        animal_id: UUID,
        fields: dict,
        expected_version: int,
    ) -> Animal | None: ...

    async def create_calf(self, parent: Animal, attrs: dict) -> Animal: ...
