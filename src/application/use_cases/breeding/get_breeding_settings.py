from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import InvariantViolation
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_settings import BreedingSettings

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, farm_id: UUID) -> BreedingSettings:
    """Farm breeding settings, falling back to the documented defaults."""

    settings = await uow.breeding_settings.get(farm_id)
    if settings is None:
        logger.debug("No breeding settings stored for farm %s, using defaults", farm_id)
        return BreedingSettings.defaults(farm_id)
    problems = settings.problems()
    if problems:
        raise InvariantViolation(
            f"Stored breeding settings for farm {farm_id} are inconsistent",
            details={"problems": problems},
        )
    return settings
