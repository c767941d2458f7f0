from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

DEFAULT_GESTATION_DAYS = 280
DEFAULT_PREGNANCY_CHECK_DAYS = 45
DEFAULT_DAYS_PREGNANT_AT_DRYOFF = 220
DEFAULT_POSTPARTUM_BREEDING_DELAY_DAYS = 60
DEFAULT_MINIMUM_BREEDING_AGE_MONTHS = 15
DEFAULT_CYCLE_INTERVAL_DAYS = 21


@dataclass(slots=True)
class BreedingSettings:
    farm_id: UUID
    default_gestation_days: int = DEFAULT_GESTATION_DAYS
    pregnancy_check_days: int = DEFAULT_PREGNANCY_CHECK_DAYS
    days_pregnant_at_dryoff: int = DEFAULT_DAYS_PREGNANT_AT_DRYOFF
    postpartum_breeding_delay_days: int = DEFAULT_POSTPARTUM_BREEDING_DELAY_DAYS
    minimum_breeding_age_months: int = DEFAULT_MINIMUM_BREEDING_AGE_MONTHS
    default_cycle_interval: int = DEFAULT_CYCLE_INTERVAL_DAYS
    auto_schedule_pregnancy_check: bool = True
    auto_create_dry_off: bool = True
    auto_create_lactation: bool = True
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def defaults(cls, farm_id: UUID) -> BreedingSettings:
        return cls(farm_id=farm_id)

    @property
    def dry_period_days(self) -> int:
        """Days between the scheduled dry-off and the expected calving."""
        return self.default_gestation_days - self.days_pregnant_at_dryoff

    def problems(self) -> list[str]:
        found: list[str] = []
        for name in (
            "default_gestation_days",
            "pregnancy_check_days",
            "days_pregnant_at_dryoff",
            "postpartum_breeding_delay_days",
            "default_cycle_interval",
        ):
            if getattr(self, name) <= 0:
                found.append(f"{name} must be positive")
        if self.minimum_breeding_age_months < 0:
            found.append("minimum_breeding_age_months cannot be negative")
        if self.days_pregnant_at_dryoff >= self.default_gestation_days:
            found.append("days_pregnant_at_dryoff must be lower than default_gestation_days")
        return found
