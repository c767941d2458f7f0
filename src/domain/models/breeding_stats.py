from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import UUID


class AlertType(str, Enum):
    CALVING_DUE = "calving_due"
    PREGNANCY_CHECK_DUE = "pregnancy_check_due"
    DRY_OFF_DUE = "dry_off_due"
    BREEDING_DUE = "breeding_due"


class AlertPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {AlertPriority.HIGH: 3, AlertPriority.MEDIUM: 2, AlertPriority.LOW: 1}[self]


class AlertSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


SEVERITY_BY_PRIORITY = {
    AlertPriority.HIGH: AlertSeverity.CRITICAL,
    AlertPriority.MEDIUM: AlertSeverity.WARNING,
    AlertPriority.LOW: AlertSeverity.INFO,
}


@dataclass(frozen=True, slots=True)
class BreedingTrends:
    heat_detection_trend: int = 0
    insemination_trend: int = 0
    pregnancy_trend: int = 0


@dataclass(frozen=True, slots=True)
class BreedingStats:
    farm_id: UUID
    as_of: date
    total_inseminations: int = 0
    total_pregnancy_checks: int = 0
    total_calvings: int = 0
    total_heat_detections: int = 0
    recent_heat_detections: int = 0
    currently_pregnant: int = 0
    expected_calvings_this_month: int = 0
    conception_rate: int = 0
    trends: BreedingTrends = field(default_factory=BreedingTrends)


@dataclass(frozen=True, slots=True)
class Alert:
    """Computed on read, never persisted."""

    type: str
    farm_id: UUID
    animal_id: UUID
    priority: str
    severity: str
    days_remaining: int
    due_date: date
    message: str
    animal_tag: str | None = None
    animal_name: str | None = None

    @property
    def id(self) -> str:
        return f"{self.type}-{self.animal_id}"
