from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class BreedingEventType(str, Enum):
    HEAT_DETECTION = "heat_detection"
    INSEMINATION = "insemination"
    PREGNANCY_CHECK = "pregnancy_check"
    CALVING = "calving"


class PregnancyResult(str, Enum):
    PREGNANT = "pregnant"
    NOT_PREGNANT = "not_pregnant"
    UNCERTAIN = "uncertain"


class InseminationMethod(str, Enum):
    ARTIFICIAL_INSEMINATION = "artificial_insemination"
    NATURAL_BREEDING = "natural_breeding"


class CalvingOutcome(str, Enum):
    NORMAL = "normal"
    ASSISTED = "assisted"
    DIFFICULT = "difficult"
    CAESAREAN = "caesarean"


@dataclass(slots=True)
class CalfDetails:
    tag_number: str | None = None
    name: str | None = None
    gender: str | None = None
    breed: str | None = None
    weight_kg: float | None = None
    health_status: str | None = None
    father_info: str | None = None


@dataclass(slots=True)
class BreedingEvent:
    """A reproductive fact recorded for one animal.

    Events are appended to the ledger and never mutated afterwards. Only the
    fields relevant to ``event_type`` are populated.
    """

    id: UUID
    farm_id: UUID
    animal_id: UUID
    event_type: str
    event_date: date
    notes: str | None = None
    recorded_by: str | None = None

    # heat_detection
    heat_signs: list[str] = field(default_factory=list)
    heat_action_taken: str | None = None

    # insemination
    insemination_method: str | None = None
    semen_bull_code: str | None = None
    semen_batch: str | None = None
    technician_name: str | None = None

    # pregnancy_check
    pregnancy_result: str | None = None
    examination_method: str | None = None
    veterinarian_name: str | None = None
    estimated_due_date: date | None = None

    # calving
    calving_outcome: str | None = None
    calf: CalfDetails | None = None
    create_calf: bool = False

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        event_type: str,
        event_date: date | datetime,
        **details,
    ) -> BreedingEvent:
        if isinstance(event_date, datetime):
            event_date = event_date.date()
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            event_type=event_type,
            event_date=event_date,
            created_at=datetime.now(timezone.utc),
            **details,
        )

    @property
    def type(self) -> BreedingEventType:
        return BreedingEventType(self.event_type)

    def is_positive_check(self) -> bool:
        return (
            self.event_type == BreedingEventType.PREGNANCY_CHECK.value
            and self.pregnancy_result == PregnancyResult.PREGNANT.value
        )

    def sort_key(self) -> tuple[date, datetime]:
        return (self.event_date, self.created_at)
