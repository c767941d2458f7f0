from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from src.domain.models.animal import Animal
from src.domain.models.breeding_settings import BreedingSettings
from src.domain.value_objects.production_status import ProductionStatus

BLOCKING_HEALTH_STATUSES = {"sick", "quarantined"}


@dataclass(slots=True)
class BreedingEligibility:
    can_breed: bool
    reasons: list[str] = field(default_factory=list)
    blockers: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    next_breeding_date: date | None = None


def _age_in_days(birth_date: date | None, today: date) -> int:
    if birth_date is None:
        return 0
    return max(0, (today - birth_date).days)


def check_breeding_eligibility(
    animal: Animal,
    settings: BreedingSettings,
    *,
    today: date,
    last_calving_date: date | None = None,
    last_breeding_date: date | None = None,
) -> BreedingEligibility:
    result = BreedingEligibility(can_breed=True)

    def block(message: str) -> BreedingEligibility:
        result.can_breed = False
        result.blockers.append(message)
        return result

    if (animal.sex or "").upper() == "MALE":
        return block("Male animals cannot be bred")

    age_days = _age_in_days(animal.birth_date, today)
    age_months = age_days // 30
    min_months = settings.minimum_breeding_age_months
    if animal.birth_date is not None and age_months < min_months:
        remaining = min_months * 30 - age_days
        return block(
            f"Too young - minimum breeding age is {min_months} months ({remaining} days remaining)"
        )

    status = animal.status
    if status is ProductionStatus.SERVED and animal.expected_calving_date is not None:
        return block("Animal is currently pregnant")
    if not status.can_be_served():
        return block(f'Production status "{status.value}" is not eligible for breeding')

    if last_calving_date is not None:
        days_since_calving = (today - last_calving_date).days
        delay = settings.postpartum_breeding_delay_days
        if days_since_calving < delay:
            result.next_breeding_date = last_calving_date + timedelta(days=delay)
            return block(
                f"Too soon after calving - must wait {delay} days "
                f"({delay - days_since_calving} days remaining)"
            )
        result.reasons.append(f"Postpartum recovery complete ({days_since_calving} days since calving)")

    if animal.health_status and animal.health_status.lower() in BLOCKING_HEALTH_STATUSES:
        return block(f'Health status "{animal.health_status}" prevents breeding')

    if last_breeding_date is not None:
        days_since_breeding = (today - last_breeding_date).days
        if days_since_breeding < settings.default_cycle_interval:
            result.recommendations.append(
                f"Recently bred {days_since_breeding} days ago - typical cycle is "
                f"{settings.default_cycle_interval} days"
            )

    if status is ProductionStatus.HEIFER:
        result.recommendations.append(
            "First time breeding - consider a proven sire with good calving ease"
        )
    elif status is ProductionStatus.DRY:
        result.recommendations.append("Dry cow ready for breeding")
    elif status is ProductionStatus.LACTATING:
        result.recommendations.append(
            "Currently lactating - breeding will start next lactation cycle"
        )

    if animal.birth_date is not None:
        if age_months < min_months + 3:
            result.recommendations.append(
                "Recently reached breeding age - monitor heat cycles carefully"
            )
        result.reasons.append(f"Age: {age_months} months (meets minimum {min_months} months)")
    result.reasons.append(f"Production status: {status.value} (eligible)")
    result.reasons.append(f"Health status: {animal.health_status or 'healthy'}")
    return result
