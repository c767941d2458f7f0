"""Production-status state machine driven by reproductive events.

``apply_event`` is a pure function: it reads the animal, the event and the
farm's breeding settings and returns the resulting status plus the field
updates the caller has to persist. Every (status x event type) pair has a
defined outcome. Pairs that do not match the usual breeding cycle are still
applied, because farms do record late data, but they carry a warning (or
raise ``InvalidTransition`` when ``strict`` is set).

An insemination, pregnancy check or calving dated before the animal's
current ``service_date`` belongs to an older cycle. It is kept in the ledger
but marked ``out_of_order`` and leaves the animal untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

from src.application.errors import (
    AnimalNotFound,
    InvalidEventDate,
    InvalidTransition,
    ValidationError,
)
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import (
    BreedingEvent,
    BreedingEventType,
    CalvingOutcome,
    InseminationMethod,
    PregnancyResult,
)
from src.domain.models.breeding_settings import BreedingSettings
from src.domain.value_objects.production_status import ProductionStatus

logger = logging.getLogger(__name__)

# Status used when an open check arrives and no pre-service status was stored
FALLBACK_REVERT_STATUS = ProductionStatus.HEIFER


@dataclass(slots=True)
class TransitionResult:
    previous_status: ProductionStatus
    new_status: ProductionStatus
    field_updates: dict = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    calf_requested: bool = False
    out_of_order: bool = False

    @property
    def status_changed(self) -> bool:
        return self.previous_status is not self.new_status


def expected_calving_from(check_date: date, settings: BreedingSettings) -> date:
    return check_date + timedelta(days=settings.default_gestation_days)


def _check_choice(name: str, value: str | None, choices: type[Enum]) -> None:
    if value is None:
        return
    allowed = {c.value for c in choices}
    if value not in allowed:
        raise ValidationError(f"Invalid {name}. Must be one of: {', '.join(sorted(allowed))}")


def validate_event(
    animal: Animal | None,
    event: BreedingEvent,
    *,
    today: date,
    future_tolerance_days: int = 0,
) -> Animal:
    if animal is None or animal.farm_id != event.farm_id or animal.id != event.animal_id:
        raise AnimalNotFound(f"Animal {event.animal_id} not found")
    latest_allowed = today + timedelta(days=future_tolerance_days)
    if event.event_date > latest_allowed:
        raise InvalidEventDate(
            f"Event date {event.event_date.isoformat()} is in the future",
            details={
                "event_date": event.event_date.isoformat(),
                "latest_allowed": latest_allowed.isoformat(),
            },
        )
    try:
        event_type = event.type
    except ValueError as exc:
        raise ValidationError(f"Unknown event type {event.event_type!r}") from exc
    if event_type is BreedingEventType.PREGNANCY_CHECK:
        valid_results = {r.value for r in PregnancyResult}
        if event.pregnancy_result not in valid_results:
            raise ValidationError(
                f"Invalid pregnancy_result. Must be one of: {', '.join(sorted(valid_results))}"
            )
    _check_choice("insemination_method", event.insemination_method, InseminationMethod)
    _check_choice("calving_outcome", event.calving_outcome, CalvingOutcome)
    return animal


def _unexpected(result: TransitionResult, message: str, strict: bool) -> None:
    if strict:
        raise InvalidTransition(message)
    logger.warning("Unexpected breeding transition applied: %s", message)
    result.warnings.append(message)


def _apply_insemination(
    animal: Animal, event: BreedingEvent, result: TransitionResult, strict: bool
) -> None:
    current = animal.status
    if current is ProductionStatus.SERVED:
        if event.event_date == animal.service_date:
            return
        _unexpected(
            result,
            f"Animal {animal.tag} re-inseminated while already served; service date moved",
            strict,
        )
        result.field_updates["service_date"] = event.event_date
        return
    if current is ProductionStatus.CALF:
        _unexpected(result, f"Animal {animal.tag} inseminated while still a calf", strict)
    result.new_status = ProductionStatus.SERVED
    result.field_updates.update(
        {
            "service_date": event.event_date,
            "pre_service_status": current.value,
        }
    )


def _apply_pregnancy_check(
    animal: Animal,
    event: BreedingEvent,
    settings: BreedingSettings,
    result: TransitionResult,
    strict: bool,
) -> None:
    current = animal.status
    outcome = PregnancyResult(event.pregnancy_result)

    if current is not ProductionStatus.SERVED:
        if outcome is PregnancyResult.PREGNANT:
            _unexpected(
                result,
                f"Positive pregnancy check for animal {animal.tag} in status {current.value}",
                strict,
            )
            result.new_status = ProductionStatus.SERVED
            result.field_updates.update(
                {
                    "expected_calving_date": expected_calving_from(event.event_date, settings),
                    "pre_service_status": current.value,
                }
            )
        else:
            _unexpected(
                result,
                f"Pregnancy check ({outcome.value}) for animal {animal.tag} "
                f"in status {current.value} ignored",
                strict,
            )
        return

    if outcome is PregnancyResult.PREGNANT:
        result.field_updates["expected_calving_date"] = expected_calving_from(
            event.event_date, settings
        )
    elif outcome is PregnancyResult.NOT_PREGNANT:
        revert_to = FALLBACK_REVERT_STATUS
        if animal.pre_service_status:
            revert_to = ProductionStatus(animal.pre_service_status)
        if revert_to is ProductionStatus.SERVED:
            revert_to = FALLBACK_REVERT_STATUS
        result.new_status = revert_to
        result.field_updates.update(
            {
                "service_date": None,
                "expected_calving_date": None,
                "pre_service_status": None,
            }
        )


def _apply_calving(
    animal: Animal, event: BreedingEvent, result: TransitionResult, strict: bool
) -> None:
    current = animal.status
    if current is not ProductionStatus.SERVED:
        _unexpected(
            result,
            f"Calving recorded for animal {animal.tag} in status {current.value}",
            strict,
        )
    result.new_status = ProductionStatus.LACTATING
    result.field_updates.update(
        {
            "service_date": None,
            "expected_calving_date": None,
            "pre_service_status": None,
        }
    )
    result.calf_requested = bool(event.create_calf)


def _predates_current_cycle(animal: Animal, event: BreedingEvent) -> bool:
    return animal.service_date is not None and event.event_date < animal.service_date


def apply_event(
    animal: Animal,
    event: BreedingEvent,
    settings: BreedingSettings,
    *,
    strict: bool = False,
) -> TransitionResult:
    """Compute the status transition and field updates for ``event``.

    Callers must run ``validate_event`` first; this function assumes the
    animal belongs to the event's farm and the date is acceptable.
    """

    current = animal.status
    result = TransitionResult(previous_status=current, new_status=current)
    event_type = event.type

    if event_type is BreedingEventType.HEAT_DETECTION:
        return result
    if _predates_current_cycle(animal, event):
        _unexpected(
            result,
            f"{event.event_type} dated {event.event_date.isoformat()} predates the current "
            f"service date {animal.service_date.isoformat()} of animal {animal.tag}; "
            "recorded without changing state",
            strict,
        )
        result.out_of_order = True
        return result
    if event_type is BreedingEventType.INSEMINATION:
        _apply_insemination(animal, event, result, strict)
    elif event_type is BreedingEventType.PREGNANCY_CHECK:
        _apply_pregnancy_check(animal, event, settings, result, strict)
    elif event_type is BreedingEventType.CALVING:
        _apply_calving(animal, event, result, strict)

    if result.status_changed:
        result.field_updates["production_status"] = result.new_status.value
    return result
