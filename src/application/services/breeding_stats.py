"""Reproductive performance statistics and due-date alerts.

Both ``compute_stats`` and ``compute_alerts`` are pure functions of their
inputs so they can run against a snapshot of the ledger while new events are
being appended.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from src.domain.models.animal import Animal
from src.domain.models.breeding_event import BreedingEvent, BreedingEventType
from src.domain.models.breeding_settings import DEFAULT_GESTATION_DAYS
from src.domain.models.breeding_stats import (
    SEVERITY_BY_PRIORITY,
    Alert,
    AlertPriority,
    AlertType,
    BreedingStats,
    BreedingTrends,
)
from src.domain.models.calendar_entry import CalendarEntry, CalendarEventType
from src.domain.value_objects.production_status import ProductionStatus

TREND_WINDOW_DAYS = 30

CALVING_ALERT_HORIZON_DAYS = 14
PREGNANCY_CHECK_MIN_DAYS = 30
PREGNANCY_CHECK_MAX_DAYS = 60
PREGNANCY_CHECK_TARGET_DAYS = 45
DRY_OFF_ALERT_HORIZON_DAYS = 7


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def trend_percentage(current: int, previous: int) -> int:
    if previous == 0:
        return 100 if current > 0 else 0
    return _round_half_up(Decimal(current - previous) / Decimal(previous) * 100)


def conception_rate(positive_checks: int, total_checks: int) -> int:
    if total_checks <= 0:
        return 0
    return _round_half_up(Decimal(positive_checks) / Decimal(total_checks) * 100)


def _latest_per_animal(events: Iterable[BreedingEvent]) -> dict[UUID, BreedingEvent]:
    latest: dict[UUID, BreedingEvent] = {}
    for event in events:
        current = latest.get(event.animal_id)
        if current is None or event.sort_key() > current.sort_key():
            latest[event.animal_id] = event
    return latest


def currently_pregnant_events(events: Iterable[BreedingEvent]) -> list[BreedingEvent]:
    """Latest positive pregnancy check per animal, unless a calving followed it."""

    relevant = [
        e
        for e in events
        if e.event_type in (BreedingEventType.PREGNANCY_CHECK.value, BreedingEventType.CALVING.value)
    ]
    return [e for e in _latest_per_animal(relevant).values() if e.is_positive_check()]


def _month_bounds(as_of: date) -> tuple[date, date]:
    start = as_of.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


def compute_stats(
    farm_id: UUID,
    events: Iterable[BreedingEvent],
    as_of: date,
    *,
    gestation_days: int = DEFAULT_GESTATION_DAYS,
) -> BreedingStats:
    events = [e for e in events if e.farm_id == farm_id and e.event_date <= as_of]

    current_start = as_of - timedelta(days=TREND_WINDOW_DAYS)
    previous_start = as_of - timedelta(days=2 * TREND_WINDOW_DAYS)
    recent = [e for e in events if e.event_date >= current_start]
    previous = [e for e in events if previous_start <= e.event_date < current_start]

    def count(items: list[BreedingEvent], event_type: BreedingEventType) -> int:
        return sum(1 for e in items if e.event_type == event_type.value)

    def positives(items: list[BreedingEvent]) -> int:
        return sum(1 for e in items if e.is_positive_check())

    total_checks = count(events, BreedingEventType.PREGNANCY_CHECK)

    pregnant = currently_pregnant_events(events)
    month_start, month_end = _month_bounds(as_of)
    due_this_month = 0
    for check in pregnant:
        due = check.estimated_due_date or check.event_date + timedelta(days=gestation_days)
        if month_start <= due <= month_end:
            due_this_month += 1

    return BreedingStats(
        farm_id=farm_id,
        as_of=as_of,
        total_inseminations=count(events, BreedingEventType.INSEMINATION),
        total_pregnancy_checks=total_checks,
        total_calvings=count(events, BreedingEventType.CALVING),
        total_heat_detections=count(events, BreedingEventType.HEAT_DETECTION),
        recent_heat_detections=count(recent, BreedingEventType.HEAT_DETECTION),
        currently_pregnant=len(pregnant),
        expected_calvings_this_month=due_this_month,
        conception_rate=conception_rate(positives(events), total_checks),
        trends=BreedingTrends(
            heat_detection_trend=trend_percentage(
                count(recent, BreedingEventType.HEAT_DETECTION),
                count(previous, BreedingEventType.HEAT_DETECTION),
            ),
            insemination_trend=trend_percentage(
                count(recent, BreedingEventType.INSEMINATION),
                count(previous, BreedingEventType.INSEMINATION),
            ),
            pregnancy_trend=trend_percentage(positives(recent), positives(previous)),
        ),
    )


def _alert(
    alert_type: AlertType,
    animal: Animal,
    priority: AlertPriority,
    days_remaining: int,
    due_date: date,
    message: str,
) -> Alert:
    return Alert(
        type=alert_type.value,
        farm_id=animal.farm_id,
        animal_id=animal.id,
        priority=priority.value,
        severity=SEVERITY_BY_PRIORITY[priority].value,
        days_remaining=days_remaining,
        due_date=due_date,
        message=message,
        animal_tag=animal.tag,
        animal_name=animal.name,
    )


def _calving_due_alerts(animals: list[Animal], as_of: date) -> list[Alert]:
    alerts = []
    for animal in animals:
        if not animal.is_pregnant():
            continue
        days_remaining = (animal.expected_calving_date - as_of).days
        if days_remaining < 0 or days_remaining > CALVING_ALERT_HORIZON_DAYS:
            continue
        if days_remaining <= 3:
            priority = AlertPriority.HIGH
        elif days_remaining <= 7:
            priority = AlertPriority.MEDIUM
        else:
            priority = AlertPriority.LOW
        alerts.append(
            _alert(
                AlertType.CALVING_DUE,
                animal,
                priority,
                days_remaining,
                animal.expected_calving_date,
                f"Due for calving in {days_remaining} days",
            )
        )
    return alerts


def _pregnancy_check_due_alerts(
    animals_by_id: dict[UUID, Animal], events: list[BreedingEvent], as_of: date
) -> list[Alert]:
    inseminations = _latest_per_animal(
        e for e in events if e.event_type == BreedingEventType.INSEMINATION.value
    )
    alerts = []
    for animal_id, insemination in inseminations.items():
        animal = animals_by_id.get(animal_id)
        if animal is None:
            continue
        days_since = (as_of - insemination.event_date).days
        if days_since < PREGNANCY_CHECK_MIN_DAYS or days_since > PREGNANCY_CHECK_MAX_DAYS:
            continue
        checked = any(
            e.animal_id == animal_id
            and e.event_type == BreedingEventType.PREGNANCY_CHECK.value
            and e.event_date >= insemination.event_date
            for e in events
        )
        if checked:
            continue
        if days_since >= PREGNANCY_CHECK_TARGET_DAYS:
            priority = AlertPriority.HIGH
        elif days_since >= 35:
            priority = AlertPriority.MEDIUM
        else:
            priority = AlertPriority.LOW
        alerts.append(
            _alert(
                AlertType.PREGNANCY_CHECK_DUE,
                animal,
                priority,
                max(0, PREGNANCY_CHECK_TARGET_DAYS - days_since),
                insemination.event_date + timedelta(days=PREGNANCY_CHECK_TARGET_DAYS),
                f"Pregnancy check needed ({days_since} days since insemination)",
            )
        )
    return alerts


def _calendar_alerts(
    animals_by_id: dict[UUID, Animal], entries: list[CalendarEntry], as_of: date
) -> list[Alert]:
    alerts = []
    for entry in entries:
        animal = animals_by_id.get(entry.animal_id)
        if animal is None or not entry.is_open:
            continue
        days_remaining = (entry.scheduled_date - as_of).days

        if entry.event_type == CalendarEventType.DRY_OFF_SCHEDULED.value:
            if days_remaining > DRY_OFF_ALERT_HORIZON_DAYS:
                continue
            if entry.is_overdue(as_of):
                priority = AlertPriority.HIGH
                message = f"Dry-off overdue by {-days_remaining} days"
            else:
                priority = AlertPriority.MEDIUM if days_remaining <= 3 else AlertPriority.LOW
                message = f"Dry-off due in {days_remaining} days"
            alerts.append(
                _alert(
                    AlertType.DRY_OFF_DUE,
                    animal,
                    priority,
                    days_remaining,
                    entry.scheduled_date,
                    message,
                )
            )

        elif entry.event_type == CalendarEventType.BREEDING_ELIGIBLE.value:
            if days_remaining > 0 or animal.status is ProductionStatus.SERVED:
                continue
            alerts.append(
                _alert(
                    AlertType.BREEDING_DUE,
                    animal,
                    AlertPriority.LOW,
                    days_remaining,
                    entry.scheduled_date,
                    "Eligible for breeding after postpartum delay",
                )
            )
    return alerts


def sort_alerts(alerts: Iterable[Alert]) -> list[Alert]:
    return sorted(
        alerts,
        key=lambda a: (-AlertPriority(a.priority).rank, a.days_remaining),
    )


def compute_alerts(
    farm_id: UUID,
    animals: Iterable[Animal],
    calendar_entries: Iterable[CalendarEntry],
    as_of: date,
    *,
    events: Iterable[BreedingEvent] = (),
) -> list[Alert]:
    """Prioritised follow-up alerts, highest priority first."""

    animals = [a for a in animals if a.farm_id == farm_id and a.deleted_at is None]
    animals_by_id = {a.id: a for a in animals}
    events = [e for e in events if e.farm_id == farm_id and e.event_date <= as_of]
    entries = [c for c in calendar_entries if c.farm_id == farm_id]

    alerts: list[Alert] = []
    alerts.extend(_calving_due_alerts(animals, as_of))
    alerts.extend(_pregnancy_check_due_alerts(animals_by_id, events, as_of))
    alerts.extend(_calendar_alerts(animals_by_id, entries, as_of))
    return sort_alerts(alerts)
