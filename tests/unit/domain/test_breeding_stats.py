from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from src.application.services.breeding_stats import (
    compute_alerts,
    compute_stats,
    conception_rate,
    trend_percentage,
)
from src.domain.models.animal import Animal
from src.domain.models.breeding_event import BreedingEvent
from src.domain.models.calendar_entry import CalendarEntry

AS_OF = date(2024, 6, 30)


def event(farm_id, animal_id, event_type, when, minute=0, **details) -> BreedingEvent:
    item = BreedingEvent.create(
        farm_id=farm_id, animal_id=animal_id, event_type=event_type, event_date=when, **details
    )
    item.created_at = datetime(2024, 1, 1, 0, minute, tzinfo=timezone.utc)
    return item


def test_trend_percentage_edges():
    assert trend_percentage(0, 0) == 0
    assert trend_percentage(3, 0) == 100
    assert trend_percentage(3, 2) == 50
    assert trend_percentage(1, 3) == -67
    assert trend_percentage(0, 4) == -100


def test_conception_rate_bounds():
    assert conception_rate(0, 0) == 0
    assert conception_rate(1, 3) == 33
    assert conception_rate(2, 3) == 67
    assert conception_rate(4, 4) == 100


def test_stats_counts_and_currently_pregnant():
    farm_id = uuid4()
    cow_a, cow_b, cow_c = uuid4(), uuid4(), uuid4()
    events = [
        event(farm_id, cow_a, "insemination", date(2024, 5, 1)),
        event(farm_id, cow_a, "pregnancy_check", date(2024, 6, 15), pregnancy_result="pregnant"),
        event(farm_id, cow_b, "insemination", date(2024, 4, 1)),
        event(farm_id, cow_b, "pregnancy_check", date(2024, 5, 15), pregnancy_result="pregnant"),
        event(
            farm_id, cow_b, "pregnancy_check", date(2024, 6, 10), pregnancy_result="not_pregnant"
        ),
        event(farm_id, cow_c, "pregnancy_check", date(2023, 9, 1), pregnancy_result="pregnant"),
        event(farm_id, cow_c, "calving", date(2024, 6, 8)),
        event(farm_id, cow_c, "heat_detection", date(2024, 6, 20)),
        # Another farm never leaks in
        event(uuid4(), cow_a, "insemination", date(2024, 6, 1)),
    ]
    stats = compute_stats(farm_id, events, AS_OF)

    assert stats.total_inseminations == 2
    assert stats.total_pregnancy_checks == 4
    assert stats.total_calvings == 1
    assert stats.total_heat_detections == 1
    assert stats.recent_heat_detections == 1
    # cow_b's latest check is open, cow_c calved after its positive check
    assert stats.currently_pregnant == 1
    assert stats.conception_rate == 75
    assert 0 <= stats.conception_rate <= 100


def test_stats_trends_compare_trailing_windows():
    farm_id = uuid4()
    animal_id = uuid4()
    events = [
        event(farm_id, animal_id, "heat_detection", AS_OF - timedelta(days=5)),
        event(farm_id, animal_id, "heat_detection", AS_OF - timedelta(days=10), minute=1),
        event(farm_id, animal_id, "heat_detection", AS_OF - timedelta(days=40), minute=2),
        event(farm_id, animal_id, "insemination", AS_OF - timedelta(days=45), minute=3),
    ]
    stats = compute_stats(farm_id, events, AS_OF)
    assert stats.trends.heat_detection_trend == 100
    assert stats.trends.insemination_trend == -100
    assert stats.trends.pregnancy_trend == 0


def test_stats_with_no_events():
    stats = compute_stats(uuid4(), [], AS_OF)
    assert stats.conception_rate == 0
    assert stats.currently_pregnant == 0
    assert stats.trends.heat_detection_trend == 0


def _pregnant(farm_id, tag, due: date) -> Animal:
    animal = Animal.create(farm_id=farm_id, tag=tag, production_status="served")
    animal.expected_calving_date = due
    return animal


def test_calving_due_alert_priorities():
    farm_id = uuid4()
    animals = [
        _pregnant(farm_id, "soon", AS_OF + timedelta(days=2)),
        _pregnant(farm_id, "week", AS_OF + timedelta(days=7)),
        _pregnant(farm_id, "later", AS_OF + timedelta(days=14)),
        _pregnant(farm_id, "far", AS_OF + timedelta(days=15)),
        _pregnant(farm_id, "past", AS_OF - timedelta(days=1)),
    ]
    alerts = compute_alerts(farm_id, animals, [], AS_OF)
    assert [(a.animal_tag, a.priority, a.severity) for a in alerts] == [
        ("soon", "high", "critical"),
        ("week", "medium", "warning"),
        ("later", "low", "info"),
    ]
    assert alerts[0].days_remaining == 2
    assert alerts[0].id == f"calving_due-{alerts[0].animal_id}"


def test_pregnancy_check_due_alerts():
    farm_id = uuid4()
    overdue = Animal.create(farm_id=farm_id, tag="overdue", production_status="served")
    mid = Animal.create(farm_id=farm_id, tag="mid", production_status="served")
    early = Animal.create(farm_id=farm_id, tag="early", production_status="served")
    checked = Animal.create(farm_id=farm_id, tag="checked", production_status="served")
    too_old = Animal.create(farm_id=farm_id, tag="too-old", production_status="served")
    events = [
        event(farm_id, overdue.id, "insemination", AS_OF - timedelta(days=50)),
        event(farm_id, mid.id, "insemination", AS_OF - timedelta(days=38)),
        event(farm_id, early.id, "insemination", AS_OF - timedelta(days=30)),
        event(farm_id, checked.id, "insemination", AS_OF - timedelta(days=40)),
        event(
            farm_id,
            checked.id,
            "pregnancy_check",
            AS_OF - timedelta(days=2),
            pregnancy_result="pregnant",
        ),
        event(farm_id, too_old.id, "insemination", AS_OF - timedelta(days=61)),
    ]
    alerts = compute_alerts(
        farm_id, [overdue, mid, early, checked, too_old], [], AS_OF, events=events
    )
    by_tag = {a.animal_tag: a for a in alerts}
    assert set(by_tag) == {"overdue", "mid", "early"}
    assert (by_tag["overdue"].priority, by_tag["overdue"].days_remaining) == ("high", 0)
    assert (by_tag["mid"].priority, by_tag["mid"].days_remaining) == ("medium", 7)
    assert (by_tag["early"].priority, by_tag["early"].days_remaining) == ("low", 15)


def test_calendar_driven_alerts():
    farm_id = uuid4()
    cow = _pregnant(farm_id, "dry-soon", AS_OF + timedelta(days=40))
    fresh = Animal.create(farm_id=farm_id, tag="fresh", production_status="lactating")
    entries = [
        CalendarEntry.create(
            farm_id=farm_id,
            animal_id=cow.id,
            event_type="dry_off_scheduled",
            scheduled_date=AS_OF - timedelta(days=1),
        ),
        CalendarEntry.create(
            farm_id=farm_id,
            animal_id=fresh.id,
            event_type="breeding_eligible",
            scheduled_date=AS_OF - timedelta(days=3),
        ),
    ]
    alerts = compute_alerts(farm_id, [cow, fresh], entries, AS_OF)
    assert [(a.type, a.priority) for a in alerts] == [
        ("dry_off_due", "high"),
        ("breeding_due", "low"),
    ]


def test_alerts_never_put_low_before_high():
    farm_id = uuid4()
    animals = [
        _pregnant(farm_id, f"cow-{days}", AS_OF + timedelta(days=days)) for days in range(14, -1, -1)
    ]
    alerts = compute_alerts(farm_id, animals, [], AS_OF)
    ranks = [{"high": 3, "medium": 2, "low": 1}[a.priority] for a in alerts]
    assert ranks == sorted(ranks, reverse=True)
