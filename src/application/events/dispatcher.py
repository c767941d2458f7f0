from __future__ import annotations

import logging
from typing import Iterable

from src.application.events.models import (
    BreedingEventRecordedEvent,
    FollowUpSchedulingFailedEvent,
    FollowUpsScheduledEvent,
)

logger = logging.getLogger(__name__)


async def dispatch_events(events: Iterable[object]) -> None:
    """
    Dispatch events post-commit. Delivery channels (SMS, email, push) live outside
    this service, so events are published to the log stream they consume.
    Safe to call in a background task.
    """
    events = list(events)
    if not events:
        return

    for event in events:
        try:
            if isinstance(event, BreedingEventRecordedEvent):
                _handle_event_recorded(event)
            elif isinstance(event, FollowUpsScheduledEvent):
                _handle_follow_ups_scheduled(event)
            elif isinstance(event, FollowUpSchedulingFailedEvent):
                _handle_scheduling_failed(event)
        except Exception as e:
            logger.error("Error dispatching event %s: %s", type(event).__name__, e, exc_info=True)


def _handle_event_recorded(e: BreedingEventRecordedEvent) -> None:
    logger.info(
        "Breeding event %s recorded for animal %s (%s) on %s: %s -> %s",
        e.event_type,
        e.tag or e.animal_id,
        e.farm_id,
        e.event_date.isoformat(),
        e.previous_status,
        e.new_status,
    )


def _handle_follow_ups_scheduled(e: FollowUpsScheduledEvent) -> None:
    logger.info(
        "Follow-ups for event %s: %d created, %d already scheduled",
        e.event_id,
        len(e.entry_ids),
        len(e.reused_entry_ids),
    )


def _handle_scheduling_failed(e: FollowUpSchedulingFailedEvent) -> None:
    logger.warning(
        "Follow-up scheduling failed for animal %s after event %s: %s",
        e.animal_id,
        e.event_id,
        e.reason,
    )
