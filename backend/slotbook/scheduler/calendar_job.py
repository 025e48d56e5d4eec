"""
Rolling calendar window: make sure slots exist for today .. today + WINDOW_DAYS - 1.

Runs once at startup and daily from the scheduler. Generation is insert-if-absent, so
overlapping runs (or a run racing live bookings) never touch existing slots or bookings.
"""
import logging
from datetime import datetime

from slotbook.config import Settings
from slotbook.services.calendar import (
    BusinessHours,
    GenerationReport,
    populate_window,
    rolling_window_start,
)
from slotbook.services.slot_store import SlotStore

logger = logging.getLogger(__name__)


def run_rolling_window_job(store: SlotStore, settings: Settings, now: datetime | None = None) -> GenerationReport | None:
    """One run. Failures are logged and swallowed so the scheduler keeps the job; returns None on failure."""
    try:
        return populate_window(
            store,
            rolling_window_start(settings.calendar_timezone, now=now),
            settings.window_days,
            BusinessHours(settings.business_start_hour, settings.business_end_hour),
            settings.slot_duration_minutes,
            tz=settings.calendar_timezone,
        )
    except Exception as e:
        logger.warning("Rolling window job failed: %s", e, exc_info=True)
        return None
