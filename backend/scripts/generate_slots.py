#!/usr/bin/env python3
"""
Populate calendar slots for a window (idempotent: existing slots and bookings are kept).
Defaults come from .env (business hours, slot duration, window days, timezone).
Run: cd backend && python scripts/generate_slots.py --start 2024-06-03 --days 7
"""
import argparse
import sys
from datetime import date
from pathlib import Path

# backend/scripts/ -> backend/
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from slotbook.config import settings
from slotbook.core.errors import SlotbookError
from slotbook.db.session import create_db_engine, make_session_factory
from slotbook.services.calendar import BusinessHours, populate_window, rolling_window_start
from slotbook.services.slot_store import SlotStore


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate bookable slots for a date window")
    parser.add_argument("--start", type=date.fromisoformat, default=None, help="First day YYYY-MM-DD (default: today)")
    parser.add_argument("--days", type=int, default=settings.window_days, help="Number of consecutive days")
    parser.add_argument("--start-hour", type=int, default=settings.business_start_hour)
    parser.add_argument("--end-hour", type=int, default=settings.business_end_hour, help="Exclusive")
    parser.add_argument("--duration", type=int, default=settings.slot_duration_minutes, help="Slot minutes")
    args = parser.parse_args()

    start = args.start or rolling_window_start(settings.calendar_timezone)
    engine = create_db_engine(settings.database_url)
    try:
        store = SlotStore(make_session_factory(engine))
        report = populate_window(
            store,
            start,
            args.days,
            BusinessHours(args.start_hour, args.end_hour),
            args.duration,
            tz=settings.calendar_timezone,
        )
    except SlotbookError as e:
        print(f"FAIL {e.code}: {e.message}")
        return 1
    finally:
        engine.dispose()
    print(f"Done. from={start} days={args.days} slots={report.requested} inserted={report.inserted} existing={report.existing}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
