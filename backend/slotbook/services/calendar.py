"""
Calendar generator: partition business hours into fixed-duration slots.

- One slot per slot_duration_minutes step from start_hour:00, for each of `days` dates.
- end_hour is exclusive: a slot is emitted only if it ends at or before end_hour:00, so a
  duration that does not divide the business day drops the final partial slot
  (9–17 @ 30 min → 16 slots; 9–17 @ 45 min → 10 slots, last one 15:45–16:30).
- Business hours are wall-clock times in the calendar timezone; slots are stored in UTC.
- slot_id = hash(start_at, end_at): the same (date, hour, minute) always yields the same id,
  so re-running generation over an overlapping window is an insert-if-absent no-op.
"""
from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from slotbook.core.errors import InvalidGenerationParameters
from slotbook.services.types import SlotDefinition

if TYPE_CHECKING:
    from slotbook.services.slot_store import SlotStore

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class BusinessHours:
    start_hour: int
    end_hour: int  # exclusive


@dataclass(frozen=True)
class GenerationReport:
    requested: int
    inserted: int

    @property
    def existing(self) -> int:
        return self.requested - self.inserted


def slot_id(start_at: datetime, end_at: datetime) -> str:
    """Stable slot key: one id per UTC interval. 32-char hash."""
    raw = f"{start_at.astimezone(timezone.utc).isoformat()}|{end_at.astimezone(timezone.utc).isoformat()}"
    return hashlib.sha256(raw.encode()).hexdigest()[:32]


def resolve_timezone(name: str) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidGenerationParameters(f"unknown calendar timezone: {name!r}") from e


def rolling_window_start(tz: str = "UTC", now: datetime | None = None) -> date:
    """First day of the rolling window: today in the calendar timezone."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(resolve_timezone(tz)).date()


def _validate(days: int, business_hours: BusinessHours, slot_duration_minutes: int) -> None:
    if days <= 0:
        raise InvalidGenerationParameters(f"days must be positive, got {days}")
    if slot_duration_minutes <= 0:
        raise InvalidGenerationParameters(f"slot duration must be positive, got {slot_duration_minutes}")
    start, end = business_hours.start_hour, business_hours.end_hour
    if not (0 <= start <= 24 and 0 <= end <= 24):
        raise InvalidGenerationParameters(f"business hours must be within 0..24, got {start}..{end}")
    if end <= start:
        raise InvalidGenerationParameters(f"end hour {end} must be after start hour {start}")


def generate_slot_definitions(
    window_start: date | datetime,
    days: int,
    business_hours: BusinessHours,
    slot_duration_minutes: int,
    tz: str = "UTC",
) -> list[SlotDefinition]:
    """
    Slot definitions for `days` consecutive dates starting at window_start's date.
    Time of day on window_start is ignored. Pure: touches no storage.
    """
    _validate(days, business_hours, slot_duration_minutes)
    zone = resolve_timezone(tz)
    if isinstance(window_start, datetime):
        if window_start.tzinfo is not None:
            window_start = window_start.astimezone(zone)
        window_start = window_start.date()

    start_min = business_hours.start_hour * 60
    end_min = min(business_hours.end_hour * 60, MINUTES_PER_DAY)
    duration = timedelta(minutes=slot_duration_minutes)

    out: list[SlotDefinition] = []
    for offset in range(days):
        midnight = datetime.combine(window_start + timedelta(days=offset), time.min)
        t = start_min
        while t + slot_duration_minutes <= end_min:
            local = midnight + timedelta(minutes=t)
            t += slot_duration_minutes
            start_at = local.replace(tzinfo=zone).astimezone(timezone.utc)
            # Wall-clock times skipped by a DST jump map onto real instants; drop them
            if start_at.astimezone(zone).replace(tzinfo=None) != local:
                continue
            end_at = start_at + duration
            out.append(SlotDefinition(id=slot_id(start_at, end_at), start_at=start_at, end_at=end_at))
    return out


def populate_window(
    store: SlotStore,
    window_start: date | datetime,
    days: int,
    business_hours: BusinessHours,
    slot_duration_minutes: int,
    tz: str = "UTC",
) -> GenerationReport:
    """
    Generate the window and write it through the store with insert-if-absent.
    Existing slots (and any bookings on them) are left untouched.
    """
    definitions = generate_slot_definitions(window_start, days, business_hours, slot_duration_minutes, tz)
    inserted = store.create_slots_if_absent(definitions)
    report = GenerationReport(requested=len(definitions), inserted=inserted)
    logger.info(
        "Calendar window from %s (%s days): %s slots, %s inserted, %s already present",
        window_start,
        days,
        report.requested,
        report.inserted,
        report.existing,
    )
    return report
