"""
Read-only projections over the slot store: availability by day range and booking listings.
No authorization here; the caller decides who may see all bookings.
"""
from __future__ import annotations

from datetime import date, datetime, time, timezone

from slotbook.services.slot_store import SlotStore
from slotbook.services.subjects import SubjectDirectory
from slotbook.services.types import BookingRecord, BookingRow, SlotAvailability, SubjectProjection

# Inclusive day range: from_date 00:00:00 UTC through to_date 23:59:59 UTC
_DAY_START = time(0, 0, 0)
_DAY_END = time(23, 59, 59)


class QueryService:
    def __init__(self, store: SlotStore, directory: SubjectDirectory | None = None):
        self.store = store
        self.directory = directory

    def _projections(self, subject_ids: list[str]) -> dict[str, SubjectProjection]:
        if self.directory is None:
            return {sid: SubjectProjection(id=sid) for sid in subject_ids}
        return self.directory.resolve_many(subject_ids)

    def available_slots(self, from_date: date, to_date: date) -> list[SlotAvailability]:
        """Every slot starting in [from_date, to_date] (UTC days), ascending, with booked state."""
        if from_date > to_date:
            raise ValueError(f"from_date {from_date} is after to_date {to_date}")
        start = datetime.combine(from_date, _DAY_START, tzinfo=timezone.utc)
        end = datetime.combine(to_date, _DAY_END, tzinfo=timezone.utc)
        states = self.store.list_slot_states(start, end)
        subjects = self._projections([b.subject_id for _, b in states if b is not None])
        return [
            SlotAvailability(
                slot=slot,
                is_booked=booking is not None,
                booked_by=subjects[booking.subject_id] if booking is not None else None,
            )
            for slot, booking in states
        ]

    def _records(self, rows: list[BookingRow]) -> list[BookingRecord]:
        subjects = self._projections([r.subject_id for r in rows])
        return [
            BookingRecord(id=r.id, slot=r.slot, subject=subjects[r.subject_id], created_at=r.created_at)
            for r in rows
        ]

    def bookings_for(self, subject_id: str) -> list[BookingRecord]:
        """Bookings held by one subject, newest first."""
        return self._records(self.store.list_bookings(subject_id=subject_id))

    def all_bookings(self) -> list[BookingRecord]:
        """Every booking, newest first. Intended for privileged callers."""
        return self._records(self.store.list_bookings())
