"""
Booking engine: turn a claim outcome from the slot store into a booking or a typed error.

No retries: SlotAlreadyBooked is a business outcome, not a transient failure. Re-booking a
slot the same subject already holds is a conflict like any other.
"""
from __future__ import annotations

import logging

from slotbook.core.constants import SUBJECT_ID_MAX_LENGTH
from slotbook.core.errors import InvalidBookingRequest, SlotAlreadyBooked, SlotNotFound
from slotbook.services.slot_store import SlotStore
from slotbook.services.subjects import SubjectDirectory
from slotbook.services.types import BookingRecord, ClaimStatus, SubjectProjection

logger = logging.getLogger(__name__)


class BookingEngine:
    def __init__(self, store: SlotStore, directory: SubjectDirectory | None = None):
        self.store = store
        self.directory = directory

    def book(self, subject_id: str, slot_id: str) -> BookingRecord:
        subject_id = (subject_id or "").strip()
        slot_id = (slot_id or "").strip()
        if not subject_id:
            raise InvalidBookingRequest("subject_id must be non-empty")
        if len(subject_id) > SUBJECT_ID_MAX_LENGTH:
            raise InvalidBookingRequest(f"subject_id must be at most {SUBJECT_ID_MAX_LENGTH} characters")
        if not slot_id:
            raise InvalidBookingRequest("slot_id must be non-empty")

        result = self.store.try_claim(slot_id, subject_id)
        if result.status is ClaimStatus.NOT_FOUND:
            logger.info("Booking rejected: slot %s not found (subject %s)", slot_id, subject_id)
            raise SlotNotFound(slot_id)
        if result.status is ClaimStatus.CONFLICT:
            logger.info("Booking rejected: slot %s already booked (subject %s)", slot_id, subject_id)
            raise SlotAlreadyBooked(slot_id)

        booking = result.booking
        logger.info("Booking %s created: slot %s for subject %s", booking.id, slot_id, subject_id)
        subject = self.directory.resolve(subject_id) if self.directory else SubjectProjection(id=subject_id)
        return BookingRecord(id=booking.id, slot=booking.slot, subject=subject, created_at=booking.created_at)
