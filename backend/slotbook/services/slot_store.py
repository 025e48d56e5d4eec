"""
Slot store: durable slots and bookings, and the only code path that creates a booking.

- Slots are written with INSERT ... ON CONFLICT DO NOTHING (insert-if-absent), so generation
  is idempotent and can never overwrite a slot that already carries a booking.
- A claim is one statement:
      INSERT INTO bookings (...) SELECT ... FROM slots WHERE slots.id = :slot_id
      ON CONFLICT (slot_id) DO NOTHING
  The unique constraint on bookings.slot_id decides the race; one inserted row = CLAIMED.
  Zero rows: the slot is either missing (NOT_FOUND) or already claimed (CONFLICT); slots are
  never deleted, so checking existence afterwards in the same transaction is safe.
- Each operation runs in its own transaction. Storage failures surface as StorageUnavailable
  after rollback; there is no partial state to clean up.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, literal, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import sessionmaker

from slotbook.core.errors import SlotNotFound
from slotbook.db.session import storage_transaction
from slotbook.models.booking import Booking
from slotbook.models.slot import Slot
from slotbook.services.types import (
    BookingRow,
    ClaimResult,
    ClaimStatus,
    CreateResult,
    SlotDefinition,
    as_utc,
)

logger = logging.getLogger(__name__)

# Dialects whose INSERT supports ON CONFLICT DO NOTHING
_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}

# Rows per multi-VALUES insert; 3 params per row keeps SQLite under its 999-variable limit
SLOT_INSERT_CHUNK = 250


def _to_definition(row: Slot) -> SlotDefinition:
    return SlotDefinition(id=row.id, start_at=as_utc(row.start_at), end_at=as_utc(row.end_at))


def _to_booking_row(booking: Booking, slot: Slot) -> BookingRow:
    return BookingRow(
        id=booking.id,
        subject_id=booking.subject_id,
        slot=_to_definition(slot),
        created_at=as_utc(booking.created_at),
    )


class SlotStore:
    """Shared by reference between the calendar generator, booking engine and query service."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        dialect = session_factory.kw["bind"].dialect.name
        if dialect not in _INSERTS:
            raise ValueError(f"Unsupported database dialect for slot store: {dialect}")
        self._insert = _INSERTS[dialect]

    # ── Slots ────────────────────────────────────────────────────────────

    def get_slot(self, slot_id: str) -> SlotDefinition:
        with storage_transaction(self._session_factory) as db:
            row = db.get(Slot, slot_id)
            if row is None:
                raise SlotNotFound(slot_id)
            return _to_definition(row)

    def list_slots(self, start: datetime, end: datetime) -> list[SlotDefinition]:
        """Slots with start <= start_at <= end, ascending by start_at."""
        with storage_transaction(self._session_factory) as db:
            rows = db.scalars(
                select(Slot)
                .where(Slot.start_at >= as_utc(start), Slot.start_at <= as_utc(end))
                .order_by(Slot.start_at.asc())
            ).all()
            return [_to_definition(r) for r in rows]

    def list_slot_states(self, start: datetime, end: datetime) -> list[tuple[SlotDefinition, BookingRow | None]]:
        """Slots in range joined with their booking (if any), ascending by start_at."""
        with storage_transaction(self._session_factory) as db:
            rows = db.execute(
                select(Slot, Booking)
                .outerjoin(Booking, Booking.slot_id == Slot.id)
                .where(Slot.start_at >= as_utc(start), Slot.start_at <= as_utc(end))
                .order_by(Slot.start_at.asc())
            ).all()
            return [
                (_to_definition(slot), _to_booking_row(booking, slot) if booking is not None else None)
                for slot, booking in rows
            ]

    def create_slot_if_absent(self, definition: SlotDefinition) -> CreateResult:
        if self.create_slots_if_absent([definition]) == 1:
            return CreateResult.INSERTED
        return CreateResult.ALREADY_EXISTS

    def create_slots_if_absent(self, definitions: Sequence[SlotDefinition]) -> int:
        """Insert slots that do not exist yet; returns how many were inserted."""
        if not definitions:
            return 0
        inserted = 0
        with storage_transaction(self._session_factory) as db:
            for i in range(0, len(definitions), SLOT_INSERT_CHUNK):
                chunk = definitions[i : i + SLOT_INSERT_CHUNK]
                stmt = (
                    self._insert(Slot)
                    .values([{"id": d.id, "start_at": as_utc(d.start_at), "end_at": as_utc(d.end_at)} for d in chunk])
                    .on_conflict_do_nothing()
                )
                inserted += db.execute(stmt).rowcount
        logger.debug("create_slots_if_absent: %s requested, %s inserted", len(definitions), inserted)
        return inserted

    # ── Bookings ─────────────────────────────────────────────────────────

    def try_claim(self, slot_id: str, subject_id: str) -> ClaimResult:
        booking_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        with storage_transaction(self._session_factory) as db:
            claim = (
                self._insert(Booking)
                .from_select(
                    ["id", "subject_id", "slot_id", "created_at"],
                    select(
                        literal(booking_id, String),
                        literal(subject_id, String),
                        Slot.id,
                        literal(now, DateTime(timezone=True)),
                    ).where(Slot.id == slot_id),
                )
                .on_conflict_do_nothing(index_elements=["slot_id"])
            )
            if db.execute(claim).rowcount == 1:
                slot = db.get(Slot, slot_id)
                return ClaimResult(
                    status=ClaimStatus.CLAIMED,
                    booking=BookingRow(
                        id=booking_id,
                        subject_id=subject_id,
                        slot=_to_definition(slot),
                        created_at=now,
                    ),
                )
            exists = db.execute(select(Slot.id).where(Slot.id == slot_id)).first() is not None
        return ClaimResult(status=ClaimStatus.CONFLICT if exists else ClaimStatus.NOT_FOUND)

    def list_bookings(self, subject_id: str | None = None) -> list[BookingRow]:
        """Bookings newest first; all subjects when subject_id is None."""
        with storage_transaction(self._session_factory) as db:
            q = select(Booking, Slot).join(Slot, Slot.id == Booking.slot_id)
            if subject_id is not None:
                q = q.where(Booking.subject_id == subject_id)
            rows = db.execute(q.order_by(Booking.created_at.desc(), Booking.id.desc())).all()
            return [_to_booking_row(booking, slot) for booking, slot in rows]
