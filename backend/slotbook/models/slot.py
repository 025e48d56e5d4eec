"""Bookable interval [start_at, end_at). Immutable once created; id is derived from the interval."""
from sqlalchemy import Column, DateTime, String, UniqueConstraint
from sqlalchemy.sql import func

from slotbook.db.base import Base


class Slot(Base):
    __tablename__ = "slots"

    id = Column(String(32), primary_key=True)  # sha256(start|end)[:32], see services.calendar.slot_id
    start_at = Column(DateTime(timezone=True), nullable=False, index=True)
    end_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("start_at", "end_at", name="uq_slots_start_end"),)
