"""One claim on one slot by one subject. The unique slot_id constraint is what makes a claim exclusive."""
from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint

from slotbook.core.constants import SUBJECT_ID_MAX_LENGTH
from slotbook.db.base import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True)  # uuid4
    subject_id = Column(String(SUBJECT_ID_MAX_LENGTH), nullable=False, index=True)  # opaque; not a FK
    slot_id = Column(String(32), ForeignKey("slots.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    __table_args__ = (UniqueConstraint("slot_id", name="uq_bookings_slot_id"),)
