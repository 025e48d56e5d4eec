"""Plain records returned by the calendar core. Same shape whichever dialect backs the store."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def as_utc(dt: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass(frozen=True)
class SlotDefinition:
    id: str
    start_at: datetime
    end_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "start_at": self.start_at.isoformat(),
            "end_at": self.end_at.isoformat(),
        }


@dataclass(frozen=True)
class SubjectProjection:
    """Minimal view of a subject: never more than id, name and contact."""

    id: str
    display_name: str | None = None
    contact: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "display_name": self.display_name, "contact": self.contact}


@dataclass(frozen=True)
class BookingRow:
    """A booking as stored, joined with its slot."""

    id: str
    subject_id: str
    slot: SlotDefinition
    created_at: datetime


@dataclass(frozen=True)
class BookingRecord:
    """A booking with its slot and subject resolved, as handed to callers."""

    id: str
    slot: SlotDefinition
    subject: SubjectProjection
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "slot": self.slot.to_dict(),
            "subject": self.subject.to_dict(),
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class SlotAvailability:
    slot: SlotDefinition
    is_booked: bool
    booked_by: SubjectProjection | None = None

    def to_dict(self) -> dict[str, Any]:
        out = {**self.slot.to_dict(), "is_booked": self.is_booked}
        if self.booked_by is not None:
            out["booked_by"] = self.booked_by.to_dict()
        return out


class CreateResult(enum.Enum):
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"


class ClaimStatus(enum.Enum):
    CLAIMED = "claimed"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ClaimResult:
    status: ClaimStatus
    booking: BookingRow | None = None
