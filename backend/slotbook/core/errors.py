"""
Error taxonomy for the calendar core and its mapping to HTTP.

The core raises these as typed outcomes; translating them into status codes and
envelopes happens only in slotbook_error_to_http so routes stay thin.
"""
from __future__ import annotations

from fastapi import HTTPException


class SlotbookError(Exception):
    """Base for every outcome the core reports to its callers."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SlotNotFound(SlotbookError):
    code = "SLOT_NOT_FOUND"

    def __init__(self, slot_id: str):
        super().__init__("Slot not found")
        self.slot_id = slot_id


class SlotAlreadyBooked(SlotbookError):
    """Permanent for that slot: callers should pick another slot rather than retry."""

    code = "SLOT_ALREADY_BOOKED"

    def __init__(self, slot_id: str):
        super().__init__("Slot already booked")
        self.slot_id = slot_id


class StorageUnavailable(SlotbookError):
    """Transient: the whole operation may be retried (claims are atomic, so no double booking)."""

    code = "STORAGE_UNAVAILABLE"


class InvalidGenerationParameters(SlotbookError):
    code = "INVALID_GENERATION_PARAMETERS"


class InvalidBookingRequest(SlotbookError):
    code = "VALIDATION_ERROR"


# ---------------------------------------------------------------------------
# HTTP mapping: (error type, status_code). First match wins.
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_INTERNAL_ERROR = 500
STATUS_SERVICE_UNAVAILABLE = 503

MSG_INTERNAL_ERROR = "Internal server error"

ERROR_STATUS_RULES: list[tuple[type[SlotbookError], int]] = [
    (SlotNotFound, STATUS_NOT_FOUND),
    (SlotAlreadyBooked, STATUS_CONFLICT),
    (StorageUnavailable, STATUS_SERVICE_UNAVAILABLE),
    (InvalidGenerationParameters, STATUS_BAD_REQUEST),
    (InvalidBookingRequest, STATUS_BAD_REQUEST),
]


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


def slotbook_error_to_http(exc: Exception) -> HTTPException:
    """
    Map a core exception into an HTTPException whose detail is the error envelope.
    Anything not in ERROR_STATUS_RULES becomes a 500 without leaking the exception text.
    """
    for error_type, status_code in ERROR_STATUS_RULES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=error_body(exc.code, exc.message))
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=error_body("INTERNAL_ERROR", MSG_INTERNAL_ERROR))
