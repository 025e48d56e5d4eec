"""Booking: claim a slot, list own bookings, list all bookings (admin)."""
from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from slotbook.api.deps import current_subject_id, get_booking_engine, get_query_service, require_admin
from slotbook.core.errors import SlotbookError, slotbook_error_to_http
from slotbook.services.booking_service import BookingEngine
from slotbook.services.query_service import QueryService

router = APIRouter()


class BookRequest(BaseModel):
    slot_id: str = Field(..., min_length=1, max_length=64, description="Slot identifier from GET /slots")


@router.post("/book", status_code=status.HTTP_201_CREATED)
def book_slot(
    body: BookRequest,
    subject_id: str = Depends(current_subject_id),
    engine: BookingEngine = Depends(get_booking_engine),
) -> dict[str, Any]:
    """
    Claim a slot for the calling subject. 404 if the slot does not exist, 409 if it is
    already booked (by anyone, including the caller). Do not retry a 409 for the same slot.
    """
    try:
        booking = engine.book(subject_id, body.slot_id)
    except SlotbookError as exc:
        raise slotbook_error_to_http(exc) from exc
    return {"message": "Booking created successfully", "booking": booking.to_dict()}


@router.get("/bookings/me")
def my_bookings(
    subject_id: str = Depends(current_subject_id),
    queries: QueryService = Depends(get_query_service),
) -> dict[str, Any]:
    """Bookings held by the calling subject, newest first."""
    try:
        bookings = queries.bookings_for(subject_id)
    except SlotbookError as exc:
        raise slotbook_error_to_http(exc) from exc
    return {"bookings": [b.to_dict() for b in bookings]}


@router.get("/bookings", dependencies=[Depends(require_admin)])
def all_bookings(queries: QueryService = Depends(get_query_service)) -> dict[str, Any]:
    """Every booking, newest first. Admin only."""
    try:
        bookings = queries.all_bookings()
    except SlotbookError as exc:
        raise slotbook_error_to_http(exc) from exc
    return {"bookings": [b.to_dict() for b in bookings]}
