"""Slot availability by inclusive UTC day range."""
from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from slotbook.api.deps import get_query_service
from slotbook.core.errors import SlotbookError, error_body, slotbook_error_to_http
from slotbook.services.query_service import QueryService

router = APIRouter()


@router.get("/slots")
def list_slots(
    from_date: date = Query(..., alias="from", description="First day, YYYY-MM-DD (UTC)"),
    to_date: date = Query(..., alias="to", description="Last day, YYYY-MM-DD (UTC), inclusive"),
    queries: QueryService = Depends(get_query_service),
) -> dict[str, Any]:
    """All slots starting between from 00:00:00 and to 23:59:59 UTC, ascending, with booked state."""
    try:
        slots = queries.available_slots(from_date, to_date)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=error_body("VALIDATION_ERROR", str(exc))) from exc
    except SlotbookError as exc:
        raise slotbook_error_to_http(exc) from exc
    return {"slots": [s.to_dict() for s in slots]}
