"""
Request dependencies: services built at startup (app.state) and the caller identity
forwarded by the identity layer in headers.
"""
from fastapi import Depends, Header, HTTPException, Request

from slotbook.core.constants import ADMIN_ROLE, SUBJECT_ID_HEADER, SUBJECT_ROLE_HEADER
from slotbook.core.errors import error_body
from slotbook.services.booking_service import BookingEngine
from slotbook.services.query_service import QueryService
from slotbook.services.subjects import SubjectDirectory


def get_booking_engine(request: Request) -> BookingEngine:
    return request.app.state.booking_engine


def get_query_service(request: Request) -> QueryService:
    return request.app.state.query_service


def get_subject_directory(request: Request) -> SubjectDirectory:
    return request.app.state.subject_directory


def current_subject_id(
    x_subject_id: str | None = Header(None, alias=SUBJECT_ID_HEADER),
) -> str:
    subject_id = (x_subject_id or "").strip()
    if not subject_id:
        raise HTTPException(status_code=401, detail=error_body("UNAUTHENTICATED", "Missing subject identity"))
    return subject_id


def current_role(
    x_subject_role: str | None = Header(None, alias=SUBJECT_ROLE_HEADER),
) -> str:
    return (x_subject_role or "").strip().lower()


def require_admin(role: str = Depends(current_role)) -> str:
    if role != ADMIN_ROLE:
        raise HTTPException(status_code=403, detail=error_body("FORBIDDEN", "Admin role required"))
    return role
