"""Subject directory upsert, called by the identity layer when a subject registers or changes details."""
from typing import Any

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from slotbook.api.deps import get_subject_directory
from slotbook.core.constants import SUBJECT_ID_MAX_LENGTH
from slotbook.core.errors import SlotbookError, slotbook_error_to_http
from slotbook.services.subjects import SubjectDirectory

router = APIRouter()


class SubjectBody(BaseModel):
    display_name: str | None = Field(None, max_length=256)
    contact: str | None = Field(None, max_length=256, description="e.g. email")


@router.put("/subjects/{subject_id}")
def upsert_subject(
    body: SubjectBody,
    subject_id: str = Path(..., min_length=1, max_length=SUBJECT_ID_MAX_LENGTH),
    directory: SubjectDirectory = Depends(get_subject_directory),
) -> dict[str, Any]:
    try:
        projection = directory.upsert(subject_id.strip(), body.display_name, body.contact)
    except SlotbookError as exc:
        raise slotbook_error_to_http(exc) from exc
    return {"subject": projection.to_dict()}
