from __future__ import annotations

import pytest

from slotbook.core.errors import (
    InvalidBookingRequest,
    InvalidGenerationParameters,
    SlotAlreadyBooked,
    SlotNotFound,
    StorageUnavailable,
    slotbook_error_to_http,
)


@pytest.mark.parametrize(
    ("exc", "status_code", "code"),
    [
        (SlotNotFound("s1"), 404, "SLOT_NOT_FOUND"),
        (SlotAlreadyBooked("s1"), 409, "SLOT_ALREADY_BOOKED"),
        (StorageUnavailable("down"), 503, "STORAGE_UNAVAILABLE"),
        (InvalidGenerationParameters("bad days"), 400, "INVALID_GENERATION_PARAMETERS"),
        (InvalidBookingRequest("blank"), 400, "VALIDATION_ERROR"),
    ],
)
def test_known_errors_map_to_status_and_code(exc: Exception, status_code: int, code: str) -> None:
    http = slotbook_error_to_http(exc)

    assert http.status_code == status_code
    assert http.detail["error"]["code"] == code


def test_unknown_error_is_internal_and_does_not_leak_message() -> None:
    http = slotbook_error_to_http(RuntimeError("password=hunter2"))

    assert http.status_code == 500
    assert http.detail["error"]["code"] == "INTERNAL_ERROR"
    assert "hunter2" not in http.detail["error"]["message"]
