from __future__ import annotations

import pytest
from pydantic import ValidationError

from slotbook.config import Settings


def test_defaults_match_office_calendar() -> None:
    settings = Settings(_env_file=None)

    assert (settings.business_start_hour, settings.business_end_hour) == (9, 17)
    assert settings.slot_duration_minutes == 30
    assert settings.window_days == 7
    assert settings.calendar_timezone == "UTC"


def test_env_overrides_and_cors_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "  sqlite:///./x.db ")
    monkeypatch.setenv("SLOT_DURATION_MINUTES", "45")
    monkeypatch.setenv("SCHEDULER_ENABLED", "false")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, ,https://b.example")

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:///./x.db"
    assert settings.slot_duration_minutes == 45
    assert settings.scheduler_enabled is False
    assert settings.cors_origin_list == ["https://a.example", "https://b.example"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"business_start_hour": 17, "business_end_hour": 9},
        {"business_start_hour": 9, "business_end_hour": 9},
        {"business_end_hour": 25},
        {"slot_duration_minutes": 0},
        {"window_days": -1},
    ],
)
def test_invalid_calendar_settings_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)
