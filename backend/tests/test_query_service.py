from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from slotbook.services.booking_service import BookingEngine
from slotbook.services.calendar import BusinessHours, populate_window
from slotbook.services.query_service import QueryService
from slotbook.services.slot_store import SlotStore
from slotbook.services.subjects import SubjectDirectory
from tests.conftest import OFFICE_HOURS, SCENARIO_START


@pytest.fixture
def week(store: SlotStore) -> None:
    populate_window(store, SCENARIO_START, 7, OFFICE_HOURS, 30)


def test_scenario_a_single_day_is_sixteen_free_slots(query_service: QueryService, week) -> None:
    slots = query_service.available_slots(date(2024, 6, 3), date(2024, 6, 3))

    assert len(slots) == 16
    assert not any(s.is_booked for s in slots)
    assert all(s.booked_by is None for s in slots)
    expected = [time(9 + m // 60, m % 60) for m in range(0, 8 * 60, 30)]
    assert [s.slot.start_at.time() for s in slots] == expected


def test_range_is_inclusive_of_both_days(query_service: QueryService, week) -> None:
    slots = query_service.available_slots(date(2024, 6, 4), date(2024, 6, 6))

    assert len(slots) == 3 * 16
    assert slots[0].slot.start_at == datetime(2024, 6, 4, 9, tzinfo=timezone.utc)
    assert slots[-1].slot.start_at == datetime(2024, 6, 6, 16, 30, tzinfo=timezone.utc)


def test_last_second_of_to_date_is_included(store: SlotStore, query_service: QueryService) -> None:
    populate_window(store, SCENARIO_START, 2, BusinessHours(0, 24), 30)

    slots = query_service.available_slots(date(2024, 6, 3), date(2024, 6, 3))

    assert len(slots) == 48
    assert slots[-1].slot.start_at == datetime(2024, 6, 3, 23, 30, tzinfo=timezone.utc)


def test_round_trip_booked_state(
    store: SlotStore,
    query_service: QueryService,
    booking_engine: BookingEngine,
    directory: SubjectDirectory,
    week,
) -> None:
    directory.upsert("u1", "Una One", "u1@example.com")
    target = query_service.available_slots(date(2024, 6, 3), date(2024, 6, 3))[3]
    assert [s.slot.id for s in query_service.available_slots(date(2024, 6, 3), date(2024, 6, 3))].count(target.slot.id) == 1

    booking_engine.book("u1", target.slot.id)
    after = {s.slot.id: s for s in query_service.available_slots(date(2024, 6, 3), date(2024, 6, 3))}

    assert after[target.slot.id].is_booked
    assert after[target.slot.id].booked_by == directory.resolve("u1")
    assert sum(s.is_booked for s in after.values()) == 1
    assert "booked_by" in after[target.slot.id].to_dict()
    assert "booked_by" not in next(s for s in after.values() if not s.is_booked).to_dict()


def test_bookings_are_listed_newest_first(query_service: QueryService, booking_engine: BookingEngine, week) -> None:
    slots = query_service.available_slots(date(2024, 6, 3), date(2024, 6, 3))
    first = booking_engine.book("u1", slots[5].slot.id)
    other = booking_engine.book("u2", slots[6].slot.id)
    latest = booking_engine.book("u1", slots[0].slot.id)

    mine = query_service.bookings_for("u1")
    everyone = query_service.all_bookings()

    assert [b.id for b in mine] == [latest.id, first.id]
    assert [b.id for b in everyone] == [latest.id, other.id, first.id]
    assert query_service.bookings_for("nobody") == []


def test_unknown_subject_projects_to_id_only(query_service: QueryService, booking_engine: BookingEngine, week) -> None:
    slot = query_service.available_slots(date(2024, 6, 3), date(2024, 6, 3))[0].slot
    booking_engine.book("ghost", slot.id)

    [booked] = [s for s in query_service.available_slots(date(2024, 6, 3), date(2024, 6, 3)) if s.is_booked]

    assert booked.booked_by.id == "ghost"
    assert booked.booked_by.display_name is None and booked.booked_by.contact is None


def test_from_after_to_is_rejected(query_service: QueryService) -> None:
    with pytest.raises(ValueError):
        query_service.available_slots(date(2024, 6, 4), date(2024, 6, 3))


def test_queries_do_not_mutate(store: SlotStore, query_service: QueryService, week) -> None:
    before = store.list_slots(datetime(2000, 1, 1, tzinfo=timezone.utc), datetime(2100, 1, 1, tzinfo=timezone.utc))

    query_service.available_slots(date(2024, 6, 1), date(2024, 6, 30))
    query_service.all_bookings()

    assert store.list_slots(datetime(2000, 1, 1, tzinfo=timezone.utc), datetime(2100, 1, 1, tzinfo=timezone.utc)) == before
    assert store.list_bookings() == []
