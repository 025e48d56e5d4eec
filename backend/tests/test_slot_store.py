from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from slotbook.core.errors import SlotNotFound, StorageUnavailable
from slotbook.db.session import create_db_engine, make_session_factory
from slotbook.services.calendar import generate_slot_definitions, populate_window
from slotbook.services.slot_store import SlotStore
from slotbook.services.types import ClaimStatus, CreateResult
from tests.conftest import OFFICE_HOURS, SCENARIO_START

_EPOCH = datetime(2000, 1, 1, tzinfo=timezone.utc)
_FAR = datetime(2100, 1, 1, tzinfo=timezone.utc)


def test_create_slot_if_absent_is_idempotent(store: SlotStore) -> None:
    definition = generate_slot_definitions(SCENARIO_START, 1, OFFICE_HOURS, 30)[0]

    assert store.create_slot_if_absent(definition) is CreateResult.INSERTED
    assert store.create_slot_if_absent(definition) is CreateResult.ALREADY_EXISTS
    assert store.get_slot(definition.id) == definition


def test_get_slot_unknown_id_raises(store: SlotStore) -> None:
    with pytest.raises(SlotNotFound):
        store.get_slot("nonexistent-slot")


def test_list_slots_is_ordered_and_bounded(store: SlotStore) -> None:
    definitions = generate_slot_definitions(SCENARIO_START, 2, OFFICE_HOURS, 30)
    # Insert in reverse to make sure ordering comes from the query
    store.create_slots_if_absent(list(reversed(definitions)))

    first_day = store.list_slots(
        datetime(2024, 6, 3, tzinfo=timezone.utc),
        datetime(2024, 6, 3, 23, 59, 59, tzinfo=timezone.utc),
    )

    assert [s.start_at for s in first_day] == sorted(s.start_at for s in first_day)
    assert first_day == definitions[:16]


def test_overlapping_generation_matches_union_window(store: SlotStore, session_factory) -> None:
    populate_window(store, SCENARIO_START, 4, OFFICE_HOURS, 30)
    booked = store.list_slots(_EPOCH, _FAR)[20]
    claim = store.try_claim(booked.id, "u1")

    report = populate_window(store, SCENARIO_START + timedelta(days=2), 5, OFFICE_HOURS, 30)

    assert report.requested == 5 * 16
    assert report.inserted == 3 * 16
    assert report.existing == 2 * 16
    union = generate_slot_definitions(SCENARIO_START, 7, OFFICE_HOURS, 30)
    assert store.list_slots(_EPOCH, _FAR) == union
    bookings = store.list_bookings()
    assert [b.id for b in bookings] == [claim.booking.id]
    assert bookings[0].slot == booked


def test_try_claim_outcomes(store: SlotStore) -> None:
    populate_window(store, SCENARIO_START, 1, OFFICE_HOURS, 30)
    slot = store.list_slots(_EPOCH, _FAR)[0]

    first = store.try_claim(slot.id, "u1")
    again = store.try_claim(slot.id, "u2")
    missing = store.try_claim("nonexistent-slot", "u1")

    assert first.status is ClaimStatus.CLAIMED
    assert first.booking.slot == slot
    assert first.booking.subject_id == "u1"
    assert first.booking.created_at.tzinfo is not None
    assert again.status is ClaimStatus.CONFLICT and again.booking is None
    assert missing.status is ClaimStatus.NOT_FOUND and missing.booking is None
    assert len(store.list_bookings()) == 1


def test_list_bookings_filters_by_subject(store: SlotStore) -> None:
    populate_window(store, SCENARIO_START, 1, OFFICE_HOURS, 30)
    slots = store.list_slots(_EPOCH, _FAR)
    store.try_claim(slots[0].id, "u1")
    store.try_claim(slots[1].id, "u2")
    store.try_claim(slots[2].id, "u1")

    mine = store.list_bookings(subject_id="u1")

    assert [b.slot.id for b in mine] == [slots[2].id, slots[0].id]
    assert len(store.list_bookings()) == 3


def test_unreachable_database_raises_storage_unavailable(tmp_path) -> None:
    engine = create_db_engine(f"sqlite:///{tmp_path / 'missing-dir' / 'slotbook.db'}")
    store = SlotStore(make_session_factory(engine))
    try:
        with pytest.raises(StorageUnavailable):
            store.try_claim("any-slot", "u1")
        with pytest.raises(StorageUnavailable):
            store.list_slots(_EPOCH, _FAR)
    finally:
        engine.dispose()
