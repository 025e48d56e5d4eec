from __future__ import annotations

from datetime import date

import pytest

import slotbook.models  # noqa: F401  (registers tables on Base.metadata)
from slotbook.db.base import Base
from slotbook.db.session import create_db_engine, make_session_factory
from slotbook.services.booking_service import BookingEngine
from slotbook.services.calendar import BusinessHours
from slotbook.services.query_service import QueryService
from slotbook.services.slot_store import SlotStore
from slotbook.services.subjects import SubjectDirectory

# Monday
SCENARIO_START = date(2024, 6, 3)
OFFICE_HOURS = BusinessHours(9, 17)


@pytest.fixture
def database_url(tmp_path) -> str:
    # File database: concurrent claims need separate connections to one shared store.
    return f"sqlite:///{tmp_path / 'slotbook.db'}"


@pytest.fixture
def db_engine(database_url):
    engine = create_db_engine(database_url)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return make_session_factory(db_engine)


@pytest.fixture
def store(session_factory) -> SlotStore:
    return SlotStore(session_factory)


@pytest.fixture
def directory(session_factory) -> SubjectDirectory:
    return SubjectDirectory(session_factory)


@pytest.fixture
def booking_engine(store, directory) -> BookingEngine:
    return BookingEngine(store, directory)


@pytest.fixture
def query_service(store, directory) -> QueryService:
    return QueryService(store, directory)
