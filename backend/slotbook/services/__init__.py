from slotbook.services.booking_service import BookingEngine
from slotbook.services.calendar import BusinessHours, generate_slot_definitions, populate_window
from slotbook.services.query_service import QueryService
from slotbook.services.slot_store import SlotStore
from slotbook.services.subjects import SubjectDirectory

__all__ = [
    "BookingEngine",
    "BusinessHours",
    "QueryService",
    "SlotStore",
    "SubjectDirectory",
    "generate_slot_definitions",
    "populate_window",
]
