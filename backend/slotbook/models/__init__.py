from slotbook.models.booking import Booking
from slotbook.models.slot import Slot
from slotbook.models.subject import Subject

__all__ = [
    "Booking",
    "Slot",
    "Subject",
]
