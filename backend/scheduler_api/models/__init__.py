from .appointment import Appointment
from .event_type import EventType
from .schedule import Schedule
from .user import User

__all__ = [
    "Appointment",
    "EventType",
    "Schedule",
    "User",
]
