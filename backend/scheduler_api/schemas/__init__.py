from .appointment import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentRead,
    AppointmentUpdate,
)
from .event import EventCreate, EventListResponse, EventRead, EventUpdate
from .pagination import Pagination
from .schedule import (
    Availability,
    DaySchedule,
    ScheduleCreate,
    ScheduleListResponse,
    ScheduleRead,
    ScheduleUpdate,
    TimeRange,
)
from .session import LoginRequest, LoginResponse, LogoutResponse
from .user import UserCreate, UserListResponse, UserRead, UserUpdate

__all__ = [
    "AppointmentCreate",
    "AppointmentListResponse",
    "AppointmentRead",
    "AppointmentUpdate",
    "Availability",
    "DaySchedule",
    "EventCreate",
    "EventListResponse",
    "EventRead",
    "EventUpdate",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "Pagination",
    "ScheduleCreate",
    "ScheduleListResponse",
    "ScheduleRead",
    "ScheduleUpdate",
    "TimeRange",
    "UserCreate",
    "UserListResponse",
    "UserRead",
    "UserUpdate",
]
