"""Resource ownership checks shared by every mutating route.

Each resource kind is described once by an ``OwnedResource``: how to find a
row for a route key and which attribute names its owner.  Routes validate
their input first, then call ``require_owner`` which reports NOT_FOUND for
a missing row before it ever compares owners, so the order is always
existence, then ownership.
"""

from __future__ import annotations

from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, Generic, Optional, TypeVar

from scheduler_api.core.errors import NotFound, PermissionDenied
from scheduler_api.models import Appointment, EventType, Schedule, User
from scheduler_api.services.store import RecordStore

T = TypeVar("T")


def check_ownership(identity_id: str, owner_id: str, message: Optional[str] = None) -> None:
    """Plain equality; there is no admin override or delegation."""
    if identity_id != owner_id:
        raise PermissionDenied(message)


def _get_by_key(model: type) -> Callable[[RecordStore, Any], Any]:
    def lookup(store: RecordStore, key: Any) -> Any:
        return store.get(model, key)

    return lookup


@dataclass(frozen=True)
class OwnedResource(Generic[T]):
    label: str
    plural: str
    lookup: Callable[[RecordStore, Any], Optional[T]]
    owner_of: Callable[[T], str]

    def not_found(self) -> NotFound:
        return NotFound(f"{self.label} not found")

    def locate(self, store: RecordStore, key: Any) -> T:
        row = self.lookup(store, key) if key else None
        if row is None:
            raise self.not_found()
        return row

    def require_owner(self, store: RecordStore, key: Any, user: User, action: str = "modify") -> T:
        row = self.locate(store, key)
        check_ownership(
            user.id,
            self.owner_of(row),
            f"Forbidden: You can only {action} your own {self.plural}",
        )
        return row


def _schedule_by_owner(store: RecordStore, user_id: str) -> Optional[Schedule]:
    # Several rows may exist for one owner; the oldest one wins.
    return store.first(Schedule, Schedule.user_id == user_id, order_by=Schedule.id)


ACCOUNTS: OwnedResource[User] = OwnedResource(
    label="User",
    plural="account",
    lookup=_get_by_key(User),
    owner_of=attrgetter("id"),
)

EVENTS: OwnedResource[EventType] = OwnedResource(
    label="Event",
    plural="events",
    lookup=_get_by_key(EventType),
    owner_of=attrgetter("user_id"),
)

SCHEDULES: OwnedResource[Schedule] = OwnedResource(
    label="Schedule",
    plural="schedules",
    lookup=_schedule_by_owner,
    owner_of=attrgetter("user_id"),
)

APPOINTMENTS: OwnedResource[Appointment] = OwnedResource(
    label="Appointment",
    plural="appointments",
    lookup=_get_by_key(Appointment),
    owner_of=attrgetter("user_id"),
)
