from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Response, status

from scheduler_api.api.deps import CurrentUser
from scheduler_api.core.errors import InvalidArgument
from scheduler_api.core.validators import is_valid_hex_color
from scheduler_api.models import EventType
from scheduler_api.schemas import EventCreate, EventListResponse, EventRead, EventUpdate
from scheduler_api.services.permissions import EVENTS
from scheduler_api.services.store import StoreDep

router = APIRouter()


def _validate_fields(duration: Optional[int], color: Optional[str]) -> None:
    if duration is not None and duration <= 0:
        raise InvalidArgument("Duration must be a positive number of minutes")
    if color and not is_valid_hex_color(color):
        raise InvalidArgument("Color must be a valid hex color (e.g., #FF0000)")


@router.post(
    "",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event type",
)
def create_event(payload: EventCreate, store: StoreDep, current_user: CurrentUser) -> EventRead:
    if not payload.name or payload.duration is None:
        raise InvalidArgument("Name and duration are required")
    _validate_fields(payload.duration, payload.color)

    event = store.insert(
        EventType(
            name=payload.name,
            duration=payload.duration,
            description=payload.description or None,
            color=payload.color or None,
            user_id=current_user.id,
        )
    )
    return EventRead.from_event(event, current_user.id)


@router.get("", response_model=EventListResponse, summary="List own event types")
def list_events(store: StoreDep, current_user: CurrentUser) -> EventListResponse:
    events = store.scan(EventType, EventType.user_id == current_user.id, order_by=EventType.name)
    return EventListResponse(events=[EventRead.from_event(event, current_user.id) for event in events])


@router.get("/{event_id}", response_model=EventRead, summary="Get an event type")
def get_event(event_id: str, store: StoreDep, current_user: CurrentUser) -> EventRead:
    return EventRead.from_event(EVENTS.locate(store, event_id), current_user.id)


@router.patch("/{event_id}", response_model=EventRead, summary="Update own event type")
def update_event(
    event_id: str,
    payload: EventUpdate,
    store: StoreDep,
    current_user: CurrentUser,
) -> EventRead:
    changes: dict[str, Any] = payload.changes()
    if not changes:
        raise InvalidArgument("At least one field is required")
    _validate_fields(changes.get("duration"), changes.get("color"))

    EVENTS.require_owner(store, event_id, current_user)

    if store.update(EventType, EventType.id == event_id, values=changes) == 0:
        raise EVENTS.not_found()
    return EventRead.from_event(EVENTS.locate(store, event_id), current_user.id)


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete own event type",
)
def delete_event(event_id: str, store: StoreDep, current_user: CurrentUser) -> Response:
    EVENTS.require_owner(store, event_id, current_user, action="delete")

    if store.delete(EventType, EventType.id == event_id) == 0:
        raise EVENTS.not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
