from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class EventCreate(BaseModel):
    name: Optional[str] = None
    duration: Optional[int] = None
    description: Optional[str] = None
    color: Optional[str] = None


class EventUpdate(BaseModel):
    name: Optional[str] = None
    duration: Optional[int] = None
    description: Optional[str] = None
    color: Optional[str] = None

    def changes(self) -> dict[str, Any]:
        values = self.model_dump()
        changes = {field: value for field, value in values.items() if value}
        # A zero duration is still a supplied value; it fails validation later.
        if values["duration"] is not None:
            changes["duration"] = values["duration"]
        return changes


class EventRead(BaseModel):
    id: str
    name: str
    duration: int
    description: str = ""
    color: str = ""
    user_id: str
    is_owner: bool

    @classmethod
    def from_event(cls, event, viewer_id: str) -> EventRead:
        return cls(
            id=event.id,
            name=event.name,
            duration=event.duration,
            description=event.description or "",
            color=event.color or "",
            user_id=event.user_id,
            is_owner=event.user_id == viewer_id,
        )


class EventListResponse(BaseModel):
    events: list[EventRead]
