from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel

from .user import new_id


class EventType(SQLModel, table=True):
    """Bookable event type owned by one account."""

    __tablename__ = "events"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    name: str = Field(max_length=255)
    duration: int = Field(nullable=False)
    description: Optional[str] = Field(default=None, max_length=2000)
    color: Optional[str] = Field(default=None, max_length=7)
    user_id: str = Field(nullable=False, index=True, max_length=64)
