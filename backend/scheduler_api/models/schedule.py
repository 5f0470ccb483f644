from __future__ import annotations

from typing import Optional

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class Schedule(SQLModel, table=True):
    """Weekly availability of one account.

    ``availability`` is the JSON-encoded day list, kept opaque at rest.
    Nothing prevents a second row for the same ``user_id``; lookups by owner
    return the oldest one.
    """

    __tablename__ = "schedules"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(nullable=False, index=True, max_length=64)
    availability: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
