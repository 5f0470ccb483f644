from __future__ import annotations

from sqlmodel import Field, SQLModel

from .user import new_id


class Appointment(SQLModel, table=True):
    """Booking of an event type by an invitee.

    ``user_id`` is the event type's owner; the invitee has no account.
    ``start_time`` and ``end_time`` are kept exactly as supplied.
    """

    __tablename__ = "appointments"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    event_id: str = Field(nullable=False, index=True, max_length=64)
    user_id: str = Field(nullable=False, index=True, max_length=64)
    invitee_email: str = Field(max_length=255)
    start_time: str = Field(max_length=64)
    end_time: str = Field(max_length=64)
    status: str = Field(default="scheduled", max_length=50)
