from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class AppointmentCreate(BaseModel):
    event_id: Optional[str] = None
    invitee_email: Optional[str] = None
    start_time: Optional[str] = None  # ISO 8601, stored verbatim
    end_time: Optional[str] = None


class AppointmentUpdate(BaseModel):
    event_id: Optional[str] = None
    invitee_email: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    status: Optional[str] = None

    def changes(self) -> dict[str, str]:
        return {field: value for field, value in self.model_dump().items() if value}


class AppointmentRead(BaseModel):
    id: str
    event_id: str
    user_id: str
    invitee_email: str
    start_time: str
    end_time: str
    status: str

    @classmethod
    def from_appointment(cls, appointment) -> AppointmentRead:
        return cls(
            id=appointment.id,
            event_id=appointment.event_id,
            user_id=appointment.user_id,
            invitee_email=appointment.invitee_email,
            start_time=appointment.start_time,
            end_time=appointment.end_time,
            status=appointment.status,
        )


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentRead]
