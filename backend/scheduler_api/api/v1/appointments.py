from __future__ import annotations

from fastapi import APIRouter, Response, status

from scheduler_api.api.deps import CurrentUser
from scheduler_api.core.errors import InvalidArgument
from scheduler_api.core.validators import is_valid_email
from scheduler_api.models import Appointment
from scheduler_api.schemas import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentRead,
    AppointmentUpdate,
)
from scheduler_api.services.permissions import APPOINTMENTS, EVENTS
from scheduler_api.services.store import StoreDep

router = APIRouter()


@router.post(
    "",
    response_model=AppointmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment on an event type",
)
def create_appointment(
    payload: AppointmentCreate,
    store: StoreDep,
    current_user: CurrentUser,
) -> AppointmentRead:
    if not (payload.event_id and payload.invitee_email and payload.start_time and payload.end_time):
        raise InvalidArgument("All fields are required")
    if not is_valid_email(payload.invitee_email):
        raise InvalidArgument("Invalid invitee email format")

    event = EVENTS.require_owner(store, payload.event_id, current_user, action="book appointments on")

    # Times are stored verbatim; no overlap or availability check is made.
    appointment = store.insert(
        Appointment(
            event_id=event.id,
            user_id=event.user_id,
            invitee_email=payload.invitee_email,
            start_time=payload.start_time,
            end_time=payload.end_time,
        )
    )
    return AppointmentRead.from_appointment(appointment)


@router.get("", response_model=AppointmentListResponse, summary="List own appointments")
def list_appointments(store: StoreDep, current_user: CurrentUser) -> AppointmentListResponse:
    appointments = store.scan(
        Appointment,
        Appointment.user_id == current_user.id,
        order_by=Appointment.start_time,
    )
    return AppointmentListResponse(
        appointments=[AppointmentRead.from_appointment(appointment) for appointment in appointments]
    )


@router.get("/{appointment_id}", response_model=AppointmentRead, summary="Get own appointment")
def get_appointment(appointment_id: str, store: StoreDep, current_user: CurrentUser) -> AppointmentRead:
    # Other owners' appointments are reported as missing rather than forbidden.
    appointment = store.first(
        Appointment,
        Appointment.id == appointment_id,
        Appointment.user_id == current_user.id,
    )
    if appointment is None:
        raise APPOINTMENTS.not_found()
    return AppointmentRead.from_appointment(appointment)


@router.patch("/{appointment_id}", response_model=AppointmentRead, summary="Update own appointment")
def update_appointment(
    appointment_id: str,
    payload: AppointmentUpdate,
    store: StoreDep,
    current_user: CurrentUser,
) -> AppointmentRead:
    changes = payload.changes()
    if not changes:
        raise InvalidArgument("At least one field is required")
    if "invitee_email" in changes and not is_valid_email(changes["invitee_email"]):
        raise InvalidArgument("Invalid invitee email format")

    APPOINTMENTS.require_owner(store, appointment_id, current_user)
    if "event_id" in changes:
        # Moving a booking is only allowed onto another of the caller's event types.
        EVENTS.require_owner(store, changes["event_id"], current_user, action="book appointments on")

    if store.update(Appointment, Appointment.id == appointment_id, values=changes) == 0:
        raise APPOINTMENTS.not_found()
    return AppointmentRead.from_appointment(APPOINTMENTS.locate(store, appointment_id))


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete own appointment",
)
def delete_appointment(appointment_id: str, store: StoreDep, current_user: CurrentUser) -> Response:
    APPOINTMENTS.require_owner(store, appointment_id, current_user, action="delete")

    if store.delete(Appointment, Appointment.id == appointment_id) == 0:
        raise APPOINTMENTS.not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
