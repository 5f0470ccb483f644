from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status

from scheduler_api.api.deps import CurrentUser
from scheduler_api.core.errors import InternalError, InvalidArgument
from scheduler_api.core.validators import is_valid_time_of_day
from scheduler_api.models import Schedule
from scheduler_api.schemas import (
    Availability,
    ScheduleCreate,
    ScheduleListResponse,
    ScheduleRead,
    ScheduleUpdate,
)
from scheduler_api.services.permissions import SCHEDULES, check_ownership
from scheduler_api.services.store import StoreDep

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate_availability(availability: Availability) -> None:
    for day in availability.days:
        if not day.day:
            raise InvalidArgument("Each availability entry needs a day")
        for time_range in day.time_ranges:
            if not (
                is_valid_time_of_day(time_range.start_time)
                and is_valid_time_of_day(time_range.end_time)
            ):
                raise InvalidArgument("Time ranges must use HH:MM format")


def _to_read(schedule: Schedule) -> ScheduleRead:
    try:
        availability = Availability.from_blob(schedule.availability)
    except ValueError as exc:
        logger.error("Schedule %s has unreadable availability: %s", schedule.id, exc)
        raise InternalError("Failed to parse availability data") from exc
    return ScheduleRead(id=schedule.id, user_id=schedule.user_id, availability=availability)


@router.post(
    "",
    response_model=ScheduleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an availability schedule",
)
def create_schedule(payload: ScheduleCreate, store: StoreDep, current_user: CurrentUser) -> ScheduleRead:
    if not payload.user_id or payload.availability is None:
        raise InvalidArgument("user_id and availability are required")
    _validate_availability(payload.availability)
    check_ownership(
        current_user.id,
        payload.user_id,
        "Forbidden: You can only create schedules for yourself",
    )

    # No uniqueness check: an owner may end up with several rows.
    schedule = store.insert(
        Schedule(user_id=payload.user_id, availability=payload.availability.to_blob())
    )
    return _to_read(schedule)


@router.get("", response_model=ScheduleListResponse, summary="List own schedules")
def list_schedules(store: StoreDep, current_user: CurrentUser) -> ScheduleListResponse:
    schedules = []
    for schedule in store.scan(Schedule, Schedule.user_id == current_user.id, order_by=Schedule.id):
        try:
            schedules.append(_to_read(schedule))
        except InternalError:
            continue
    return ScheduleListResponse(schedules=schedules)


@router.get(
    "/{user_id}",
    response_model=ScheduleRead,
    summary="Get the schedule of any account",
)
def get_schedule(user_id: str, store: StoreDep) -> ScheduleRead:
    # Public on purpose: anyone may read anyone's availability.
    return _to_read(SCHEDULES.locate(store, user_id))


@router.patch("/{user_id}", response_model=ScheduleRead, summary="Replace own availability")
def update_schedule(
    user_id: str,
    payload: ScheduleUpdate,
    store: StoreDep,
    current_user: CurrentUser,
) -> ScheduleRead:
    if payload.availability is None:
        raise InvalidArgument("Availability is required")
    _validate_availability(payload.availability)

    schedule = SCHEDULES.require_owner(store, user_id, current_user)
    schedule_id = schedule.id

    updated = store.update(
        Schedule,
        Schedule.user_id == user_id,
        values={"availability": payload.availability.to_blob()},
    )
    if updated == 0:
        raise SCHEDULES.not_found()
    return ScheduleRead(id=schedule_id, user_id=user_id, availability=payload.availability)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete own schedule",
)
def delete_schedule(user_id: str, store: StoreDep, current_user: CurrentUser) -> Response:
    SCHEDULES.require_owner(store, user_id, current_user, action="delete")

    if store.delete(Schedule, Schedule.user_id == user_id) == 0:
        raise SCHEDULES.not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
