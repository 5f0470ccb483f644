from fastapi import APIRouter

from scheduler_api.api.v1 import appointments, events, health, schedules, sessions, users


api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(schedules.router, prefix="/schedules", tags=["schedules"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
