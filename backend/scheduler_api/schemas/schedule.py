from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TimeRange(BaseModel):
    start_time: str = Field(default="", description="Start time in HH:MM format")
    end_time: str = Field(default="", description="End time in HH:MM format")


class DaySchedule(BaseModel):
    day: str = Field(default="", description="Day of week label, e.g. Monday")
    time_ranges: list[TimeRange] = Field(default_factory=list)


class Availability(BaseModel):
    """Ordered day entries, each with ordered time ranges.

    Persisted as a JSON blob; ``to_blob``/``from_blob`` round-trip exactly.
    """

    days: list[DaySchedule] = Field(default_factory=list)

    def to_blob(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_blob(cls, blob: Optional[str]) -> Availability:
        if blob is None:
            raise ValueError("Schedule has no availability data")
        return cls.model_validate_json(blob)


class ScheduleCreate(BaseModel):
    user_id: Optional[str] = None
    availability: Optional[Availability] = None


class ScheduleUpdate(BaseModel):
    availability: Optional[Availability] = None


class ScheduleRead(BaseModel):
    id: int
    user_id: str
    availability: Availability


class ScheduleListResponse(BaseModel):
    schedules: list[ScheduleRead]
