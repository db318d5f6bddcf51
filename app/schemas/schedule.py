from __future__ import annotations

from datetime import date, datetime, time
from typing import Literal

from pydantic import BaseModel, Field

ShiftType = Literal["morning", "afternoon", "evening", "night", "full_day"]


class ScheduleCreate(BaseModel):
    employee_id: str
    date: date
    shift_start: time
    shift_end: time
    shift_type: ShiftType = "full_day"
    status: Literal["scheduled", "confirmed"] = "scheduled"
    location: str = Field(default="", max_length=100)
    notes: str = ""


class ScheduleBulkCreate(BaseModel):
    employee_id: str
    start_date: date
    end_date: date
    # 0=Sunday .. 6=Saturday
    days: list[int]
    shift_start: time
    shift_end: time
    shift_type: ShiftType = "full_day"
    location: str = Field(default="", max_length=100)
    notes: str = ""


class ScheduleUpdate(BaseModel):
    employee_id: str
    date: date
    shift_start: time
    shift_end: time
    shift_type: ShiftType = "full_day"
    status: str | None = None
    location: str = Field(default="", max_length=100)
    notes: str = ""


class StatusChange(BaseModel):
    status: str = Field(min_length=1, max_length=16)
    reason: str = Field(default="", max_length=255)


class ScheduleOut(BaseModel):
    id: str
    employee_id: str
    date: date
    shift_start: time
    shift_end: time
    shift_type: str
    status: str
    location: str
    notes: str
    created_at: datetime

    class Config:
        from_attributes = True


class BulkScheduleCreated(BaseModel):
    created: int
    data: list[ScheduleOut]


class ScheduleDay(BaseModel):
    date: date
    entries: list[ScheduleOut]


class ScheduleCalendar(BaseModel):
    year: int
    month: int
    days: list[ScheduleDay]
