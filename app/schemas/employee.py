from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

EmploymentType = Literal["full_time", "part_time", "freelance", "intern"]
EmployeeStatus = Literal["active", "inactive", "on_leave", "terminated"]


class EmployeeCreate(BaseModel):
    employee_code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(default="", max_length=20)
    position: str = Field(default="other", max_length=32)
    department: str = Field(default="", max_length=50)
    join_date: date
    employment_type: EmploymentType = "full_time"
    status: EmployeeStatus = "active"


class EmployeeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    position: str | None = Field(default=None, max_length=32)
    department: str | None = Field(default=None, max_length=50)
    employment_type: EmploymentType | None = None
    status: EmployeeStatus | None = None


class EmployeeOut(BaseModel):
    id: str
    employee_code: str
    name: str
    email: str
    phone: str
    position: str
    department: str
    join_date: date
    employment_type: str
    status: str

    class Config:
        from_attributes = True
