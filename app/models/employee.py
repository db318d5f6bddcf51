from __future__ import annotations

import datetime as dt
import uuid
from datetime import date, time

from sqlalchemy import Date, ForeignKey, Index, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models._mixins import TimestampMixin


class Employee(Base, TimestampMixin):
    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False, default="")

    # event_coordinator/decorator/photographer/videographer/mc/driver/manager/other
    position: Mapped[str] = mapped_column(String(32), nullable=False, default="other")
    department: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    join_date: Mapped[date] = mapped_column(Date, nullable=False)
    employment_type: Mapped[str] = mapped_column(String(16), nullable=False, default="full_time")  # full_time/part_time/freelance/intern
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")  # active/inactive/on_leave/terminated


class EmployeeSchedule(Base, TimestampMixin):
    __tablename__ = "employee_schedules"
    __table_args__ = (
        Index("ix_employee_schedules_employee_date", "employee_id", "date"),
        Index("ix_employee_schedules_date_status", "date", "status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_id: Mapped[str] = mapped_column(String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    shift_start: Mapped[time] = mapped_column(Time, nullable=False)
    shift_end: Mapped[time] = mapped_column(Time, nullable=False)

    shift_type: Mapped[str] = mapped_column(String(16), nullable=False, default="full_day")  # morning/afternoon/evening/night/full_day
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="scheduled")  # scheduled/confirmed/completed/cancelled

    location: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
