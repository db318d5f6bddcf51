from __future__ import annotations

from datetime import date

from sqlalchemy import select

from app.models.employee import Employee, EmployeeSchedule
from app.repositories.base import CommitmentRepository


class ScheduleRepository(CommitmentRepository[EmployeeSchedule]):
    model = EmployeeSchedule
    resource_model = Employee
    resource_field = "employee_id"
    day_field = "date"
    start_field = "shift_start"
    end_field = "shift_end"

    def search(
        self,
        *,
        employee_id: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        status: str | None = None,
        limit: int = 1000,
    ) -> list[EmployeeSchedule]:
        q = select(EmployeeSchedule)
        if employee_id:
            q = q.where(EmployeeSchedule.employee_id == employee_id)
        if start_date:
            q = q.where(EmployeeSchedule.date >= start_date)
        if end_date:
            q = q.where(EmployeeSchedule.date <= end_date)
        if status:
            q = q.where(EmployeeSchedule.status == status)
        q = q.order_by(EmployeeSchedule.date.asc(), EmployeeSchedule.shift_start.asc())
        return list(self.db.execute(q.limit(limit)).scalars().all())
