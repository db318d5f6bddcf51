from __future__ import annotations

import logging
from datetime import date, time
from typing import Iterable

from app.core.errors import BulkConflictError, InvalidRequest, ResourceNotFound
from app.models.employee import EmployeeSchedule
from app.repositories.schedule_repository import ScheduleRepository
from app.services.conflict_service import ConflictChecker
from app.services.status_flow import SCHEDULE_TRANSITIONS, ensure_editable, ensure_transition
from app.services.time_window import daterange, ensure_valid_window

logger = logging.getLogger(__name__)


def weekday_number(d: date) -> int:
    """0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7


def expand_dates(start_date: date, end_date: date, weekdays: Iterable[int]) -> list[date]:
    selected = set(weekdays)
    if not selected:
        raise InvalidRequest("Select at least one day of the week")
    bad = sorted(d for d in selected if not isinstance(d, int) or d < 0 or d > 6)
    if bad:
        raise InvalidRequest(f"Invalid day numbers {bad}; use 0=Sunday .. 6=Saturday")
    if start_date > end_date:
        raise InvalidRequest("start_date must be on or before end_date")
    return [d for d in daterange(start_date, end_date) if weekday_number(d) in selected]


def _lock_employee(repo: ScheduleRepository, employee_id: str) -> None:
    if repo.lock_resource(employee_id) is None:
        raise ResourceNotFound(f"Employee {employee_id} not found")


def get_schedule(repo: ScheduleRepository, schedule_id: str) -> EmployeeSchedule:
    entry = repo.get(schedule_id)
    if entry is None:
        raise ResourceNotFound(f"Schedule {schedule_id} not found")
    return entry


def list_schedules(
    repo: ScheduleRepository,
    *,
    employee_id: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    status: str | None = None,
    limit: int = 1000,
) -> list[EmployeeSchedule]:
    return repo.search(employee_id=employee_id, start_date=start_date, end_date=end_date, status=status, limit=limit)


def create_schedule(
    repo: ScheduleRepository,
    *,
    employee_id: str,
    day: date,
    shift_start: time,
    shift_end: time,
    shift_type: str = "full_day",
    status: str = "scheduled",
    location: str = "",
    notes: str = "",
) -> EmployeeSchedule:
    db = repo.db
    ensure_valid_window(shift_start, shift_end)
    try:
        _lock_employee(repo, employee_id)
        ConflictChecker(repo).ensure_free(employee_id, day, shift_start, shift_end)

        entry = repo.add(
            EmployeeSchedule(
                employee_id=employee_id,
                date=day,
                shift_start=shift_start,
                shift_end=shift_end,
                shift_type=shift_type,
                status=status,
                location=location or "",
                notes=notes or "",
            )
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(entry)
    logger.info("Scheduled employee %s on %s %s-%s (%s)", employee_id, day, shift_start, shift_end, entry.id)
    return entry


def create_bulk_schedules(
    repo: ScheduleRepository,
    *,
    employee_id: str,
    start_date: date,
    end_date: date,
    days: Iterable[int],
    shift_start: time,
    shift_end: time,
    shift_type: str = "full_day",
    location: str = "",
    notes: str = "",
) -> list[EmployeeSchedule]:
    """Create one entry per matching weekday in the range, or none at all.

    The first conflicting date aborts the whole batch with ``BulkConflictError``.
    """
    db = repo.db
    ensure_valid_window(shift_start, shift_end)
    dates = expand_dates(start_date, end_date, days)

    try:
        _lock_employee(repo, employee_id)
        checker = ConflictChecker(repo)
        for d in dates:
            conflict = checker.check_conflict(employee_id, d, shift_start, shift_end)
            if conflict is not None:
                logger.info("Bulk schedule for %s rejected: %s conflicts with %s", employee_id, d, conflict.entry_id)
                raise BulkConflictError(d, conflict)

        created = [
            repo.add(
                EmployeeSchedule(
                    employee_id=employee_id,
                    date=d,
                    shift_start=shift_start,
                    shift_end=shift_end,
                    shift_type=shift_type,
                    status="scheduled",
                    location=location or "",
                    notes=notes or "",
                )
            )
            for d in dates
        ]
        db.commit()
    except Exception:
        db.rollback()
        raise

    for entry in created:
        db.refresh(entry)
    logger.info("Bulk scheduled employee %s: %d entries between %s and %s", employee_id, len(created), start_date, end_date)
    return created


def update_schedule(
    repo: ScheduleRepository,
    schedule_id: str,
    *,
    employee_id: str,
    day: date,
    shift_start: time,
    shift_end: time,
    shift_type: str,
    location: str = "",
    notes: str = "",
    status: str | None = None,
) -> EmployeeSchedule:
    db = repo.db
    entry = get_schedule(repo, schedule_id)
    ensure_editable(entry.status)
    ensure_valid_window(shift_start, shift_end)
    if status is not None and status != entry.status:
        ensure_transition(entry.status, status, SCHEDULE_TRANSITIONS)

    try:
        _lock_employee(repo, employee_id)
        # A cancelled entry no longer holds its window
        if (status or entry.status) != "cancelled":
            ConflictChecker(repo).ensure_free(employee_id, day, shift_start, shift_end, exclude_id=entry.id)

        entry.employee_id = employee_id
        entry.date = day
        entry.shift_start = shift_start
        entry.shift_end = shift_end
        entry.shift_type = shift_type
        entry.location = location or ""
        entry.notes = notes or ""
        if status is not None:
            entry.status = status
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(entry)
    logger.info("Updated schedule %s", entry.id)
    return entry


def change_schedule_status(repo: ScheduleRepository, schedule_id: str, status: str) -> EmployeeSchedule:
    """Status-only move; the window does not change so no conflict check runs."""
    db = repo.db
    entry = get_schedule(repo, schedule_id)
    ensure_transition(entry.status, status, SCHEDULE_TRANSITIONS)
    previous = entry.status
    entry.status = status
    db.commit()
    db.refresh(entry)
    logger.info("Schedule %s: %s -> %s", entry.id, previous, status)
    return entry


def delete_schedule(repo: ScheduleRepository, schedule_id: str) -> None:
    entry = get_schedule(repo, schedule_id)
    repo.delete(entry)
    repo.db.commit()
    logger.info("Deleted schedule %s", schedule_id)
