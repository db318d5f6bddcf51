from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Request

from app.core.config import get_settings
from app.core.deps import get_schedule_repository
from app.repositories.schedule_repository import ScheduleRepository
from app.schemas.schedule import (
    BulkScheduleCreated,
    ScheduleBulkCreate,
    ScheduleCalendar,
    ScheduleCreate,
    ScheduleDay,
    ScheduleOut,
    ScheduleUpdate,
    StatusChange,
)
from app.services import schedule_service
from app.services.audit_service import write_audit_log
from app.services.report_service import schedule_calendar

router = APIRouter()


@router.get("", response_model=list[ScheduleOut])
def list_schedules(
    employee_id: str | None = None,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    status: str | None = None,
    repo: ScheduleRepository = Depends(get_schedule_repository),
):
    return schedule_service.list_schedules(
        repo,
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        status=status,
        limit=get_settings().list_limit,
    )


@router.get("/calendar", response_model=ScheduleCalendar)
def calendar_view(
    year: int = Query(..., ge=2020, le=2100),
    month: int = Query(..., ge=1, le=12),
    employee_id: str | None = None,
    repo: ScheduleRepository = Depends(get_schedule_repository),
):
    grouped = schedule_calendar(repo.db, year=year, month=month, employee_id=employee_id)
    days = [ScheduleDay(date=d, entries=[ScheduleOut.model_validate(e) for e in entries]) for d, entries in sorted(grouped.items())]
    return ScheduleCalendar(year=year, month=month, days=days)


@router.post("", response_model=ScheduleOut, status_code=201)
def create_schedule(payload: ScheduleCreate, request: Request, repo: ScheduleRepository = Depends(get_schedule_repository)):
    entry = schedule_service.create_schedule(
        repo,
        employee_id=payload.employee_id,
        day=payload.date,
        shift_start=payload.shift_start,
        shift_end=payload.shift_end,
        shift_type=payload.shift_type,
        status=payload.status,
        location=payload.location,
        notes=payload.notes,
    )

    write_audit_log(
        repo.db,
        action_type="SCHEDULE_CREATE",
        target_type="schedule",
        target_id=entry.id,
        summary="Created schedule",
        diff_json={"employee_id": entry.employee_id, "date": entry.date},
        request=request,
    )
    return entry


@router.post("/bulk", response_model=BulkScheduleCreated, status_code=201)
def create_schedules_bulk(payload: ScheduleBulkCreate, request: Request, repo: ScheduleRepository = Depends(get_schedule_repository)):
    created = schedule_service.create_bulk_schedules(
        repo,
        employee_id=payload.employee_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        days=payload.days,
        shift_start=payload.shift_start,
        shift_end=payload.shift_end,
        shift_type=payload.shift_type,
        location=payload.location,
        notes=payload.notes,
    )

    write_audit_log(
        repo.db,
        action_type="SCHEDULE_BULK_CREATE",
        target_type="schedule",
        target_id="bulk",
        summary="Created schedules (bulk)",
        diff_json={"employee_id": payload.employee_id, "count": len(created), "from": payload.start_date, "to": payload.end_date},
        request=request,
    )
    return BulkScheduleCreated(created=len(created), data=[ScheduleOut.model_validate(e) for e in created])


@router.get("/{schedule_id}", response_model=ScheduleOut)
def get_schedule(schedule_id: str, repo: ScheduleRepository = Depends(get_schedule_repository)):
    return schedule_service.get_schedule(repo, schedule_id)


@router.put("/{schedule_id}", response_model=ScheduleOut)
def update_schedule(schedule_id: str, payload: ScheduleUpdate, request: Request, repo: ScheduleRepository = Depends(get_schedule_repository)):
    entry = schedule_service.update_schedule(
        repo,
        schedule_id,
        employee_id=payload.employee_id,
        day=payload.date,
        shift_start=payload.shift_start,
        shift_end=payload.shift_end,
        shift_type=payload.shift_type,
        location=payload.location,
        notes=payload.notes,
        status=payload.status,
    )

    write_audit_log(repo.db, action_type="SCHEDULE_UPDATE", target_type="schedule", target_id=entry.id, summary="Updated schedule", request=request)
    return entry


@router.post("/{schedule_id}/status", response_model=ScheduleOut)
def change_status(schedule_id: str, payload: StatusChange, request: Request, repo: ScheduleRepository = Depends(get_schedule_repository)):
    entry = schedule_service.change_schedule_status(repo, schedule_id, payload.status)

    write_audit_log(
        repo.db,
        action_type="SCHEDULE_STATUS",
        target_type="schedule",
        target_id=entry.id,
        summary=f"Schedule status set to {entry.status}",
        diff_json={"status": entry.status},
        request=request,
    )
    return entry


@router.delete("/{schedule_id}")
def delete_schedule(schedule_id: str, request: Request, repo: ScheduleRepository = Depends(get_schedule_repository)):
    schedule_service.delete_schedule(repo, schedule_id)

    write_audit_log(repo.db, action_type="SCHEDULE_DELETE", target_type="schedule", target_id=schedule_id, summary="Deleted schedule", request=request)
    return {"ok": True}
