from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.schemas.venue import (
    AvailabilityBulkSet,
    AvailabilityCalendar,
    AvailabilityCheck,
    AvailabilityOut,
    AvailabilitySet,
    VenueBookingOut,
)
from app.services import availability_service
from app.services.audit_service import write_audit_log

router = APIRouter()


@router.get("", response_model=AvailabilityCalendar)
def availability_calendar(
    start_date: date = Query(...),
    end_date: date = Query(...),
    venue_id: str | None = None,
    db: Session = Depends(get_db),
):
    data = availability_service.availability_calendar(db, start_date=start_date, end_date=end_date, venue_id=venue_id)
    return AvailabilityCalendar(
        availability=[AvailabilityOut.model_validate(r) for r in data["availability"]],
        bookings=[VenueBookingOut.model_validate(b) for b in data["bookings"]],
    )


@router.put("", response_model=AvailabilityOut)
def set_availability(payload: AvailabilitySet, request: Request, db: Session = Depends(get_db)):
    record = availability_service.set_availability(
        db,
        venue_id=payload.venue_id,
        day=payload.date,
        is_available=payload.is_available,
        unavailable_reason=payload.unavailable_reason,
        available_from=payload.available_from,
        available_until=payload.available_until,
        notes=payload.notes,
    )

    write_audit_log(
        db,
        action_type="VENUE_AVAILABILITY_SET",
        target_type="venue",
        target_id=payload.venue_id,
        summary="Set venue availability",
        diff_json={"date": payload.date, "is_available": payload.is_available},
        request=request,
    )
    return record


@router.post("/bulk")
def set_availability_bulk(payload: AvailabilityBulkSet, request: Request, db: Session = Depends(get_db)):
    dates = availability_service.bulk_set_availability(
        db,
        venue_id=payload.venue_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        is_available=payload.is_available,
        unavailable_reason=payload.unavailable_reason,
        notes=payload.notes,
    )

    write_audit_log(
        db,
        action_type="VENUE_AVAILABILITY_BULK",
        target_type="venue",
        target_id=payload.venue_id,
        summary="Set venue availability (bulk)",
        diff_json={"count": len(dates), "from": payload.start_date, "to": payload.end_date, "is_available": payload.is_available},
        request=request,
    )
    return {"ok": True, "updated": len(dates), "dates": [d.isoformat() for d in dates]}


@router.get("/check", response_model=AvailabilityCheck)
def check_availability(venue_id: str, date_: date = Query(..., alias="date"), db: Session = Depends(get_db)):
    available = availability_service.is_available_on(db, venue_id, date_)
    record = availability_service.availability_record(db, venue_id, date_)
    bookings = availability_service.active_bookings(db, start_date=date_, end_date=date_, venue_id=venue_id)
    return AvailabilityCheck(
        venue_id=venue_id,
        date=date_,
        is_available=available,
        availability_record=AvailabilityOut.model_validate(record) if record else None,
        bookings=[VenueBookingOut.model_validate(b) for b in bookings],
    )
