from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Request

from app.core.config import get_settings
from app.core.deps import get_venue_booking_repository
from app.repositories.venue_booking_repository import VenueBookingRepository
from app.schemas.schedule import StatusChange
from app.schemas.venue import BookingCalendar, BookingDay, VenueBookingCreate, VenueBookingOut, VenueBookingUpdate
from app.services import venue_booking_service
from app.services.audit_service import write_audit_log
from app.services.report_service import booking_calendar

router = APIRouter()


@router.get("", response_model=list[VenueBookingOut])
def list_bookings(
    venue_id: str | None = None,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    status: str | None = None,
    repo: VenueBookingRepository = Depends(get_venue_booking_repository),
):
    return venue_booking_service.list_bookings(
        repo,
        venue_id=venue_id,
        start_date=start_date,
        end_date=end_date,
        status=status,
        limit=get_settings().list_limit,
    )


@router.get("/calendar", response_model=BookingCalendar)
def calendar_view(
    year: int = Query(..., ge=2020, le=2100),
    month: int = Query(..., ge=1, le=12),
    venue_id: str | None = None,
    repo: VenueBookingRepository = Depends(get_venue_booking_repository),
):
    grouped = booking_calendar(repo.db, year=year, month=month, venue_id=venue_id)
    days = [BookingDay(date=d, bookings=[VenueBookingOut.model_validate(b) for b in items]) for d, items in sorted(grouped.items())]
    return BookingCalendar(year=year, month=month, days=days)


@router.post("", response_model=VenueBookingOut, status_code=201)
def create_booking(payload: VenueBookingCreate, request: Request, repo: VenueBookingRepository = Depends(get_venue_booking_repository)):
    booking = venue_booking_service.create_booking(
        repo,
        venue_id=payload.venue_id,
        booking_date=payload.booking_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        client_name=payload.client_name,
        client_phone=payload.client_phone,
        client_email=str(payload.client_email or ""),
        event_type=payload.event_type,
        guest_count=payload.guest_count,
        total_price=payload.total_price,
        order_id=payload.order_id,
        notes=payload.notes,
    )

    write_audit_log(
        repo.db,
        action_type="VENUE_BOOKING_CREATE",
        target_type="venue_booking",
        target_id=booking.booking_number,
        summary="Created venue booking",
        diff_json={"venue_id": booking.venue_id, "booking_date": booking.booking_date, "client_name": booking.client_name},
        request=request,
    )
    return booking


@router.get("/{booking_id}", response_model=VenueBookingOut)
def get_booking(booking_id: str, repo: VenueBookingRepository = Depends(get_venue_booking_repository)):
    return venue_booking_service.get_booking(repo, booking_id)


@router.put("/{booking_id}", response_model=VenueBookingOut)
def update_booking(booking_id: str, payload: VenueBookingUpdate, request: Request, repo: VenueBookingRepository = Depends(get_venue_booking_repository)):
    booking = venue_booking_service.update_booking(
        repo,
        booking_id,
        venue_id=payload.venue_id,
        booking_date=payload.booking_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        client_name=payload.client_name,
        client_phone=payload.client_phone,
        client_email=str(payload.client_email or ""),
        event_type=payload.event_type,
        guest_count=payload.guest_count,
        total_price=payload.total_price,
        notes=payload.notes,
    )

    write_audit_log(repo.db, action_type="VENUE_BOOKING_UPDATE", target_type="venue_booking", target_id=booking.booking_number, summary="Updated venue booking", request=request)
    return booking


@router.post("/{booking_id}/status", response_model=VenueBookingOut)
def change_status(booking_id: str, payload: StatusChange, request: Request, repo: VenueBookingRepository = Depends(get_venue_booking_repository)):
    booking = venue_booking_service.change_booking_status(repo, booking_id, payload.status, reason=payload.reason)

    write_audit_log(
        repo.db,
        action_type="VENUE_BOOKING_STATUS",
        target_type="venue_booking",
        target_id=booking.booking_number,
        summary=f"Booking status set to {booking.status}",
        diff_json={"status": booking.status},
        request=request,
    )
    return booking


@router.delete("/{booking_id}")
def delete_booking(booking_id: str, request: Request, repo: VenueBookingRepository = Depends(get_venue_booking_repository)):
    venue_booking_service.delete_booking(repo, booking_id)

    write_audit_log(repo.db, action_type="VENUE_BOOKING_DELETE", target_type="venue_booking", target_id=booking_id, summary="Deleted venue booking", request=request)
    return {"ok": True}
