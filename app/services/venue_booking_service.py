from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone

from app.core.errors import ResourceNotFound, VenueUnavailable
from app.models.venue import Venue, VenueBooking
from app.repositories.venue_booking_repository import VenueBookingRepository
from app.services.conflict_service import ConflictChecker
from app.services.numbering import commit_numbered, next_number
from app.services.status_flow import BOOKING_TRANSITIONS, ensure_editable, ensure_transition
from app.services.time_window import ensure_valid_window

logger = logging.getLogger(__name__)

BOOKING_PREFIX = "VB"


def generate_booking_number(repo: VenueBookingRepository, today: date | None = None) -> str:
    """VB + YYYYMMDD + 4-digit sequence for that day."""
    today = today or date.today()
    prefix = f"{BOOKING_PREFIX}{today.strftime('%Y%m%d')}"
    return next_number(prefix, repo.last_booking_number(prefix))


def _lock_venue(repo: VenueBookingRepository, venue_id: str) -> Venue:
    venue = repo.lock_resource(venue_id)
    if venue is None or not venue.active:
        raise ResourceNotFound(f"Venue {venue_id} not found")
    return venue


def ensure_venue_open(repo: VenueBookingRepository, venue_id: str, day: date, start: time, end: time) -> None:
    """Apply the per-day availability override, if any."""
    record = repo.availability_for(venue_id, day)
    if record is None:
        return
    if not record.is_available:
        reason = f" ({record.unavailable_reason})" if record.unavailable_reason else ""
        raise VenueUnavailable(f"Venue is not available on {day.isoformat()}{reason}")
    if record.available_from is not None and start < record.available_from:
        raise VenueUnavailable(f"Venue opens at {record.available_from.strftime('%H:%M')} on {day.isoformat()}")
    if record.available_until is not None and end > record.available_until:
        raise VenueUnavailable(f"Venue closes at {record.available_until.strftime('%H:%M')} on {day.isoformat()}")


def get_booking(repo: VenueBookingRepository, booking_id: str) -> VenueBooking:
    booking = repo.get(booking_id)
    if booking is None:
        raise ResourceNotFound(f"Booking {booking_id} not found")
    return booking


def list_bookings(
    repo: VenueBookingRepository,
    *,
    venue_id: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    status: str | None = None,
    limit: int = 1000,
) -> list[VenueBooking]:
    return repo.search(venue_id=venue_id, start_date=start_date, end_date=end_date, status=status, limit=limit)


def create_booking(
    repo: VenueBookingRepository,
    *,
    venue_id: str,
    booking_date: date,
    start_time: time,
    end_time: time,
    client_name: str,
    client_phone: str = "",
    client_email: str = "",
    event_type: str = "",
    guest_count: int = 0,
    total_price: float = 0,
    order_id: str | None = None,
    notes: str = "",
) -> VenueBooking:
    db = repo.db
    ensure_valid_window(start_time, end_time)

    def build() -> VenueBooking:
        _lock_venue(repo, venue_id)
        ensure_venue_open(repo, venue_id, booking_date, start_time, end_time)
        ConflictChecker(repo).ensure_free(venue_id, booking_date, start_time, end_time)

        return repo.add(
            VenueBooking(
                booking_number=generate_booking_number(repo),
                venue_id=venue_id,
                order_id=order_id,
                booking_date=booking_date,
                start_time=start_time,
                end_time=end_time,
                status="pending",
                client_name=client_name,
                client_phone=client_phone or "",
                client_email=client_email or "",
                event_type=event_type or "",
                guest_count=guest_count,
                total_price=total_price,
                notes=notes or "",
            )
        )

    booking = commit_numbered(db, build, "venue booking")
    db.refresh(booking)
    logger.info("Booked venue %s on %s %s-%s (%s)", venue_id, booking_date, start_time, end_time, booking.booking_number)
    return booking


def update_booking(
    repo: VenueBookingRepository,
    booking_id: str,
    *,
    venue_id: str,
    booking_date: date,
    start_time: time,
    end_time: time,
    client_name: str,
    client_phone: str = "",
    client_email: str = "",
    event_type: str = "",
    guest_count: int = 0,
    total_price: float = 0,
    notes: str = "",
) -> VenueBooking:
    db = repo.db
    booking = get_booking(repo, booking_id)
    ensure_editable(booking.status)
    ensure_valid_window(start_time, end_time)

    try:
        _lock_venue(repo, venue_id)
        ensure_venue_open(repo, venue_id, booking_date, start_time, end_time)
        ConflictChecker(repo).ensure_free(venue_id, booking_date, start_time, end_time, exclude_id=booking.id)

        booking.venue_id = venue_id
        booking.booking_date = booking_date
        booking.start_time = start_time
        booking.end_time = end_time
        booking.client_name = client_name
        booking.client_phone = client_phone or ""
        booking.client_email = client_email or ""
        booking.event_type = event_type or ""
        booking.guest_count = guest_count
        booking.total_price = total_price
        booking.notes = notes or ""
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(booking)
    logger.info("Updated booking %s", booking.booking_number)
    return booking


def change_booking_status(repo: VenueBookingRepository, booking_id: str, status: str, reason: str = "") -> VenueBooking:
    db = repo.db
    booking = get_booking(repo, booking_id)
    ensure_transition(booking.status, status, BOOKING_TRANSITIONS)

    previous = booking.status
    booking.status = status
    now = datetime.now(timezone.utc)
    if status == "confirmed":
        booking.confirmed_at = now
    elif status == "cancelled":
        booking.cancelled_at = now
        booking.cancelled_reason = reason[:255]
    db.commit()
    db.refresh(booking)
    logger.info("Booking %s: %s -> %s", booking.booking_number, previous, status)
    return booking


def delete_booking(repo: VenueBookingRepository, booking_id: str) -> None:
    booking = get_booking(repo, booking_id)
    repo.delete(booking)
    repo.db.commit()
    logger.info("Deleted booking %s", booking.booking_number)
