from __future__ import annotations

import logging
from datetime import date, time

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import InvalidRequest, ResourceNotFound
from app.models.venue import Venue, VenueAvailability, VenueBooking
from app.services.time_window import daterange, ensure_valid_window

logger = logging.getLogger(__name__)

ACTIVE_BOOKING_STATUSES = ("pending", "confirmed")


def _require_venue(db: Session, venue_id: str) -> Venue:
    venue = db.get(Venue, venue_id)
    if venue is None:
        raise ResourceNotFound(f"Venue {venue_id} not found")
    return venue


def _upsert(db: Session, venue_id: str, day: date, values: dict) -> VenueAvailability:
    record = availability_record(db, venue_id, day)
    if record is None:
        record = VenueAvailability(venue_id=venue_id, date=day)
        db.add(record)
    for k, v in values.items():
        setattr(record, k, v)
    return record


def set_availability(
    db: Session,
    *,
    venue_id: str,
    day: date,
    is_available: bool,
    unavailable_reason: str = "",
    available_from: time | None = None,
    available_until: time | None = None,
    notes: str = "",
) -> VenueAvailability:
    _require_venue(db, venue_id)
    if available_from is not None and available_until is not None:
        ensure_valid_window(available_from, available_until)

    record = _upsert(
        db,
        venue_id,
        day,
        {
            "is_available": is_available,
            "unavailable_reason": "" if is_available else (unavailable_reason or ""),
            "available_from": available_from,
            "available_until": available_until,
            "notes": notes or "",
        },
    )
    db.commit()
    db.refresh(record)
    logger.info("Venue %s availability on %s set to %s", venue_id, day, is_available)
    return record


def bulk_set_availability(
    db: Session,
    *,
    venue_id: str,
    start_date: date,
    end_date: date,
    is_available: bool,
    unavailable_reason: str = "",
    notes: str = "",
) -> list[date]:
    _require_venue(db, venue_id)
    if start_date > end_date:
        raise InvalidRequest("start_date must be on or before end_date")

    dates = list(daterange(start_date, end_date))
    for d in dates:
        _upsert(
            db,
            venue_id,
            d,
            {
                "is_available": is_available,
                "unavailable_reason": "" if is_available else (unavailable_reason or ""),
                "notes": notes or "",
            },
        )
    db.commit()
    logger.info("Venue %s availability set to %s for %d dates", venue_id, is_available, len(dates))
    return dates


def active_bookings(db: Session, *, start_date: date, end_date: date, venue_id: str | None = None) -> list[VenueBooking]:
    q = select(VenueBooking).where(
        VenueBooking.booking_date >= start_date,
        VenueBooking.booking_date <= end_date,
        VenueBooking.status.in_(ACTIVE_BOOKING_STATUSES),
    )
    if venue_id:
        q = q.where(VenueBooking.venue_id == venue_id)
    return list(db.execute(q.order_by(VenueBooking.booking_date, VenueBooking.start_time)).scalars().all())


def availability_record(db: Session, venue_id: str, day: date) -> VenueAvailability | None:
    return db.execute(
        select(VenueAvailability).where(VenueAvailability.venue_id == venue_id, VenueAvailability.date == day)
    ).scalar_one_or_none()


def is_available_on(db: Session, venue_id: str, day: date) -> bool:
    """An override record wins; otherwise the day is free unless an active booking exists."""
    _require_venue(db, venue_id)
    record = availability_record(db, venue_id, day)
    if record is not None:
        return record.is_available
    return not active_bookings(db, start_date=day, end_date=day, venue_id=venue_id)


def availability_calendar(db: Session, *, start_date: date, end_date: date, venue_id: str | None = None) -> dict:
    if start_date > end_date:
        raise InvalidRequest("start_date must be on or before end_date")

    q = select(VenueAvailability).where(VenueAvailability.date >= start_date, VenueAvailability.date <= end_date)
    if venue_id:
        q = q.where(VenueAvailability.venue_id == venue_id)
    records = db.execute(q.order_by(VenueAvailability.date)).scalars().all()

    return {
        "availability": list(records),
        "bookings": active_bookings(db, start_date=start_date, end_date=end_date, venue_id=venue_id),
    }
