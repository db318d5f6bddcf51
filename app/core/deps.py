from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.repositories.schedule_repository import ScheduleRepository
from app.repositories.venue_booking_repository import VenueBookingRepository


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_schedule_repository(db: Session = Depends(get_db)) -> ScheduleRepository:
    return ScheduleRepository(db)


def get_venue_booking_repository(db: Session = Depends(get_db)) -> VenueBookingRepository:
    return VenueBookingRepository(db)
