from __future__ import annotations

from datetime import date

from sqlalchemy import select

from app.models.venue import Venue, VenueAvailability, VenueBooking
from app.repositories.base import CommitmentRepository


class VenueBookingRepository(CommitmentRepository[VenueBooking]):
    model = VenueBooking
    resource_model = Venue
    resource_field = "venue_id"
    day_field = "booking_date"
    start_field = "start_time"
    end_field = "end_time"

    def availability_for(self, venue_id: str, day: date) -> VenueAvailability | None:
        q = select(VenueAvailability).where(VenueAvailability.venue_id == venue_id, VenueAvailability.date == day)
        return self.db.execute(q).scalar_one_or_none()

    def last_booking_number(self, prefix: str) -> str | None:
        q = (
            select(VenueBooking.booking_number)
            .where(VenueBooking.booking_number.like(f"{prefix}%"))
            .order_by(VenueBooking.booking_number.desc())
            .limit(1)
        )
        return self.db.execute(q).scalar_one_or_none()

    def search(
        self,
        *,
        venue_id: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        status: str | None = None,
        limit: int = 1000,
    ) -> list[VenueBooking]:
        q = select(VenueBooking)
        if venue_id:
            q = q.where(VenueBooking.venue_id == venue_id)
        if start_date:
            q = q.where(VenueBooking.booking_date >= start_date)
        if end_date:
            q = q.where(VenueBooking.booking_date <= end_date)
        if status:
            q = q.where(VenueBooking.status == status)
        q = q.order_by(VenueBooking.booking_date.asc(), VenueBooking.start_time.asc())
        return list(self.db.execute(q.limit(limit)).scalars().all())
