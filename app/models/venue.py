from __future__ import annotations

import datetime as dt
import uuid
from datetime import date, datetime, time

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models._mixins import TimestampMixin


class Venue(Base, TimestampMixin):
    __tablename__ = "venues"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    venue_type: Mapped[str] = mapped_column(String(32), nullable=False, default="indoor")  # indoor/outdoor/ballroom/garden

    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")


class VenueBooking(Base, TimestampMixin):
    __tablename__ = "venue_bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    booking_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)

    venue_id: Mapped[str] = mapped_column(String(36), ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    order_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)

    booking_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")  # pending/confirmed/completed/cancelled

    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_phone: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    client_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    event_type: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    guest_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_price: Mapped[float] = mapped_column(Numeric(15, 2, asdecimal=False), nullable=False, default=0)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_reason: Mapped[str] = mapped_column(String(255), nullable=False, default="")


class VenueAvailability(Base, TimestampMixin):
    __tablename__ = "venue_availability"
    __table_args__ = (UniqueConstraint("venue_id", "date", name="uq_venue_availability_day"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    venue_id: Mapped[str] = mapped_column(String(36), ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    unavailable_reason: Mapped[str] = mapped_column(String(255), nullable=False, default="")  # maintenance/special_event/...

    # Optional window inside which bookings are accepted that day
    available_from: Mapped[time | None] = mapped_column(Time, nullable=True)
    available_until: Mapped[time | None] = mapped_column(Time, nullable=True)

    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
