from __future__ import annotations

from datetime import date, datetime, time

from pydantic import BaseModel, EmailStr, Field


class VenueCreate(BaseModel):
    code: str = Field(min_length=1, max_length=32)
    name: str = Field(min_length=1, max_length=255)
    address: str = ""
    city: str = Field(default="", max_length=100)
    capacity: int = Field(default=0, ge=0)
    venue_type: str = Field(default="indoor", max_length=32)
    sort_order: int = 0
    active: bool = True
    notes: str = ""


class VenueUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    capacity: int | None = Field(default=None, ge=0)
    venue_type: str | None = Field(default=None, max_length=32)
    sort_order: int | None = None
    active: bool | None = None
    notes: str | None = None


class VenueOut(BaseModel):
    id: str
    code: str
    name: str
    address: str
    city: str
    capacity: int
    venue_type: str
    sort_order: int
    active: bool

    class Config:
        from_attributes = True


class VenueBookingCreate(BaseModel):
    venue_id: str
    booking_date: date
    start_time: time
    end_time: time
    client_name: str = Field(min_length=1, max_length=255)
    client_phone: str = Field(default="", max_length=32)
    client_email: EmailStr | None = None
    event_type: str = Field(default="", max_length=64)
    guest_count: int = Field(default=0, ge=0)
    total_price: float = Field(default=0, ge=0)
    order_id: str | None = None
    notes: str = ""


class VenueBookingUpdate(BaseModel):
    venue_id: str
    booking_date: date
    start_time: time
    end_time: time
    client_name: str = Field(min_length=1, max_length=255)
    client_phone: str = Field(default="", max_length=32)
    client_email: EmailStr | None = None
    event_type: str = Field(default="", max_length=64)
    guest_count: int = Field(default=0, ge=0)
    total_price: float = Field(default=0, ge=0)
    notes: str = ""


class VenueBookingOut(BaseModel):
    id: str
    booking_number: str
    venue_id: str
    order_id: str | None
    booking_date: date
    start_time: time
    end_time: time
    status: str
    client_name: str
    client_phone: str
    client_email: str
    event_type: str
    guest_count: int
    total_price: float
    notes: str
    confirmed_at: datetime | None
    cancelled_at: datetime | None
    cancelled_reason: str

    class Config:
        from_attributes = True


class AvailabilitySet(BaseModel):
    venue_id: str
    date: date
    is_available: bool
    unavailable_reason: str = Field(default="", max_length=255)
    available_from: time | None = None
    available_until: time | None = None
    notes: str = ""


class AvailabilityBulkSet(BaseModel):
    venue_id: str
    start_date: date
    end_date: date
    is_available: bool
    unavailable_reason: str = Field(default="", max_length=255)
    notes: str = ""


class AvailabilityOut(BaseModel):
    id: str
    venue_id: str
    date: date
    is_available: bool
    unavailable_reason: str
    available_from: time | None
    available_until: time | None
    notes: str

    class Config:
        from_attributes = True


class AvailabilityCalendar(BaseModel):
    availability: list[AvailabilityOut]
    bookings: list[VenueBookingOut]


class AvailabilityCheck(BaseModel):
    venue_id: str
    date: date
    is_available: bool
    availability_record: AvailabilityOut | None
    bookings: list[VenueBookingOut]


class BookingDay(BaseModel):
    date: date
    bookings: list[VenueBookingOut]


class BookingCalendar(BaseModel):
    year: int
    month: int
    days: list[BookingDay]
