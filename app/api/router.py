from __future__ import annotations

from fastapi import APIRouter

from app.api.routes import (
    audit,
    employees,
    inventory,
    orders,
    payments,
    prints,
    reports,
    schedules,
    vendors,
    venue_availability,
    venue_bookings,
    venues,
)

api_router = APIRouter()

# Staff
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(schedules.router, prefix="/schedules", tags=["schedules"])

# Venues
api_router.include_router(venues.router, prefix="/venues", tags=["venues"])
api_router.include_router(venue_bookings.router, prefix="/venue-bookings", tags=["venue-bookings"])
api_router.include_router(venue_availability.router, prefix="/venue-availability", tags=["venue-availability"])

api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(vendors.router, prefix="/vendors", tags=["vendors"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(prints.router, prefix="/prints", tags=["prints"])
api_router.include_router(audit.router, tags=["audit"])
