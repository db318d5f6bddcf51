"""Deterministic demo data for local development.

Everything goes through the service layer, so seeded schedules and bookings
obey the same overlap and availability rules as API writes. Attempts that
collide with an earlier seeded entry are skipped and counted.
"""
from __future__ import annotations

import logging
import random
from datetime import date, time, timedelta

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.errors import ScheduleConflict, VenueUnavailable
from app.core.logging_config import setup_logging
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models.employee import Employee
from app.models.inventory import InventoryCategory, InventoryItem
from app.models.venue import Venue
from app.repositories.schedule_repository import ScheduleRepository
from app.repositories.venue_booking_repository import VenueBookingRepository
from app.services import (
    availability_service,
    inventory_service,
    order_service,
    payment_service,
    schedule_service,
    vendor_service,
    venue_booking_service,
)

# Import models to register with SQLAlchemy
import app.models  # noqa: F401

logger = logging.getLogger(__name__)

EMPLOYEES = [
    ("EMP-001", "Rina Susanti", "event_coordinator", "Operations"),
    ("EMP-002", "Budi Santoso", "decorator", "Decoration"),
    ("EMP-003", "Dewi Lestari", "decorator", "Decoration"),
    ("EMP-004", "Agus Pratama", "photographer", "Documentation"),
    ("EMP-005", "Sari Wulandari", "mc", "Entertainment"),
    ("EMP-006", "Joko Widodo", "driver", "Logistics"),
]

VENUES = [
    ("VEN-01", "Grand Ballroom", "ballroom", 500),
    ("VEN-02", "Rose Garden", "garden", 200),
    ("VEN-03", "Lotus Hall", "indoor", 150),
]

INVENTORY = {
    "Flowers": [("FLW-001", "Rose bouquet", "pcs", 12.5, 25.0), ("FLW-002", "Orchid stand", "pcs", 40.0, 75.0)],
    "Lighting": [("LGT-001", "Fairy lights 10m", "roll", 8.0, 15.0), ("LGT-002", "Uplight LED", "pcs", 35.0, 60.0)],
    "Fabric": [("FAB-001", "Chiffon drape", "m", 3.0, 6.0)],
}

# (shift_type, start, end)
SHIFTS = [
    ("morning", time(7, 0), time(12, 0)),
    ("afternoon", time(12, 0), time(17, 0)),
    ("evening", time(16, 0), time(22, 0)),
    ("full_day", time(8, 0), time(20, 0)),
]

EVENT_TYPES = ["wedding", "engagement", "birthday", "corporate"]

# category -> (company, contact person, city)
VENDORS = {
    "Florist": [("Taman Bunga Florist", "Lina Kusuma", "Jakarta"), ("Melati Fresh Flowers", "Hadi Saputra", "Bogor")],
    "Catering": [("Dapur Nusantara Catering", "Wati Rahayu", "Jakarta")],
    "Sound & Lighting": [("Terang Audio Visual", "Rudi Hartono", "Tangerang")],
}


def build_demo_data(db: Session, *, seed: int = 42, start: date | None = None, days: int = 14) -> dict:
    rng = random.Random(seed)
    start = start or date.today()

    employees = []
    for code, name, position, department in EMPLOYEES:
        e = Employee(
            employee_code=code,
            name=name,
            email=f"{code.lower()}@decor.example",
            phone=f"0812{rng.randint(10000000, 99999999)}",
            position=position,
            department=department,
            join_date=start - timedelta(days=rng.randint(90, 900)),
        )
        db.add(e)
        employees.append(e)

    venues = []
    for i, (code, name, venue_type, capacity) in enumerate(VENUES):
        v = Venue(code=code, name=name, venue_type=venue_type, capacity=capacity, city="Jakarta", sort_order=i)
        db.add(v)
        venues.append(v)

    items = []
    for cat_name, rows in INVENTORY.items():
        cat = InventoryCategory(name=cat_name)
        db.add(cat)
        db.flush()
        for code, name, unit, purchase, selling in rows:
            item = InventoryItem(
                category=cat,
                code=code,
                name=name,
                unit=unit,
                quantity=0,
                minimum_stock=rng.randint(5, 15),
                purchase_price=purchase,
                selling_price=selling,
            )
            db.add(item)
            items.append(item)
    db.commit()

    for item in items:
        inventory_service.add_stock(db, item.id, quantity=rng.randint(10, 60), on=start, notes="Opening stock")

    # One blackout day per venue
    for v in venues:
        availability_service.set_availability(
            db,
            venue_id=v.id,
            day=start + timedelta(days=rng.randint(0, days - 1)),
            is_available=False,
            unavailable_reason="Maintenance",
        )

    for cat_name, rows in VENDORS.items():
        category = vendor_service.create_category(db, name=cat_name)
        for company, contact, city in rows:
            vendor = vendor_service.create_vendor(
                db,
                category_id=category.id,
                company_name=company,
                contact_person=contact,
                email=f"{vendor_service.slugify(company)}@vendor.example",
                phone=f"0813{rng.randint(10000000, 99999999)}",
                city=city,
            )
            for _ in range(rng.randint(1, 4)):
                vendor_service.add_rating(db, vendor.id, rating=rng.randint(3, 5), would_recommend=rng.random() < 0.8)

    schedule_repo = ScheduleRepository(db)
    booking_repo = VenueBookingRepository(db)
    counts = {"schedules": 0, "bookings": 0, "orders": 0, "payments": 0, "skipped": 0}
    counts["vendors"] = sum(len(rows) for rows in VENDORS.values())

    for offset in range(days):
        day = start + timedelta(days=offset)
        for e in employees:
            for _ in range(rng.randint(0, 2)):
                shift_type, shift_start, shift_end = rng.choice(SHIFTS)
                try:
                    schedule_service.create_schedule(
                        schedule_repo,
                        employee_id=e.id,
                        day=day,
                        shift_start=shift_start,
                        shift_end=shift_end,
                        shift_type=shift_type,
                    )
                    counts["schedules"] += 1
                except ScheduleConflict:
                    counts["skipped"] += 1

        for v in venues:
            if rng.random() < 0.5:
                continue
            begin = rng.choice([9, 10, 13, 15, 17])
            length = rng.choice([3, 4, 5])
            client = f"Client {rng.randint(100, 999)}"
            total = float(rng.choice([15000, 25000, 40000]))
            order = order_service.create_order(
                db,
                client_name=client,
                event_date=day,
                event_type=rng.choice(EVENT_TYPES),
                total_price=total,
            )
            counts["orders"] += 1
            paid = rng.choice([0.0, total / 2, total])
            if paid:
                payment = payment_service.create_payment(
                    db,
                    order.id,
                    amount=paid,
                    payment_type="full" if paid == total else "dp",
                    payment_date=start,
                )
                counts["payments"] += 1
                # Leave some for the verification queue
                if rng.random() < 0.75:
                    payment_service.verify_payment(db, payment.id)
            try:
                venue_booking_service.create_booking(
                    booking_repo,
                    venue_id=v.id,
                    booking_date=day,
                    start_time=time(begin, 0),
                    end_time=time(min(begin + length, 23), 0),
                    client_name=client,
                    event_type=order.event_type,
                    guest_count=rng.randint(20, v.capacity),
                    total_price=total,
                    order_id=order.id,
                )
                counts["bookings"] += 1
            except (ScheduleConflict, VenueUnavailable):
                counts["skipped"] += 1

    logger.info(
        "Seeded %d schedules, %d bookings, %d orders (%d skipped)",
        counts["schedules"],
        counts["bookings"],
        counts["orders"],
        counts["skipped"],
    )
    return counts


def main() -> int:
    setup_logging(get_settings().log_level)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        build_demo_data(db)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
