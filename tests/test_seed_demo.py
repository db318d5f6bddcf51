from __future__ import annotations

from datetime import date

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.models.employee import EmployeeSchedule
from app.models.order import Order
from app.models.payment import PaymentTransaction
from app.models.vendor import Vendor
from app.models.venue import VenueBooking
from app.scripts.seed_demo import build_demo_data
from app.services.time_window import windows_overlap

START = date(2025, 6, 1)


def _snapshot(db):
    schedules = db.execute(
        select(EmployeeSchedule.employee_id, EmployeeSchedule.date, EmployeeSchedule.shift_start, EmployeeSchedule.shift_end)
    ).all()
    bookings = db.execute(select(VenueBooking.venue_id, VenueBooking.booking_date, VenueBooking.start_time, VenueBooking.end_time)).all()
    return schedules, bookings


def _assert_no_overlaps(rows):
    by_key: dict = {}
    for resource_id, day, start, end in rows:
        by_key.setdefault((resource_id, day), []).append((start, end))
    for windows in by_key.values():
        for i, (a_start, a_end) in enumerate(windows):
            for b_start, b_end in windows[i + 1 :]:
                assert not windows_overlap(a_start, a_end, b_start, b_end)


def test_seeded_data_respects_overlap_rule(db):
    counts = build_demo_data(db, seed=7, start=START, days=10)

    schedules, bookings = _snapshot(db)
    assert counts["schedules"] == len(schedules)
    assert counts["bookings"] == len(bookings)
    assert counts["schedules"] > 0
    _assert_no_overlaps(schedules)
    _assert_no_overlaps(bookings)


def _fresh_counts(seed: int) -> dict:
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(eng)
    session = sessionmaker(bind=eng, autoflush=False, expire_on_commit=False)()
    try:
        return build_demo_data(session, seed=seed, start=START, days=5)
    finally:
        session.close()
        eng.dispose()


def test_same_seed_same_data():
    first = _fresh_counts(11)
    assert first["schedules"] + first["skipped"] > 0
    assert first == _fresh_counts(11)


def test_seeded_orders_paid_amount_matches_verified_payments(db):
    counts = build_demo_data(db, seed=3, start=START, days=7)
    assert counts["vendors"] == len(db.execute(select(Vendor)).scalars().all())

    for order in db.execute(select(Order)).scalars().all():
        verified = db.execute(
            select(PaymentTransaction.amount).where(PaymentTransaction.order_id == order.id, PaymentTransaction.status == "verified")
        ).scalars().all()
        assert order.paid_amount == sum(verified)

    for vendor in db.execute(select(Vendor)).scalars().all():
        assert vendor.total_reviews >= 1
        assert 3 <= vendor.average_rating <= 5
