from __future__ import annotations

from datetime import date, time

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.errors import InvalidTransition, ResourceNotFound, ScheduleConflict, VenueUnavailable
from app.services import availability_service, venue_booking_service
from app.services.numbering import NUMBER_ATTEMPTS

DAY = date(2025, 6, 14)


def _book(repo, venue, start, end, day=DAY, **kwargs):
    kwargs.setdefault("client_name", "Ayu & Bima")
    return venue_booking_service.create_booking(
        repo,
        venue_id=venue.id,
        booking_date=day,
        start_time=start,
        end_time=end,
        **kwargs,
    )


def test_booking_numbers_follow_daily_sequence(booking_repo, make_venue):
    v = make_venue()
    first = _book(booking_repo, v, time(9), time(12))
    second = _book(booking_repo, v, time(13), time(16))

    prefix = f"VB{date.today().strftime('%Y%m%d')}"
    assert first.booking_number == f"{prefix}0001"
    assert second.booking_number == f"{prefix}0002"
    assert first.status == "pending"


def test_venue_overlap_rejected_touching_allowed(booking_repo, make_venue):
    v = make_venue()
    _book(booking_repo, v, time(10), time(14))

    with pytest.raises(ScheduleConflict):
        _book(booking_repo, v, time(13), time(18))
    _book(booking_repo, v, time(14), time(18))


def test_blackout_day_blocks_booking(db, booking_repo, make_venue):
    v = make_venue()
    availability_service.set_availability(db, venue_id=v.id, day=DAY, is_available=False, unavailable_reason="Renovation")

    with pytest.raises(VenueUnavailable) as exc:
        _book(booking_repo, v, time(10), time(12))
    assert "Renovation" in exc.value.message

    _book(booking_repo, v, time(10), time(12), day=date(2025, 6, 15))


def test_booking_must_fit_available_hours(db, booking_repo, make_venue):
    v = make_venue()
    availability_service.set_availability(
        db,
        venue_id=v.id,
        day=DAY,
        is_available=True,
        available_from=time(10),
        available_until=time(18),
    )

    with pytest.raises(VenueUnavailable):
        _book(booking_repo, v, time(9), time(12))
    with pytest.raises(VenueUnavailable):
        _book(booking_repo, v, time(15), time(19))
    _book(booking_repo, v, time(10), time(18))


def test_inactive_venue_is_not_bookable(booking_repo, make_venue):
    v = make_venue(active=False)
    with pytest.raises(ResourceNotFound):
        _book(booking_repo, v, time(10), time(12))


def test_cancel_stamps_and_frees(booking_repo, make_venue):
    v = make_venue()
    b = _book(booking_repo, v, time(10), time(12))

    cancelled = venue_booking_service.change_booking_status(booking_repo, b.id, "cancelled", reason="Client postponed")
    assert cancelled.cancelled_at is not None
    assert cancelled.cancelled_reason == "Client postponed"

    _book(booking_repo, v, time(10), time(12))


def test_confirm_then_complete(booking_repo, make_venue):
    v = make_venue()
    b = _book(booking_repo, v, time(10), time(12))

    b = venue_booking_service.change_booking_status(booking_repo, b.id, "confirmed")
    assert b.confirmed_at is not None
    b = venue_booking_service.change_booking_status(booking_repo, b.id, "completed")

    with pytest.raises(InvalidTransition):
        venue_booking_service.update_booking(
            booking_repo,
            b.id,
            venue_id=v.id,
            booking_date=DAY,
            start_time=time(13),
            end_time=time(15),
            client_name="Ayu & Bima",
        )


def test_move_to_other_venue(booking_repo, make_venue):
    hall = make_venue("Lotus Hall")
    garden = make_venue("Rose Garden")
    _book(booking_repo, garden, time(10), time(12), client_name="Other party")
    b = _book(booking_repo, hall, time(10), time(12))

    with pytest.raises(ScheduleConflict):
        venue_booking_service.update_booking(
            booking_repo, b.id, venue_id=garden.id, booking_date=DAY, start_time=time(11), end_time=time(13), client_name="Ayu & Bima"
        )

    moved = venue_booking_service.update_booking(
        booking_repo, b.id, venue_id=garden.id, booking_date=DAY, start_time=time(12), end_time=time(15), client_name="Ayu & Bima"
    )
    assert moved.venue_id == garden.id


def test_booking_api_round(client, make_venue):
    v = make_venue()
    body = {
        "venue_id": v.id,
        "booking_date": "2025-06-14",
        "start_time": "10:00",
        "end_time": "14:00",
        "client_name": "Ayu & Bima",
        "client_email": "ayu@decorops.com",
        "event_type": "wedding",
        "guest_count": 250,
        "total_price": 45000,
    }
    res = client.post("/api/venue-bookings", json=body)
    assert res.status_code == 201, res.text
    booking = res.json()

    clash = client.post("/api/venue-bookings", json={**body, "start_time": "12:00", "end_time": "16:00"})
    assert clash.status_code == 422
    assert clash.json()["conflict"]["entry_id"] == booking["id"]

    res = client.post(f"/api/venue-bookings/{booking['id']}/status", json={"status": "cancelled", "reason": "Moved"})
    assert res.json()["status"] == "cancelled"

    assert client.post("/api/venue-bookings", json={**body, "start_time": "12:00", "end_time": "16:00"}).status_code == 201

    cal = client.get("/api/venue-bookings/calendar", params={"year": 2025, "month": 6, "venue_id": v.id}).json()
    assert len(cal["days"]) == 1
    assert len(cal["days"][0]["bookings"]) == 2

    logs = client.get("/api/audit-logs", params={"action_type": "VENUE_BOOKING_CREATE"}).json()
    assert logs[0]["diff_json"]["client_name"] == "<redacted>"


def test_booking_number_collision_draws_a_fresh_number(booking_repo, make_venue, monkeypatch):
    v = make_venue()
    first = _book(booking_repo, v, time(9), time(12))

    real = venue_booking_service.generate_booking_number
    drawn = []

    def stale_then_real(repo, today=None):
        number = first.booking_number if not drawn else real(repo, today)
        drawn.append(number)
        return number

    monkeypatch.setattr(venue_booking_service, "generate_booking_number", stale_then_real)
    second = _book(booking_repo, v, time(13), time(16))

    assert len(drawn) == 2
    assert second.booking_number == drawn[1] != first.booking_number
    assert len(venue_booking_service.list_bookings(booking_repo, venue_id=v.id)) == 2


def test_booking_number_collision_gives_up_after_retries(booking_repo, make_venue, monkeypatch):
    v = make_venue()
    first = _book(booking_repo, v, time(9), time(12))
    taken = first.booking_number
    calls = []

    def always_taken(repo, today=None):
        calls.append(taken)
        return taken

    monkeypatch.setattr(venue_booking_service, "generate_booking_number", always_taken)
    with pytest.raises(IntegrityError):
        _book(booking_repo, v, time(13), time(16))

    assert len(calls) == NUMBER_ATTEMPTS
    assert len(venue_booking_service.list_bookings(booking_repo, venue_id=v.id)) == 1
