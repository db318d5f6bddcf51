from __future__ import annotations

from datetime import date, time

import pytest

from app.core.errors import InvalidRequest
from app.models.inventory import InventoryItem
from app.services import inventory_service, order_service, payment_service, report_service, schedule_service
from app.services.report_service import payment_percentage, payment_status


@pytest.mark.parametrize(
    "total,paid,pct,status",
    [
        (0, 0, 0.0, "unpaid"),
        (0, 50, 0.0, "unpaid"),
        (1000, 0, 0.0, "unpaid"),
        (1000, 250, 25.0, "partial"),
        (1000, 1000, 100.0, "paid"),
        (1000, 1500, 100.0, "paid"),
        (3, 1, 33.33, "partial"),
    ],
)
def test_payment_percentage_and_status(total, paid, pct, status):
    assert payment_percentage(total, paid) == pct
    assert payment_status(total, paid) == status


def test_month_bounds():
    assert report_service.month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    with pytest.raises(InvalidRequest):
        report_service.month_bounds(2024, 13)


def _order_paid(db, name, event_date, total, verified=0.0, pending=0.0):
    order = order_service.create_order(db, client_name=name, event_date=event_date, total_price=total)
    if verified:
        payment = payment_service.create_payment(db, order.id, amount=verified, payment_date=event_date)
        payment_service.verify_payment(db, payment.id)
    if pending:
        payment_service.create_payment(db, order.id, amount=pending, payment_date=event_date)
    return order


def test_payment_report(db):
    _order_paid(db, "Ayu", date(2025, 6, 14), 1000, verified=1000)
    _order_paid(db, "Bima", date(2025, 6, 20), 1000, verified=300, pending=700)
    _order_paid(db, "Citra", date(2025, 6, 21), 0)
    _order_paid(db, "Dani", date(2025, 7, 2), 800)

    report = report_service.payment_report(db, start_date=date(2025, 6, 1), end_date=date(2025, 6, 30))
    summary = report["summary"]
    assert summary["total_receivable"] == 2000
    assert summary["total_received"] == 1300
    assert summary["total_outstanding"] == 700
    assert (summary["fully_paid_count"], summary["partial_paid_count"], summary["unpaid_count"]) == (1, 1, 1)
    assert [d["payment_percentage"] for d in report["details"]] == [100.0, 30.0, 0.0]


def test_schedule_summary_excludes_cancelled_hours(schedule_repo, make_employee):
    e = make_employee()
    day = date(2025, 6, 2)
    schedule_service.create_schedule(schedule_repo, employee_id=e.id, day=day, shift_start=time(8), shift_end=time(12))
    cancelled = schedule_service.create_schedule(schedule_repo, employee_id=e.id, day=day, shift_start=time(13), shift_end=time(18))
    schedule_service.change_schedule_status(schedule_repo, cancelled.id, "cancelled")

    summary = report_service.schedule_summary(schedule_repo.db, start_date=date(2025, 6, 1), end_date=date(2025, 6, 30))
    assert summary["total"] == 2
    assert summary["by_status"] == {"scheduled": 1, "cancelled": 1}
    assert summary["employees"][0]["hours"] == 4.0


def test_inventory_report_and_cash_flow(db):
    item = InventoryItem(code="LGT-002", name="Uplight LED", unit="pcs", quantity=0, minimum_stock=2, purchase_price=35, selling_price=60)
    db.add(item)
    db.commit()
    inventory_service.add_stock(db, item.id, quantity=10, on=date(2025, 6, 3))
    inventory_service.remove_stock(db, item.id, quantity=4, on=date(2025, 6, 10))

    order = order_service.create_order(db, client_name="Ayu", event_date=date(2025, 6, 14), total_price=1000)
    order_service.update_order(db, order.id, {"status": "completed"})

    report = report_service.inventory_report(db, start_date=date(2025, 6, 1), end_date=date(2025, 6, 30))
    assert report["summary"]["current_stock_value"] == 6 * 60
    assert report["summary"]["period_purchases"] == 350
    assert report["summary"]["period_usage"] == 140
    assert report["items"][0]["period_stock_out"] == 4

    flow = report_service.cash_flow(db, start_date=date(2025, 6, 1), end_date=date(2025, 6, 30))
    assert flow["income"] == 1000
    assert flow["expenses"]["inventory"] == 350
    assert flow["net_profit"] == 650
    assert flow["profit_margin"] == 65.0

    empty = report_service.cash_flow(db, start_date=date(2025, 1, 1), end_date=date(2025, 1, 31))
    assert empty["profit_margin"] == 0.0


def test_report_endpoints_validate_range(client):
    res = client.get("/api/reports/payments", params={"start_date": "2025-06-30", "end_date": "2025-06-01"})
    assert res.status_code == 422
    assert client.get("/api/reports/cash-flow", params={"start_date": "2025-06-01", "end_date": "2025-06-30"}).status_code == 200
    assert client.get("/api/reports/schedules/summary", params={"start_date": "2025-06-01", "end_date": "2025-06-30"}).json()["total"] == 0


def test_daily_print(client, make_employee, make_venue):
    e = make_employee("Dewi Lestari")
    v = make_venue("Rose Garden")
    client.post("/api/schedules", json={"employee_id": e.id, "date": "2025-06-14", "shift_start": "07:00", "shift_end": "15:00"})
    client.post(
        "/api/venue-bookings",
        json={"venue_id": v.id, "booking_date": "2025-06-14", "start_time": "10:00", "end_time": "14:00", "client_name": "Ayu & Bima"},
    )

    res = client.get("/api/prints/daily", params={"day": "2025-06-14"})
    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]
    assert "Dewi Lestari" in res.text
    assert "07:00-15:00" in res.text
    assert "Rose Garden" in res.text
    assert "Ayu &amp; Bima" in res.text
