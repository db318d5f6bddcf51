"""Read-only aggregation over schedules, bookings, orders and inventory.

Everything is recomputed from the current rows on every call.
"""
from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import InvalidRequest
from app.models.employee import Employee, EmployeeSchedule
from app.models.inventory import InventoryItem, InventoryTransaction
from app.models.order import Order
from app.models.venue import Venue, VenueBooking
from app.services.time_window import TimeWindow


def payment_percentage(total_amount: float, paid_amount: float) -> float:
    total = float(total_amount or 0)
    paid = float(paid_amount or 0)
    if total <= 0:
        return 0.0
    return round(min(max(paid / total * 100, 0.0), 100.0), 2)


def payment_status(total_amount: float, paid_amount: float) -> str:
    total = float(total_amount or 0)
    paid = float(paid_amount or 0)
    if total > 0 and paid >= total:
        return "paid"
    if 0 < paid < total:
        return "partial"
    return "unpaid"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        raise InvalidRequest("month must be between 1 and 12")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _check_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise InvalidRequest("start_date must be on or before end_date")


def schedule_calendar(db: Session, *, year: int, month: int, employee_id: str | None = None) -> dict[date, list[EmployeeSchedule]]:
    start, end = month_bounds(year, month)
    q = select(EmployeeSchedule).where(EmployeeSchedule.date >= start, EmployeeSchedule.date <= end)
    if employee_id:
        q = q.where(EmployeeSchedule.employee_id == employee_id)
    q = q.order_by(EmployeeSchedule.date, EmployeeSchedule.shift_start)

    grouped: dict[date, list[EmployeeSchedule]] = defaultdict(list)
    for entry in db.execute(q).scalars().all():
        grouped[entry.date].append(entry)
    return dict(grouped)


def booking_calendar(db: Session, *, year: int, month: int, venue_id: str | None = None) -> dict[date, list[VenueBooking]]:
    start, end = month_bounds(year, month)
    q = select(VenueBooking).where(VenueBooking.booking_date >= start, VenueBooking.booking_date <= end)
    if venue_id:
        q = q.where(VenueBooking.venue_id == venue_id)
    q = q.order_by(VenueBooking.booking_date, VenueBooking.start_time)

    grouped: dict[date, list[VenueBooking]] = defaultdict(list)
    for booking in db.execute(q).scalars().all():
        grouped[booking.booking_date].append(booking)
    return dict(grouped)


def schedule_summary(db: Session, *, start_date: date, end_date: date) -> dict:
    """Counts by status plus scheduled hours per employee (cancelled shifts excluded)."""
    _check_range(start_date, end_date)
    rows = db.execute(
        select(EmployeeSchedule, Employee.name)
        .join(Employee, Employee.id == EmployeeSchedule.employee_id)
        .where(EmployeeSchedule.date >= start_date, EmployeeSchedule.date <= end_date)
    ).all()

    by_status: dict[str, int] = defaultdict(int)
    per_employee: dict[str, dict] = {}
    for entry, name in rows:
        by_status[entry.status] += 1
        if entry.status == "cancelled":
            continue
        stats = per_employee.setdefault(entry.employee_id, {"employee_id": entry.employee_id, "name": name, "shifts": 0, "hours": 0.0})
        stats["shifts"] += 1
        stats["hours"] += TimeWindow(entry.date, entry.shift_start, entry.shift_end).hours

    return {
        "period": {"start": start_date, "end": end_date},
        "total": len(rows),
        "by_status": dict(by_status),
        "employees": sorted(per_employee.values(), key=lambda s: s["name"]),
    }


def payment_report(db: Session, *, start_date: date, end_date: date) -> dict:
    _check_range(start_date, end_date)
    orders = db.execute(
        select(Order).where(Order.event_date >= start_date, Order.event_date <= end_date).order_by(Order.event_date)
    ).scalars().all()

    details = []
    counts = {"paid": 0, "partial": 0, "unpaid": 0}
    total_receivable = 0.0
    total_received = 0.0
    for o in orders:
        total = float(o.total_price or 0)
        paid = float(o.paid_amount or 0)
        status = payment_status(total, paid)
        counts[status] += 1
        total_receivable += total
        total_received += paid
        details.append(
            {
                "id": o.id,
                "order_number": o.order_number,
                "client_name": o.client_name,
                "event_date": o.event_date,
                "total_amount": total,
                "paid_amount": paid,
                "outstanding_amount": max(total - paid, 0.0),
                "payment_status": status,
                "payment_percentage": payment_percentage(total, paid),
            }
        )

    return {
        "summary": {
            "total_receivable": total_receivable,
            "total_received": total_received,
            "total_outstanding": sum(d["outstanding_amount"] for d in details),
            "fully_paid_count": counts["paid"],
            "partial_paid_count": counts["partial"],
            "unpaid_count": counts["unpaid"],
        },
        "details": details,
    }


def stock_value(items) -> float:
    return sum(int(i.quantity) * float(i.selling_price or 0) for i in items)


def inventory_report(db: Session, *, start_date: date, end_date: date, category_id: str | None = None) -> dict:
    _check_range(start_date, end_date)
    q = select(InventoryItem)
    if category_id:
        q = q.where(InventoryItem.category_id == category_id)
    items = db.execute(q.order_by(InventoryItem.code)).scalars().all()

    txs = db.execute(
        select(InventoryTransaction).where(
            InventoryTransaction.transaction_date >= start_date,
            InventoryTransaction.transaction_date <= end_date,
        )
    ).scalars().all()

    moved_in: dict[str, int] = defaultdict(int)
    moved_out: dict[str, int] = defaultdict(int)
    for tx in txs:
        if tx.type == "IN":
            moved_in[tx.item_id] += tx.quantity
        else:
            moved_out[tx.item_id] += abs(tx.quantity)

    details = []
    for item in items:
        purchase = float(item.purchase_price or 0)
        stock_in = moved_in.get(item.id, 0)
        stock_out = moved_out.get(item.id, 0)
        details.append(
            {
                "id": item.id,
                "code": item.code,
                "name": item.name,
                "category": item.category.name if item.category else None,
                "current_stock": item.quantity,
                "unit": item.unit,
                "stock_status": item.stock_status,
                "stock_value": item.quantity * float(item.selling_price or 0),
                "period_stock_in": stock_in,
                "period_stock_out": stock_out,
                "period_purchase_value": stock_in * purchase,
                "period_usage_value": stock_out * purchase,
            }
        )

    purchases = sum(d["period_purchase_value"] for d in details)
    usage = sum(d["period_usage_value"] for d in details)
    return {
        "summary": {
            "total_items": len(items),
            "current_stock_value": stock_value(items),
            "period_purchases": purchases,
            "period_usage": usage,
            "net_inventory_change": purchases - usage,
        },
        "items": details,
    }


def cash_flow(db: Session, *, start_date: date, end_date: date) -> dict:
    _check_range(start_date, end_date)
    completed = db.execute(
        select(Order.total_price).where(
            Order.event_date >= start_date,
            Order.event_date <= end_date,
            Order.status == "completed",
        )
    ).scalars().all()
    income = sum(float(v or 0) for v in completed)

    rows = db.execute(
        select(InventoryTransaction.quantity, InventoryItem.purchase_price)
        .join(InventoryItem, InventoryItem.id == InventoryTransaction.item_id)
        .where(
            InventoryTransaction.transaction_date >= start_date,
            InventoryTransaction.transaction_date <= end_date,
            InventoryTransaction.type == "IN",
        )
    ).all()
    inventory_expenses = sum(qty * float(price or 0) for qty, price in rows)

    net = income - inventory_expenses
    return {
        "period": {"start": start_date, "end": end_date},
        "income": income,
        "expenses": {"inventory": inventory_expenses, "total": inventory_expenses},
        "net_profit": net,
        "profit_margin": round(net / income * 100, 2) if income > 0 else 0.0,
    }


def daily_roster(db: Session, day: date) -> dict:
    """Non-cancelled schedules per employee and bookings per venue for one day."""
    employees = {e.id: e for e in db.execute(select(Employee)).scalars().all()}
    venues = db.execute(select(Venue).where(Venue.active == True).order_by(Venue.sort_order, Venue.name)).scalars().all()

    schedules = db.execute(
        select(EmployeeSchedule)
        .where(EmployeeSchedule.date == day, EmployeeSchedule.status != "cancelled")
        .order_by(EmployeeSchedule.shift_start)
    ).scalars().all()
    bookings = db.execute(
        select(VenueBooking)
        .where(VenueBooking.booking_date == day, VenueBooking.status != "cancelled")
        .order_by(VenueBooking.start_time)
    ).scalars().all()

    shifts = []
    for s in schedules:
        emp = employees.get(s.employee_id)
        shifts.append(
            {
                "employee": emp.name if emp else s.employee_id,
                "time_range": TimeWindow(s.date, s.shift_start, s.shift_end).label(),
                "shift_type": s.shift_type,
                "status": s.status,
                "location": s.location,
            }
        )

    venue_rows = []
    for v in venues:
        rows = [
            {
                "booking_number": b.booking_number,
                "time_range": TimeWindow(b.booking_date, b.start_time, b.end_time).label(),
                "client_name": b.client_name,
                "event_type": b.event_type,
                "guest_count": b.guest_count,
                "status": b.status,
            }
            for b in bookings
            if b.venue_id == v.id
        ]
        venue_rows.append({"name": v.name, "bookings": rows})

    return {"date": day, "shifts": shifts, "venues": venue_rows}
