from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.deps import get_db
from app.models.order import Order
from app.schemas.order import OrderCreate, OrderOut, OrderUpdate
from app.schemas.payment import PaymentCreate, PaymentOut
from app.services import order_service, payment_service
from app.services.audit_service import write_audit_log

router = APIRouter()


@router.get("", response_model=list[OrderOut])
def list_orders(
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    status: str | None = None,
    payment_status: str | None = None,
    db: Session = Depends(get_db),
):
    q = select(Order).order_by(Order.event_date.desc())
    if start_date:
        q = q.where(Order.event_date >= start_date)
    if end_date:
        q = q.where(Order.event_date <= end_date)
    if status:
        q = q.where(Order.status == status)
    if payment_status:
        q = q.where(Order.payment_status == payment_status)
    return db.execute(q.limit(get_settings().list_limit)).scalars().all()


@router.post("", response_model=OrderOut, status_code=201)
def create_order(payload: OrderCreate, request: Request, db: Session = Depends(get_db)):
    order = order_service.create_order(db, **payload.model_dump())

    write_audit_log(
        db,
        action_type="ORDER_CREATE",
        target_type="order",
        target_id=order.order_number,
        summary="Created order",
        diff_json={"client_name": order.client_name, "event_date": order.event_date, "total_price": order.total_price},
        request=request,
    )
    return order


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, db: Session = Depends(get_db)):
    return order_service.get_order(db, order_id)


@router.patch("/{order_id}", response_model=OrderOut)
def update_order(order_id: str, payload: OrderUpdate, request: Request, db: Session = Depends(get_db)):
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    order = order_service.update_order(db, order_id, data)

    write_audit_log(db, action_type="ORDER_UPDATE", target_type="order", target_id=order.order_number, summary="Updated order", diff_json={"keys": sorted(data.keys())}, request=request)
    return order


@router.get("/{order_id}/payments", response_model=list[PaymentOut])
def list_order_payments(order_id: str, db: Session = Depends(get_db)):
    order_service.get_order(db, order_id)
    return payment_service.list_payments(db, order_id=order_id, limit=get_settings().list_limit)


@router.post("/{order_id}/payments", response_model=PaymentOut, status_code=201)
def create_payment(order_id: str, payload: PaymentCreate, request: Request, db: Session = Depends(get_db)):
    payment = payment_service.create_payment(db, order_id, **payload.model_dump())

    write_audit_log(
        db,
        action_type="PAYMENT_CREATE",
        target_type="order",
        target_id=payment.order.order_number,
        summary="Payment entered (pending verification)",
        diff_json={"payment_id": payment.id, "amount": payment.amount, "payment_type": payment.payment_type, "payment_method": payment.payment_method},
        request=request,
    )
    return payment
