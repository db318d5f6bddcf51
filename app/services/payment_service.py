"""Payment transactions recorded against orders.

A payment is entered as ``pending`` and only counts once it has been verified.
``Order.paid_amount`` is always the sum of the order's verified payments, and
it is recomputed in the same commit as every change that could move it.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.errors import InvalidRequest, InvalidTransition, ResourceNotFound
from app.models.order import Order
from app.models.payment import PaymentTransaction
from app.services.report_service import payment_status
from app.services.status_flow import PAYMENT_TRANSITIONS, ensure_transition

logger = logging.getLogger(__name__)


def get_payment(db: Session, payment_id: str) -> PaymentTransaction:
    payment = db.get(PaymentTransaction, payment_id)
    if payment is None:
        raise ResourceNotFound(f"Payment {payment_id} not found")
    return payment


def _lock_order(db: Session, order_id: str) -> Order:
    order = db.execute(select(Order).where(Order.id == order_id).with_for_update()).scalar_one_or_none()
    if order is None:
        raise ResourceNotFound(f"Order {order_id} not found")
    return order


def verified_total(db: Session, order_id: str) -> float:
    total = db.execute(
        select(func.coalesce(func.sum(PaymentTransaction.amount), 0)).where(
            PaymentTransaction.order_id == order_id,
            PaymentTransaction.status == "verified",
        )
    ).scalar_one()
    return float(total or 0)


def sync_paid_amount(db: Session, order: Order) -> Order:
    db.flush()
    order.paid_amount = verified_total(db, order.id)
    order.payment_status = payment_status(order.total_price, order.paid_amount)
    return order


def list_payments(
    db: Session,
    *,
    order_id: str | None = None,
    status: str | None = None,
    payment_type: str | None = None,
    limit: int = 1000,
) -> list[PaymentTransaction]:
    q = select(PaymentTransaction).order_by(PaymentTransaction.payment_date.desc(), PaymentTransaction.created_at.desc())
    if order_id:
        q = q.where(PaymentTransaction.order_id == order_id)
    if status:
        q = q.where(PaymentTransaction.status == status)
    if payment_type:
        q = q.where(PaymentTransaction.payment_type == payment_type)
    return list(db.execute(q.limit(limit)).scalars().all())


def create_payment(
    db: Session,
    order_id: str,
    *,
    amount: float,
    payment_type: str = "dp",
    payment_method: str = "transfer",
    payment_date: date | None = None,
    proof_url: str = "",
    notes: str = "",
) -> PaymentTransaction:
    if amount <= 0:
        raise InvalidRequest("Payment amount must be positive")
    order = db.get(Order, order_id)
    if order is None:
        raise ResourceNotFound(f"Order {order_id} not found")
    if order.status == "cancelled":
        raise InvalidRequest(f"Order {order.order_number} is cancelled")

    payment = PaymentTransaction(
        order_id=order.id,
        amount=amount,
        payment_type=payment_type,
        payment_method=payment_method,
        payment_date=payment_date or date.today(),
        status="pending",
        proof_url=proof_url or "",
        notes=notes or "",
    )
    db.add(payment)
    db.commit()
    db.refresh(payment)
    logger.info("Payment of %.2f entered for %s (pending)", amount, order.order_number)
    return payment


def verify_payment(db: Session, payment_id: str) -> PaymentTransaction:
    payment = get_payment(db, payment_id)
    if payment.status == "verified":
        raise InvalidTransition("Payment already verified")
    ensure_transition(payment.status, "verified", PAYMENT_TRANSITIONS)

    try:
        order = _lock_order(db, payment.order_id)
        payment.status = "verified"
        payment.verified_at = datetime.now(timezone.utc)
        sync_paid_amount(db, order)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(payment)
    logger.info("Verified payment %s: %s paid %.2f (%s)", payment.id, order.order_number, order.paid_amount, order.payment_status)
    return payment


def reject_payment(db: Session, payment_id: str, reason: str = "") -> PaymentTransaction:
    payment = get_payment(db, payment_id)
    ensure_transition(payment.status, "rejected", PAYMENT_TRANSITIONS)

    payment.status = "rejected"
    payment.rejected_at = datetime.now(timezone.utc)
    payment.rejected_reason = (reason or "")[:255]
    db.commit()
    db.refresh(payment)
    logger.info("Rejected payment %s", payment.id)
    return payment


def delete_payment(db: Session, payment_id: str) -> None:
    payment = get_payment(db, payment_id)
    counted = payment.status == "verified"
    try:
        order = _lock_order(db, payment.order_id)
        db.delete(payment)
        if counted:
            sync_paid_amount(db, order)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted payment %s (verified=%s)", payment_id, counted)
