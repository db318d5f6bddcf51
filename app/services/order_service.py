from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import ResourceNotFound
from app.models.order import Order
from app.services.numbering import commit_numbered, next_number
from app.services.report_service import payment_status

logger = logging.getLogger(__name__)

ORDER_PREFIX = "ORD"


def generate_order_number(db: Session, today: date | None = None) -> str:
    today = today or date.today()
    prefix = f"{ORDER_PREFIX}{today.strftime('%Y%m%d')}"
    last = db.execute(
        select(Order.order_number).where(Order.order_number.like(f"{prefix}%")).order_by(Order.order_number.desc()).limit(1)
    ).scalar_one_or_none()
    return next_number(prefix, last)


def get_order(db: Session, order_id: str) -> Order:
    order = db.get(Order, order_id)
    if order is None:
        raise ResourceNotFound(f"Order {order_id} not found")
    return order


def create_order(db: Session, **fields) -> Order:
    """New orders start with nothing paid; money arrives through verified payment transactions."""

    def build() -> Order:
        order = Order(order_number=generate_order_number(db), paid_amount=0, **fields)
        order.payment_status = payment_status(order.total_price, 0)
        db.add(order)
        return order

    order = commit_numbered(db, build, "order")
    db.refresh(order)
    logger.info("Created order %s", order.order_number)
    return order


def update_order(db: Session, order_id: str, changes: dict) -> Order:
    order = get_order(db, order_id)
    for k, v in changes.items():
        setattr(order, k, v)
    order.payment_status = payment_status(order.total_price, order.paid_amount)
    db.commit()
    db.refresh(order)
    return order
