from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models._mixins import TimestampMixin
from app.models.order import Order


class PaymentTransaction(Base, TimestampMixin):
    __tablename__ = "payment_transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id: Mapped[str] = mapped_column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)

    amount: Mapped[float] = mapped_column(Numeric(15, 2, asdecimal=False), nullable=False)
    payment_type: Mapped[str] = mapped_column(String(16), nullable=False, default="dp")  # dp/full/installment
    payment_method: Mapped[str] = mapped_column(String(16), nullable=False, default="transfer")  # cash/transfer/credit_card/debit_card
    payment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # Only verified rows count towards Order.paid_amount
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")  # pending/verified/rejected

    proof_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_reason: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    order: Mapped[Order] = relationship("Order")
