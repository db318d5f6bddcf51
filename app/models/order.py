from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models._mixins import TimestampMixin


class Order(Base, TimestampMixin):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)

    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_phone: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    event_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    event_type: Mapped[str] = mapped_column(String(64), nullable=False, default="wedding")

    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")  # pending/confirmed/in_progress/completed/cancelled

    total_price: Mapped[float] = mapped_column(Numeric(15, 2, asdecimal=False), nullable=False, default=0)
    paid_amount: Mapped[float] = mapped_column(Numeric(15, 2, asdecimal=False), nullable=False, default=0)
    payment_status: Mapped[str] = mapped_column(String(16), nullable=False, default="unpaid")  # unpaid/partial/paid

    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
