from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

OrderStatus = Literal["pending", "confirmed", "in_progress", "completed", "cancelled"]


class OrderCreate(BaseModel):
    client_name: str = Field(min_length=1, max_length=255)
    client_phone: str = Field(default="", max_length=32)
    event_date: date
    event_type: str = Field(default="wedding", max_length=64)
    status: OrderStatus = "pending"
    total_price: float = Field(default=0, ge=0)
    notes: str = ""


class OrderUpdate(BaseModel):
    client_name: str | None = Field(default=None, min_length=1, max_length=255)
    client_phone: str | None = Field(default=None, max_length=32)
    event_date: date | None = None
    event_type: str | None = Field(default=None, max_length=64)
    status: OrderStatus | None = None
    total_price: float | None = Field(default=None, ge=0)
    notes: str | None = None


class OrderOut(BaseModel):
    id: str
    order_number: str
    client_name: str
    client_phone: str
    event_date: date
    event_type: str
    status: str
    total_price: float
    paid_amount: float
    payment_status: str
    notes: str

    class Config:
        from_attributes = True
