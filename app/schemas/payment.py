from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

PaymentType = Literal["dp", "full", "installment"]
PaymentMethod = Literal["cash", "transfer", "credit_card", "debit_card"]


class PaymentCreate(BaseModel):
    amount: float = Field(gt=0)
    payment_type: PaymentType = "dp"
    payment_method: PaymentMethod = "transfer"
    payment_date: date | None = None
    proof_url: str = Field(default="", max_length=500)
    notes: str = ""


class PaymentReject(BaseModel):
    reason: str = Field(default="", max_length=255)


class PaymentOut(BaseModel):
    id: str
    order_id: str
    amount: float
    payment_type: str
    payment_method: str
    payment_date: date
    status: str
    proof_url: str
    notes: str
    verified_at: datetime | None = None
    rejected_at: datetime | None = None
    rejected_reason: str
    created_at: datetime

    class Config:
        from_attributes = True
