from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class InventoryCategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = ""


class InventoryCategoryOut(BaseModel):
    id: str
    name: str
    description: str

    class Config:
        from_attributes = True


class InventoryItemCreate(BaseModel):
    category_id: str | None = None
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    unit: str = Field(default="pcs", max_length=20)
    quantity: int = Field(default=0, ge=0)
    minimum_stock: int = Field(default=0, ge=0)
    purchase_price: float = Field(default=0, ge=0)
    selling_price: float = Field(default=0, ge=0)
    location: str = Field(default="", max_length=100)
    is_active: bool = True


class InventoryItemUpdate(BaseModel):
    category_id: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    unit: str | None = Field(default=None, max_length=20)
    minimum_stock: int | None = Field(default=None, ge=0)
    purchase_price: float | None = Field(default=None, ge=0)
    selling_price: float | None = Field(default=None, ge=0)
    location: str | None = Field(default=None, max_length=100)
    is_active: bool | None = None


class InventoryItemOut(BaseModel):
    id: str
    category_id: str | None
    code: str
    name: str
    unit: str
    quantity: int
    minimum_stock: int
    purchase_price: float
    selling_price: float
    location: str
    is_active: bool
    stock_status: str

    class Config:
        from_attributes = True


class StockMove(BaseModel):
    quantity: int = Field(ge=1)
    transaction_date: date | None = None
    notes: str = ""


class InventoryTransactionOut(BaseModel):
    id: str
    item_id: str
    type: str
    quantity: int
    stock_before: int
    stock_after: int
    transaction_date: date
    notes: str

    class Config:
        from_attributes = True
