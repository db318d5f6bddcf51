from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.deps import get_db
from app.models.inventory import InventoryCategory, InventoryItem, InventoryTransaction
from app.schemas.inventory import (
    InventoryCategoryCreate,
    InventoryCategoryOut,
    InventoryItemCreate,
    InventoryItemOut,
    InventoryItemUpdate,
    InventoryTransactionOut,
    StockMove,
)
from app.services import inventory_service
from app.services.audit_service import write_audit_log

router = APIRouter()


@router.get("/categories", response_model=list[InventoryCategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return db.execute(select(InventoryCategory).order_by(InventoryCategory.name)).scalars().all()


@router.post("/categories", response_model=InventoryCategoryOut, status_code=201)
def create_category(payload: InventoryCategoryCreate, request: Request, db: Session = Depends(get_db)):
    if db.execute(select(InventoryCategory.id).where(InventoryCategory.name == payload.name)).first():
        raise HTTPException(status_code=422, detail="Category name already in use")

    c = InventoryCategory(name=payload.name, description=payload.description)
    db.add(c)
    db.commit()
    db.refresh(c)

    write_audit_log(db, action_type="INVENTORY_CATEGORY_CREATE", target_type="inventory_category", target_id=c.id, summary="Created inventory category", request=request)
    return c


@router.get("/items", response_model=list[InventoryItemOut])
def list_items(
    category_id: str | None = None,
    search: str | None = None,
    active_only: bool = False,
    db: Session = Depends(get_db),
):
    q = select(InventoryItem).order_by(InventoryItem.code)
    if category_id:
        q = q.where(InventoryItem.category_id == category_id)
    if search:
        like = f"%{search}%"
        q = q.where(InventoryItem.name.ilike(like) | InventoryItem.code.ilike(like))
    if active_only:
        q = q.where(InventoryItem.is_active == True)
    return db.execute(q.limit(get_settings().list_limit)).scalars().all()


@router.post("/items", response_model=InventoryItemOut, status_code=201)
def create_item(payload: InventoryItemCreate, request: Request, db: Session = Depends(get_db)):
    if db.execute(select(InventoryItem.id).where(InventoryItem.code == payload.code)).first():
        raise HTTPException(status_code=422, detail="Item code already in use")
    if payload.category_id and not db.get(InventoryCategory, payload.category_id):
        raise HTTPException(status_code=404, detail="Category not found")

    item = InventoryItem(**payload.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)

    write_audit_log(db, action_type="INVENTORY_ITEM_CREATE", target_type="inventory_item", target_id=item.id, summary=f"Created item {item.code}", request=request)
    return item


@router.get("/items/{item_id}", response_model=InventoryItemOut)
def get_item(item_id: str, db: Session = Depends(get_db)):
    return inventory_service.get_item(db, item_id)


@router.patch("/items/{item_id}", response_model=InventoryItemOut)
def update_item(item_id: str, payload: InventoryItemUpdate, request: Request, db: Session = Depends(get_db)):
    item = inventory_service.get_item(db, item_id)
    # category_id may be cleared; every other column is NOT NULL
    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k == "category_id"}
    for k, v in data.items():
        setattr(item, k, v)
    db.commit()
    db.refresh(item)

    write_audit_log(db, action_type="INVENTORY_ITEM_UPDATE", target_type="inventory_item", target_id=item.id, summary=f"Updated item {item.code}", diff_json={"keys": sorted(data.keys())}, request=request)
    return item


@router.delete("/items/{item_id}")
def delete_item(item_id: str, request: Request, db: Session = Depends(get_db)):
    item = inventory_service.get_item(db, item_id)
    db.delete(item)
    db.commit()

    write_audit_log(db, action_type="INVENTORY_ITEM_DELETE", target_type="inventory_item", target_id=item_id, summary="Deleted inventory item", request=request)
    return {"ok": True}


@router.post("/items/{item_id}/add-stock", response_model=InventoryTransactionOut, status_code=201)
def add_stock(item_id: str, payload: StockMove, request: Request, db: Session = Depends(get_db)):
    tx = inventory_service.add_stock(db, item_id, quantity=payload.quantity, on=payload.transaction_date, notes=payload.notes)

    write_audit_log(db, action_type="STOCK_IN", target_type="inventory_item", target_id=item_id, summary=f"Stock in x{tx.quantity}", diff_json={"before": tx.stock_before, "after": tx.stock_after}, request=request)
    return tx


@router.post("/items/{item_id}/remove-stock", response_model=InventoryTransactionOut, status_code=201)
def remove_stock(item_id: str, payload: StockMove, request: Request, db: Session = Depends(get_db)):
    tx = inventory_service.remove_stock(db, item_id, quantity=payload.quantity, on=payload.transaction_date, notes=payload.notes)

    write_audit_log(db, action_type="STOCK_OUT", target_type="inventory_item", target_id=item_id, summary=f"Stock out x{tx.quantity}", diff_json={"before": tx.stock_before, "after": tx.stock_after}, request=request)
    return tx


@router.get("/low-stock", response_model=list[InventoryItemOut])
def low_stock(db: Session = Depends(get_db)):
    return inventory_service.low_stock_items(db)


@router.get("/transactions", response_model=list[InventoryTransactionOut])
def list_transactions(
    item_id: str | None = None,
    type: str | None = Query(default=None, pattern="^(IN|OUT)$"),
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
):
    q = select(InventoryTransaction).order_by(InventoryTransaction.transaction_date.desc(), InventoryTransaction.created_at.desc())
    if item_id:
        q = q.where(InventoryTransaction.item_id == item_id)
    if type:
        q = q.where(InventoryTransaction.type == type)
    if start_date:
        q = q.where(InventoryTransaction.transaction_date >= start_date)
    if end_date:
        q = q.where(InventoryTransaction.transaction_date <= end_date)
    return db.execute(q.limit(get_settings().list_limit)).scalars().all()
