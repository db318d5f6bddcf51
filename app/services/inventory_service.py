from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import InvalidRequest, ResourceNotFound
from app.models.inventory import InventoryItem, InventoryTransaction

logger = logging.getLogger(__name__)


def get_item(db: Session, item_id: str) -> InventoryItem:
    item = db.get(InventoryItem, item_id)
    if item is None:
        raise ResourceNotFound(f"Inventory item {item_id} not found")
    return item


def _move_stock(db: Session, item: InventoryItem, *, kind: str, quantity: int, on: date | None, notes: str) -> InventoryTransaction:
    if quantity <= 0:
        raise InvalidRequest("Quantity must be at least 1")

    before = item.quantity
    after = before + quantity if kind == "IN" else before - quantity
    if after < 0:
        raise InvalidRequest(f"Only {before} {item.unit} of {item.code} in stock")

    item.quantity = after
    tx = InventoryTransaction(
        item_id=item.id,
        type=kind,
        quantity=quantity,
        stock_before=before,
        stock_after=after,
        transaction_date=on or date.today(),
        notes=notes or "",
    )
    db.add(tx)
    db.commit()
    db.refresh(tx)
    logger.info("Stock %s %s x%d (%d -> %d)", kind, item.code, quantity, before, after)
    return tx


def add_stock(db: Session, item_id: str, *, quantity: int, on: date | None = None, notes: str = "") -> InventoryTransaction:
    return _move_stock(db, get_item(db, item_id), kind="IN", quantity=quantity, on=on, notes=notes)


def remove_stock(db: Session, item_id: str, *, quantity: int, on: date | None = None, notes: str = "") -> InventoryTransaction:
    return _move_stock(db, get_item(db, item_id), kind="OUT", quantity=quantity, on=on, notes=notes)


def low_stock_items(db: Session) -> list[InventoryItem]:
    q = (
        select(InventoryItem)
        .where(InventoryItem.is_active == True)
        .where(InventoryItem.quantity <= InventoryItem.minimum_stock)
        .order_by(InventoryItem.quantity.asc())
    )
    return list(db.execute(q).scalars().all())
