from __future__ import annotations

import logging
from typing import Optional

from core.errors import DuplicateKeyError, NotFoundError, ValidationError
from core.models import Item
from core.store import ITEMS_KEY, KeyValueStore

logger = logging.getLogger(__name__)

STOCK_IN = "IN"
STOCK_OUT = "OUT"


def list_items(store: KeyValueStore) -> list[Item]:
    return [Item.from_dict(d) for d in store.get(ITEMS_KEY, [])]


def get_item(store: KeyValueStore, sku: str) -> Optional[Item]:
    return next((i for i in list_items(store) if i.sku == sku), None)


def search_items(store: KeyValueStore, term: str) -> list[Item]:
    t = str(term or "").strip().lower()
    return [i for i in list_items(store) if t in i.name.lower() or t in i.sku.lower()]


def low_stock_items(store: KeyValueStore) -> list[Item]:
    return [i for i in list_items(store) if i.is_low_stock]


def validate_item_input(sku: Optional[str], name: Optional[str], uom: Optional[str]) -> None:
    missing = [label for label, v in (("SKU", sku), ("Name", name), ("UOM", uom)) if not str(v or "").strip()]
    if missing:
        raise ValidationError(f"Required: {', '.join(missing)}.")


def add_item(
    store: KeyValueStore,
    *,
    sku: str,
    name: str,
    uom: str,
    reorder_level: int = 0,
    price: float = 0.0,
) -> Item:
    items = store.get(ITEMS_KEY, [])
    sku = str(sku).strip()
    if any(d.get("sku") == sku for d in items):
        raise DuplicateKeyError(f"SKU {sku} already exists.")

    item = Item(
        sku=sku,
        name=str(name).strip(),
        uom=str(uom).strip(),
        stock_qty=0,
        reorder_level=int(reorder_level),
        price=float(price),
    )
    items.append(item.to_dict())
    store.set(ITEMS_KEY, items)
    logger.info("Item added: sku=%s", item.sku)
    return item


def update_item(store: KeyValueStore, item: Item) -> Item:
    """
    Full-record replace keyed by sku (metadata edits and stock adjustments).
    Non-negative stock is a caller concern, not enforced here.
    """
    items = store.get(ITEMS_KEY, [])
    for i, d in enumerate(items):
        if d.get("sku") == item.sku:
            items[i] = item.to_dict()
            store.set(ITEMS_KEY, items)
            logger.info("Item updated: sku=%s stock_qty=%s", item.sku, item.stock_qty)
            return item
    raise NotFoundError(f"Item {item.sku} not found.")


def adjust_stock(store: KeyValueStore, sku: str, *, direction: str, quantity: int) -> Item:
    """Stock in adds, stock out subtracts; a negative result is rejected."""
    item = get_item(store, sku)
    if item is None:
        raise NotFoundError(f"Item {sku} not found.")

    qty = int(quantity)
    if qty < 0:
        raise ValidationError("Quantity must be zero or more.")

    d = str(direction).strip().upper()
    if d == STOCK_IN:
        new_qty = item.stock_qty + qty
    elif d == STOCK_OUT:
        new_qty = item.stock_qty - qty
    else:
        raise ValidationError("Invalid direction. Use 'IN' or 'OUT'.")

    if new_qty < 0:
        raise ValidationError("Stock quantity cannot be negative.")

    item.stock_qty = new_qty
    return update_item(store, item)
