from __future__ import annotations

from typing import Any

from stockroom.models import Item, Location, StockTransaction
from stockroom.services.locations import resolve_location_name


def serialize_location(location: Location) -> dict[str, Any]:
    return {"id": location.id, "name": location.name}


def serialize_item(item: Item) -> dict[str, Any]:
    return {
        "id": item.id,
        "sku": item.sku,
        "name": item.name,
        "category": item.category,
        "location_id": item.location_id,
        "location_name": resolve_location_name(item.location_id),
        "quantity": item.quantity,
        "min_stock": item.min_stock,
        "is_low_stock": item.is_low_stock,
        "description": item.description or "",
        "image_url": item.image_url or "",
    }


def serialize_transaction(transaction: StockTransaction) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "item_id": transaction.item_id,
        "type": transaction.type,
        "quantity_change": transaction.quantity_change,
        "timestamp": transaction.timestamp.isoformat(),
        "notes": transaction.notes or "",
    }
