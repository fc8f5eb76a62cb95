from __future__ import annotations

import logging
import secrets
import string

from flask import current_app
from sqlalchemy import func, or_

from stockroom.errors import DuplicateSkuError, ItemNotFoundError, ValidationError
from stockroom.extensions import db
from stockroom.forms import ItemDraft, ItemFilter, ItemPatch
from stockroom.models import Item
from stockroom.services import ledger
from stockroom.services.locations import get_location

logger = logging.getLogger(__name__)

_SKU_ALPHABET = string.ascii_uppercase + string.digits
_SKU_RANDOM_LENGTH = 9


def _sku_taken(sku: str, *, exclude_item_id: int | None = None) -> bool:
    query = Item.query.filter(Item.sku == sku)
    if exclude_item_id is not None:
        query = query.filter(Item.id != exclude_item_id)
    return db.session.query(query.exists()).scalar()


def _placeholder_image(sku: str) -> str:
    template = current_app.config.get(
        "IMAGE_PLACEHOLDER_URL", "https://picsum.photos/seed/{sku}/400/300"
    )
    return template.format(sku=sku)


def _require_location(location_id: int) -> None:
    if get_location(location_id) is None:
        raise ValidationError(
            f"Location {location_id} does not exist.",
            details={"location_id": location_id},
        )


def generate_sku() -> str:
    """Return a random SKU that no item uses yet."""
    prefix = current_app.config.get("SKU_PREFIX", "SKU-")
    while True:
        suffix = "".join(secrets.choice(_SKU_ALPHABET) for _ in range(_SKU_RANDOM_LENGTH))
        candidate = f"{prefix}{suffix}"
        if not _sku_taken(candidate):
            return candidate


def find_by_sku(sku: str | None) -> Item | None:
    # Exact, case-sensitive match: the label encodes the SKU verbatim.
    if not sku:
        return None
    return Item.query.filter(Item.sku == sku).first()


def find_by_id(item_id: int | None) -> Item | None:
    if item_id is None:
        return None
    return db.session.get(Item, item_id)


def get_item_or_raise(item_id: int) -> Item:
    item = find_by_id(item_id)
    if item is None:
        raise ItemNotFoundError(f"Item {item_id} does not exist.")
    return item


def create_item(draft: ItemDraft) -> Item:
    sku = draft.sku or generate_sku()
    if _sku_taken(sku):
        raise DuplicateSkuError(f"SKU {sku} is already assigned.", details={"sku": sku})
    _require_location(draft.location_id)

    min_stock = draft.min_stock
    if min_stock is None:
        min_stock = current_app.config.get("DEFAULT_MIN_STOCK", 10)

    item = Item(
        sku=sku,
        name=draft.name,
        category=draft.category,
        location_id=draft.location_id,
        quantity=draft.quantity,
        opening_quantity=draft.quantity,
        min_stock=min_stock,
        description=draft.description,
        image_url=draft.image_url or _placeholder_image(sku),
    )
    db.session.add(item)
    db.session.commit()
    logger.info("Created item %s (%s) with quantity %s", item.id, item.sku, item.quantity)
    return item


def update_item(item_id: int, patch: ItemPatch) -> Item:
    item = get_item_or_raise(item_id)
    changes = patch.changes()

    new_sku = changes.get("sku")
    if new_sku and new_sku != item.sku and _sku_taken(new_sku, exclude_item_id=item.id):
        raise DuplicateSkuError(
            f"SKU {new_sku} is already assigned.", details={"sku": new_sku}
        )
    if "location_id" in changes and changes["location_id"] != item.location_id:
        _require_location(changes["location_id"])
    if changes.get("image_url") == "":
        changes["image_url"] = _placeholder_image(new_sku or item.sku)
    elif (
        new_sku
        and "image_url" not in changes
        and item.image_url == _placeholder_image(item.sku)
    ):
        # The placeholder is keyed on the SKU, so it follows a rename.
        changes["image_url"] = _placeholder_image(new_sku)

    for field_name, value in changes.items():
        setattr(item, field_name, value)
    db.session.commit()
    return item


def delete_item(item_id: int) -> None:
    """Remove an item together with every ledger entry that references it."""
    item = get_item_or_raise(item_id)
    try:
        with db.session.begin_nested():
            removed = ledger.remove_for_item(item.id)
            db.session.delete(item)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info("Deleted item %s with %s ledger entries", item_id, removed)


def list_items(item_filter: ItemFilter | None = None) -> list[Item]:
    item_filter = item_filter or ItemFilter()
    query = Item.query

    if item_filter.search:
        term = item_filter.search.lower()
        query = query.filter(
            or_(
                func.lower(Item.name).contains(term, autoescape=True),
                func.lower(Item.sku).contains(term, autoescape=True),
            )
        )
    if item_filter.category:
        query = query.filter(Item.category == item_filter.category)
    if item_filter.location_id is not None:
        query = query.filter(Item.location_id == item_filter.location_id)

    query = query.order_by(Item.id)
    if item_filter.offset:
        query = query.offset(item_filter.offset)
    if item_filter.limit is not None:
        query = query.limit(item_filter.limit)
    return query.all()


def list_categories() -> list[str]:
    rows = db.session.query(Item.category).distinct().order_by(Item.category).all()
    return [category for (category,) in rows if category]


def count_items() -> int:
    return Item.query.count()
