"""Payload parsing helpers for item and location requests."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from stockroom.errors import ValidationError
from stockroom.models import MAX_QUANTITY, TransactionType


@dataclass
class ItemDraft:
    name: str
    category: str
    location_id: int
    sku: str | None = None
    quantity: int = 0
    min_stock: int | None = None
    description: str = ""
    image_url: str | None = None


@dataclass
class ItemPatch:
    """Fields an edit may change. ``None`` leaves the stored value alone."""

    name: str | None = None
    sku: str | None = None
    category: str | None = None
    location_id: int | None = None
    min_stock: int | None = None
    description: str | None = None
    image_url: str | None = None

    def changes(self) -> dict[str, Any]:
        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if getattr(self, field.name) is not None
        }


@dataclass
class ItemFilter:
    search: str | None = None
    category: str | None = None
    location_id: int | None = None
    limit: int | None = None
    offset: int = 0


def _text(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return str(value).strip()


def _integer(
    data: Mapping[str, Any],
    key: str,
    errors: list[str],
    *,
    label: str,
    minimum: int | None = None,
) -> int | None:
    raw = data.get(key)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, bool):
        errors.append(f"{label} must be a whole number.")
        return None
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        errors.append(f"{label} must be a whole number.")
        return None
    if minimum is not None and value < minimum:
        errors.append(f"{label} must be at least {minimum}.")
        return None
    if abs(value) > MAX_QUANTITY:
        errors.append(f"{label} is too large.")
        return None
    return value


def _raise_if_errors(errors: list[str]) -> None:
    if errors:
        raise ValidationError("; ".join(errors), details={"errors": errors})


def parse_location_name(data: Mapping[str, Any]) -> str:
    name = _text(data, "name")
    if not name:
        raise ValidationError("Location name is required.")
    return name


def parse_item_draft(data: Mapping[str, Any]) -> ItemDraft:
    errors: list[str] = []

    name = _text(data, "name")
    category = _text(data, "category")
    if not name:
        errors.append("Name is required.")
    if not category:
        errors.append("Category is required.")

    error_count = len(errors)
    location_id = _integer(data, "location_id", errors, label="Location")
    if location_id is None and len(errors) == error_count:
        errors.append("Location is required.")

    quantity = _integer(data, "quantity", errors, label="Quantity", minimum=0)
    min_stock = _integer(data, "min_stock", errors, label="Minimum stock", minimum=0)
    _raise_if_errors(errors)

    return ItemDraft(
        name=name,
        category=category,
        location_id=location_id,
        sku=_text(data, "sku") or None,
        quantity=quantity or 0,
        min_stock=min_stock,
        description=_text(data, "description") or "",
        image_url=_text(data, "image_url") or None,
    )


def parse_item_patch(data: Mapping[str, Any]) -> ItemPatch:
    errors: list[str] = []
    patch = ItemPatch()

    for key, label in (("name", "Name"), ("category", "Category"), ("sku", "SKU")):
        if key in data:
            value = _text(data, key)
            if not value:
                errors.append(f"{label} is required.")
            setattr(patch, key, value)

    if "location_id" in data:
        error_count = len(errors)
        patch.location_id = _integer(data, "location_id", errors, label="Location")
        if patch.location_id is None and len(errors) == error_count:
            errors.append("Location is required.")

    if "min_stock" in data:
        patch.min_stock = _integer(
            data, "min_stock", errors, label="Minimum stock", minimum=0
        )

    if "description" in data:
        patch.description = _text(data, "description") or ""
    if "image_url" in data:
        patch.image_url = _text(data, "image_url") or ""

    if "quantity" in data:
        errors.append("Quantity can only change through stock transactions.")

    _raise_if_errors(errors)
    return patch


def parse_item_filter(args: Mapping[str, Any]) -> ItemFilter:
    errors: list[str] = []
    location_id = _integer(args, "location_id", errors, label="Location")
    limit = _integer(args, "limit", errors, label="Limit", minimum=1)
    offset = _integer(args, "offset", errors, label="Offset", minimum=0)
    _raise_if_errors(errors)

    return ItemFilter(
        search=_text(args, "search") or None,
        category=_text(args, "category") or None,
        location_id=location_id,
        limit=limit,
        offset=offset or 0,
    )


def parse_transaction_type(value: Any) -> str:
    if value is None:
        raise ValidationError("Transaction type is required.")
    normalized = str(value).strip().capitalize()
    if normalized not in TransactionType.ALL_TYPES:
        raise ValidationError(
            f"Unknown transaction type {value!r}.",
            details={"allowed": TransactionType.ALL_TYPES},
        )
    return normalized
