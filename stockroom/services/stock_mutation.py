from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import current_app

from stockroom.errors import InsufficientStockError, ItemNotFoundError, ValidationError
from stockroom.extensions import db
from stockroom.models import MAX_QUANTITY, Item, StockTransaction, TransactionType
from stockroom.services import ledger
from stockroom.services.catalog import find_by_sku

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerMismatch:
    item_id: int
    sku: str
    quantity: int
    expected: int


def check_sign(transaction_type: str, quantity_delta: int) -> None:
    if transaction_type not in TransactionType.ALL_TYPES:
        raise ValidationError(
            f"Unknown transaction type {transaction_type!r}.",
            details={"allowed": TransactionType.ALL_TYPES},
        )
    if isinstance(quantity_delta, bool) or not isinstance(quantity_delta, int):
        raise ValidationError("Quantity change must be a whole number.")
    if quantity_delta == 0:
        raise ValidationError("Quantity change cannot be zero.")
    if abs(quantity_delta) > MAX_QUANTITY:
        raise ValidationError("Quantity change is too large.")
    if transaction_type == TransactionType.INBOUND and quantity_delta < 0:
        raise ValidationError("Inbound transactions must add stock.")
    if transaction_type == TransactionType.OUTBOUND and quantity_delta > 0:
        raise ValidationError("Outbound transactions must remove stock.")


def scan_quantity_delta(mode: str, quantity: int) -> int:
    """Turn a scan mode and a counted quantity into a signed change."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("Quantity must be at least 1.")
    if mode == TransactionType.INBOUND:
        return quantity
    if mode == TransactionType.OUTBOUND:
        return -quantity
    raise ValidationError(f"{mode} changes need an explicit signed quantity change.")


def apply_stock_change(
    sku: str,
    quantity_delta: int,
    transaction_type: str,
    notes: str | None = None,
) -> StockTransaction:
    """Apply a signed quantity change to the item labelled ``sku``.

    The new quantity and the matching ledger entry are written together. An
    unknown SKU raises :class:`ItemNotFoundError` and leaves both untouched.
    """
    check_sign(transaction_type, quantity_delta)

    item = find_by_sku(sku)
    if item is None:
        logger.warning("Stock change rejected: no item with SKU %r", sku)
        raise ItemNotFoundError(
            f"Failed to find item with SKU: {sku}", details={"sku": sku}
        )

    new_quantity = item.quantity + quantity_delta
    if abs(new_quantity) > MAX_QUANTITY:
        raise ValidationError(
            f"Quantity for {item.sku} would exceed {MAX_QUANTITY}.",
            details={"sku": item.sku},
        )
    if new_quantity < 0 and not current_app.config.get("ALLOW_NEGATIVE_STOCK", True):
        raise InsufficientStockError(
            f"Not enough stock for {item.sku}. Available {item.quantity}.",
            details={"sku": item.sku, "available": item.quantity},
        )

    try:
        with db.session.begin_nested():
            item.quantity = new_quantity
            transaction = ledger.append_transaction(
                item.id, transaction_type, quantity_delta, notes
            )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "%s %+d for %s (item %s), quantity now %s",
        transaction_type,
        quantity_delta,
        item.sku,
        item.id,
        item.quantity,
    )
    return transaction


def verify_ledger_consistency() -> list[LedgerMismatch]:
    totals = ledger.ledger_totals()
    mismatches = []
    for item in Item.query.order_by(Item.id).all():
        expected = item.opening_quantity + totals.get(item.id, 0)
        if item.quantity != expected:
            mismatches.append(
                LedgerMismatch(
                    item_id=item.id,
                    sku=item.sku,
                    quantity=item.quantity,
                    expected=expected,
                )
            )
    return mismatches
