"""Append-only stock transaction ledger.

Writes here never commit; the caller owns the surrounding step so the item
quantity and its ledger entry land together.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func

from stockroom.extensions import db
from stockroom.models import StockTransaction


def _newest_first(query):
    return query.order_by(StockTransaction.timestamp.desc(), StockTransaction.id.desc())


def append_transaction(
    item_id: int,
    transaction_type: str,
    quantity_change: int,
    notes: str | None = None,
) -> StockTransaction:
    transaction = StockTransaction(
        item_id=item_id,
        type=transaction_type,
        quantity_change=quantity_change,
        timestamp=datetime.utcnow(),
        notes=notes or None,
    )
    db.session.add(transaction)
    db.session.flush()
    return transaction


def list_for_item(item_id: int) -> list[StockTransaction]:
    return _newest_first(StockTransaction.query.filter_by(item_id=item_id)).all()


def list_filtered(
    transaction_type: str | None = None,
    item_id: int | None = None,
) -> list[StockTransaction]:
    query = StockTransaction.query
    if transaction_type:
        query = query.filter(StockTransaction.type == transaction_type)
    if item_id is not None:
        query = query.filter(StockTransaction.item_id == item_id)
    return _newest_first(query).all()


def remove_for_item(item_id: int) -> int:
    return (
        StockTransaction.query.filter_by(item_id=item_id)
        .delete(synchronize_session="fetch")
    )


def ledger_total(item_id: int) -> int:
    total = (
        db.session.query(func.coalesce(func.sum(StockTransaction.quantity_change), 0))
        .filter(StockTransaction.item_id == item_id)
        .scalar()
    )
    return int(total or 0)


def ledger_totals() -> dict[int, int]:
    rows = (
        db.session.query(
            StockTransaction.item_id,
            func.coalesce(func.sum(StockTransaction.quantity_change), 0),
        )
        .group_by(StockTransaction.item_id)
        .all()
    )
    return {item_id: int(total or 0) for item_id, total in rows}
