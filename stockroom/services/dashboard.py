from __future__ import annotations

from datetime import date, datetime, time, timedelta

from sqlalchemy import func

from stockroom.extensions import db
from stockroom.models import Item, StockTransaction, TransactionType


def inventory_summary() -> dict[str, int]:
    total_items, total_stock = db.session.query(
        func.count(Item.id), func.coalesce(func.sum(Item.quantity), 0)
    ).one()
    low_stock_count = Item.query.filter(Item.quantity <= Item.min_stock).count()
    return {
        "total_items": int(total_items or 0),
        "total_stock": int(total_stock or 0),
        "low_stock_count": low_stock_count,
    }


def low_stock_items() -> list[Item]:
    items = Item.query.filter(Item.quantity <= Item.min_stock).all()
    items.sort(key=lambda item: (-(item.min_stock - item.quantity), item.sku))
    return items


def daily_activity(days: int = 7, today: date | None = None) -> list[dict[str, object]]:
    """Inbound and outbound unit totals per day, oldest day first.

    Outbound totals are reported as positive magnitudes.
    """
    if days <= 0:
        return []
    today = today or datetime.utcnow().date()
    first_day = today - timedelta(days=days - 1)
    window_start = datetime.combine(first_day, time.min)
    window_end = datetime.combine(today + timedelta(days=1), time.min)

    rows = (
        StockTransaction.query.filter(
            StockTransaction.type.in_([TransactionType.INBOUND, TransactionType.OUTBOUND]),
            StockTransaction.timestamp >= window_start,
            StockTransaction.timestamp < window_end,
        )
        .with_entities(
            StockTransaction.timestamp,
            StockTransaction.type,
            StockTransaction.quantity_change,
        )
        .all()
    )

    buckets = {
        first_day + timedelta(days=offset): {"inbound": 0, "outbound": 0}
        for offset in range(days)
    }
    for timestamp, transaction_type, quantity_change in rows:
        bucket = buckets.get(timestamp.date())
        if bucket is None:
            continue
        if transaction_type == TransactionType.INBOUND:
            bucket["inbound"] += quantity_change
        else:
            bucket["outbound"] += abs(quantity_change)

    return [
        {"date": day.isoformat(), "inbound": totals["inbound"], "outbound": totals["outbound"]}
        for day, totals in sorted(buckets.items())
    ]
