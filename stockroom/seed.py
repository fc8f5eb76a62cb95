"""Demo inventory used when ``SEED_DEMO_DATA`` is enabled."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from stockroom.extensions import db
from stockroom.forms import ItemDraft
from stockroom.models import Item, Location, TransactionType
from stockroom.services.catalog import create_item
from stockroom.services.locations import add_location
from stockroom.services.stock_mutation import apply_stock_change

logger = logging.getLogger(__name__)

DEMO_LOCATIONS = (
    "Warehouse A - Rack 1",
    "Warehouse A - Rack 2",
    "Warehouse B - Shelf 1",
)

# (name, sku, category, location index, opening quantity, min stock, description)
DEMO_ITEMS = (
    ("Heavy Duty Widget", "HDW-001", "Widgets", 0, 0, 10, "A very heavy and durable widget."),
    ("Lightweight Gizmo", "LWG-002", "Gizmos", 1, 0, 5, "A lightweight and portable gizmo."),
    ("Standard Sprocket", "STS-003", "Sprockets", 0, 120, 25, "A standard issue sprocket for everyday use."),
)

# (sku, type, quantity change, days ago)
DEMO_TRANSACTIONS = (
    ("HDW-001", TransactionType.INBOUND, 50, 2),
    ("LWG-002", TransactionType.INBOUND, 20, 1),
    ("LWG-002", TransactionType.OUTBOUND, -12, 0),
)


def seed_demo_data(now: datetime | None = None) -> bool:
    """Load the demo inventory into an empty store. Returns False if skipped."""
    if Item.query.first() is not None or Location.query.first() is not None:
        logger.info("Skipping demo data: inventory already populated")
        return False

    now = now or datetime.utcnow()
    locations = [add_location(name) for name in DEMO_LOCATIONS]
    for name, sku, category, location_index, quantity, min_stock, description in DEMO_ITEMS:
        create_item(
            ItemDraft(
                name=name,
                sku=sku,
                category=category,
                location_id=locations[location_index].id,
                quantity=quantity,
                min_stock=min_stock,
                description=description,
            )
        )

    for sku, transaction_type, quantity_change, days_ago in DEMO_TRANSACTIONS:
        transaction = apply_stock_change(sku, quantity_change, transaction_type)
        transaction.timestamp = now - timedelta(days=days_ago)
    db.session.commit()

    logger.info(
        "Loaded demo data: %s locations, %s items, %s transactions",
        len(DEMO_LOCATIONS),
        len(DEMO_ITEMS),
        len(DEMO_TRANSACTIONS),
    )
    return True
