import os
import sys
from datetime import date, datetime

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from stockroom import create_app
from stockroom.extensions import db
from stockroom.forms import ItemDraft
from stockroom.models import TransactionType
from stockroom.services import dashboard, ledger
from stockroom.services.catalog import create_item
from stockroom.services.locations import add_location


@pytest.fixture
def app():
    app = create_app(
        {"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:", "LOG_DIR": ""}
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def stock_items(app):
    location_id = add_location("Rack 1").id
    items = {}
    for sku, quantity, min_stock in (("LOW-1", 3, 10), ("EDGE-1", 10, 10), ("OK-1", 40, 10)):
        items[sku] = create_item(
            ItemDraft(
                name=sku,
                sku=sku,
                category="Parts",
                location_id=location_id,
                quantity=quantity,
                min_stock=min_stock,
            )
        ).id
    return items


def _record(item_id, transaction_type, change, when):
    transaction = ledger.append_transaction(item_id, transaction_type, change)
    transaction.timestamp = when
    db.session.commit()


def test_inventory_summary(stock_items):
    assert dashboard.inventory_summary() == {
        "total_items": 3,
        "total_stock": 53,
        "low_stock_count": 2,
    }


def test_inventory_summary_empty(app):
    assert dashboard.inventory_summary() == {
        "total_items": 0,
        "total_stock": 0,
        "low_stock_count": 0,
    }


def test_low_stock_items_ordered_by_shortage(stock_items):
    assert [item.sku for item in dashboard.low_stock_items()] == ["LOW-1", "EDGE-1"]


def test_daily_activity_buckets_by_day(stock_items):
    item_id = stock_items["OK-1"]
    _record(item_id, TransactionType.INBOUND, 20, datetime(2024, 5, 10, 9, 0))
    _record(item_id, TransactionType.INBOUND, 5, datetime(2024, 5, 10, 17, 30))
    _record(item_id, TransactionType.OUTBOUND, -7, datetime(2024, 5, 12, 8, 0))
    _record(item_id, TransactionType.ADJUSTMENT, -2, datetime(2024, 5, 12, 9, 0))
    _record(item_id, TransactionType.INBOUND, 99, datetime(2024, 5, 1, 9, 0))

    activity = dashboard.daily_activity(days=7, today=date(2024, 5, 12))

    assert [entry["date"] for entry in activity] == [
        "2024-05-06",
        "2024-05-07",
        "2024-05-08",
        "2024-05-09",
        "2024-05-10",
        "2024-05-11",
        "2024-05-12",
    ]
    assert activity[4] == {"date": "2024-05-10", "inbound": 25, "outbound": 0}
    assert activity[6] == {"date": "2024-05-12", "inbound": 0, "outbound": 7}
    assert sum(entry["inbound"] for entry in activity) == 25


def test_daily_activity_with_no_days(app):
    assert dashboard.daily_activity(days=0) == []
