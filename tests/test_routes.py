import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from stockroom import create_app
from stockroom.extensions import db
from stockroom.models import Item, StockTransaction


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
def client(app):
    return app.test_client()


@pytest.fixture
def location_id(client):
    response = client.post("/locations/", json={"name": "Warehouse A - Rack 1"})
    assert response.status_code == 201
    return response.get_json()["id"]


@pytest.fixture
def widget(client, location_id):
    response = client.post(
        "/items/",
        json={
            "name": "Heavy Duty Widget",
            "sku": "HDW-001",
            "category": "Widgets",
            "location_id": location_id,
            "quantity": 50,
            "min_stock": 10,
            "description": "A very heavy and durable widget.",
        },
    )
    assert response.status_code == 201
    return response.get_json()


def test_location_crud(client):
    created = client.post("/locations/", json={"name": "  Shelf 1 "})
    assert created.status_code == 201
    location_id = created.get_json()["id"]
    assert created.get_json()["name"] == "Shelf 1"

    renamed = client.patch(f"/locations/{location_id}", json={"name": "Shelf One"})
    assert renamed.get_json()["name"] == "Shelf One"

    listing = client.get("/locations/").get_json()
    assert listing == [{"id": location_id, "name": "Shelf One"}]

    assert client.delete(f"/locations/{location_id}").status_code == 204
    assert client.get("/locations/").get_json() == []
    assert client.delete(f"/locations/{location_id}").status_code == 404


def test_location_requires_name(client):
    response = client.post("/locations/", json={"name": " "})
    assert response.status_code == 400
    assert response.get_json()["error"] == "ValidationError"


def test_location_accepts_form_posts(client):
    response = client.post("/locations/", data={"name": "Dock"})
    assert response.status_code == 201


def test_create_item_validation_errors(client):
    response = client.post("/items/", json={"sku": "X-1"})
    assert response.status_code == 400
    errors = response.get_json()["details"]["errors"]
    assert "Name is required." in errors
    assert "Category is required." in errors
    assert "Location is required." in errors


def test_create_item_duplicate_sku(client, widget, location_id):
    response = client.post(
        "/items/",
        json={"name": "Other", "sku": "HDW-001", "category": "Widgets", "location_id": location_id},
    )
    assert response.status_code == 409
    assert response.get_json()["error"] == "DuplicateSkuError"


def test_item_detail_includes_location_and_history(client, widget):
    client.post(
        "/scanner/stock-change", json={"sku": "HDW-001", "mode": "Outbound", "quantity": 12}
    )

    detail = client.get(f"/items/{widget['id']}").get_json()

    assert detail["quantity"] == 38
    assert detail["location_name"] == "Warehouse A - Rack 1"
    assert detail["is_low_stock"] is False
    assert detail["transactions"][0]["quantity_change"] == -12
    assert detail["transactions"][0]["type"] == "Outbound"


def test_list_items_with_filters(client, widget, location_id):
    client.post(
        "/items/",
        json={"name": "Lightweight Gizmo", "sku": "LWG-002", "category": "Gizmos", "location_id": location_id},
    )

    found = client.get("/items/?search=GIZ").get_json()
    assert [item["sku"] for item in found] == ["LWG-002"]

    by_category = client.get("/items/?category=Widgets").get_json()
    assert [item["sku"] for item in by_category] == ["HDW-001"]

    assert client.get("/items/?location_id=abc").status_code == 400
    assert client.get("/items/categories").get_json() == ["Gizmos", "Widgets"]


def test_update_item_rejects_quantity_edits(client, widget):
    response = client.patch(f"/items/{widget['id']}", json={"quantity": 500})
    assert response.status_code == 400

    response = client.patch(f"/items/{widget['id']}", json={"name": "Widget XL"})
    assert response.status_code == 200
    assert response.get_json()["name"] == "Widget XL"
    assert response.get_json()["quantity"] == 50


def test_delete_item_removes_history(client, widget):
    client.post("/scanner/stock-change", json={"sku": "HDW-001", "mode": "Inbound", "quantity": 3})

    assert client.delete(f"/items/{widget['id']}").status_code == 204
    assert client.get(f"/items/{widget['id']}").status_code == 404
    assert StockTransaction.query.count() == 0


def test_lookup_by_sku(client, widget):
    assert client.get("/items/sku/HDW-001").get_json()["id"] == widget["id"]
    missing = client.get("/items/sku/hdw-001")
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "ItemNotFoundError"

    assert client.post("/scanner/lookup", json={"sku": "HDW-001"}).status_code == 200
    assert client.post("/scanner/lookup", json={"sku": "NOPE"}).status_code == 404


def test_stock_change_unknown_sku(client, widget):
    response = client.post(
        "/scanner/stock-change", json={"sku": "UNKNOWN-SKU", "mode": "Inbound", "quantity": 5}
    )

    assert response.status_code == 404
    assert response.get_json()["message"] == "Failed to find item with SKU: UNKNOWN-SKU"
    assert Item.query.count() == 1
    assert StockTransaction.query.count() == 0


def test_stock_change_adjustment_with_signed_change(client, widget):
    response = client.post(
        "/scanner/stock-change",
        json={"sku": "HDW-001", "type": "adjustment", "quantity_change": -4, "notes": "Damaged"},
    )

    assert response.status_code == 201
    body = response.get_json()
    assert body["item"]["quantity"] == 46
    assert body["transaction"]["type"] == "Adjustment"
    assert body["transaction"]["notes"] == "Damaged"


def test_stock_change_rejects_bad_input(client, widget):
    assert client.post("/scanner/stock-change", json={"mode": "Inbound"}).status_code == 400
    assert (
        client.post("/scanner/stock-change", json={"sku": "HDW-001", "mode": "Teleport"}).status_code
        == 400
    )
    assert (
        client.post(
            "/scanner/stock-change", json={"sku": "HDW-001", "mode": "Inbound", "quantity": 0}
        ).status_code
        == 400
    )
    assert (
        client.post(
            "/scanner/stock-change",
            json={"sku": "HDW-001", "type": "Inbound", "quantity_change": -3},
        ).status_code
        == 400
    )
    assert StockTransaction.query.count() == 0


def test_transactions_report_filters(client, widget):
    client.post("/scanner/stock-change", json={"sku": "HDW-001", "mode": "Inbound", "quantity": 5})
    client.post("/scanner/stock-change", json={"sku": "HDW-001", "mode": "Outbound", "quantity": 2})

    everything = client.get("/reports/transactions").get_json()
    assert [row["quantity_change"] for row in everything] == [-2, 5]
    assert everything[0]["item_sku"] == "HDW-001"

    outbound = client.get("/reports/transactions?type=outbound").get_json()
    assert [row["type"] for row in outbound] == ["Outbound"]

    by_item = client.get(f"/reports/transactions?item_id={widget['id']}").get_json()
    assert len(by_item) == 2

    assert client.get("/reports/transactions?type=bogus").status_code == 400


def test_dashboard_overview(client, widget):
    client.post("/scanner/stock-change", json={"sku": "HDW-001", "mode": "Outbound", "quantity": 45})

    body = client.get("/dashboard/").get_json()

    assert body["summary"] == {"total_items": 1, "total_stock": 5, "low_stock_count": 1}
    assert [item["sku"] for item in body["low_stock"]] == ["HDW-001"]
    assert len(body["activity"]) == 7
    assert body["activity"][-1]["outbound"] == 45


def test_unknown_route_returns_json(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.get_json()["error"] == "Not Found"


def test_request_id_is_echoed(client):
    response = client.get("/locations/", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert client.get("/locations/").headers["X-Request-ID"]


def test_stock_change_rejects_non_text_notes(client, widget):
    response = client.post(
        "/scanner/stock-change",
        json={"sku": "HDW-001", "mode": "Inbound", "quantity": 2, "notes": 5},
    )

    assert response.status_code == 400
    assert response.get_json()["message"] == "Notes must be text."
    assert StockTransaction.query.count() == 0


def test_stock_change_rejects_oversized_quantities(client, widget):
    for payload in (
        {"sku": "HDW-001", "mode": "Inbound", "quantity": 10**30},
        {"sku": "HDW-001", "type": "Adjustment", "quantity_change": 10**30},
        {"sku": "HDW-001", "type": "Inbound", "quantity_change": 2**63 - 1},
    ):
        response = client.post("/scanner/stock-change", json=payload)
        assert response.status_code == 400, payload

    assert StockTransaction.query.count() == 0
    assert client.get("/items/sku/HDW-001").get_json()["quantity"] == 50


def test_create_item_rejects_oversized_numbers(client, location_id, widget):
    for field in ("quantity", "min_stock"):
        response = client.post(
            "/items/",
            json={
                "name": "Huge",
                "category": "Widgets",
                "location_id": location_id,
                field: 10**30,
            },
        )
        assert response.status_code == 400, field
        assert response.get_json()["details"]["errors"]

    assert Item.query.count() == 1
