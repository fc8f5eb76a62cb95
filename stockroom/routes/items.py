from flask import Blueprint, jsonify, request

from stockroom.errors import ItemNotFoundError
from stockroom.forms import parse_item_draft, parse_item_filter, parse_item_patch
from stockroom.serializers import serialize_item, serialize_transaction
from stockroom.services import catalog, ledger
from stockroom.utils.requests import request_payload

bp = Blueprint("items", __name__, url_prefix="/items")


@bp.get("/")
def list_items():
    item_filter = parse_item_filter(request.args)
    return jsonify([serialize_item(item) for item in catalog.list_items(item_filter)])


@bp.post("/")
def create_item():
    item = catalog.create_item(parse_item_draft(request_payload()))
    return jsonify(serialize_item(item)), 201


@bp.get("/categories")
def list_categories():
    return jsonify(catalog.list_categories())


@bp.get("/sku/<path:sku>")
def lookup_by_sku(sku):
    item = catalog.find_by_sku(sku)
    if item is None:
        raise ItemNotFoundError(f"Item not found: {sku}", details={"sku": sku})
    return jsonify(serialize_item(item))


@bp.get("/<int:item_id>")
def item_detail(item_id):
    item = catalog.get_item_or_raise(item_id)
    payload = serialize_item(item)
    payload["transactions"] = [
        serialize_transaction(transaction) for transaction in ledger.list_for_item(item.id)
    ]
    return jsonify(payload)


@bp.patch("/<int:item_id>")
def update_item(item_id):
    item = catalog.update_item(item_id, parse_item_patch(request_payload()))
    return jsonify(serialize_item(item))


@bp.delete("/<int:item_id>")
def delete_item(item_id):
    catalog.delete_item(item_id)
    return "", 204


@bp.get("/<int:item_id>/transactions")
def item_transactions(item_id):
    catalog.get_item_or_raise(item_id)
    return jsonify(
        [serialize_transaction(transaction) for transaction in ledger.list_for_item(item_id)]
    )
