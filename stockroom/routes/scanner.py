from flask import Blueprint, jsonify

from stockroom.errors import ItemNotFoundError, ValidationError
from stockroom.forms import parse_transaction_type
from stockroom.models import MAX_QUANTITY
from stockroom.serializers import serialize_item, serialize_transaction
from stockroom.services.catalog import find_by_sku
from stockroom.services.stock_mutation import apply_stock_change, scan_quantity_delta
from stockroom.utils.requests import request_payload

bp = Blueprint("scanner", __name__, url_prefix="/scanner")


def _scanned_sku(payload) -> str:
    # Decoded payloads are matched verbatim; only an empty payload is rejected.
    sku = payload.get("sku")
    if not isinstance(sku, str) or not sku:
        raise ValidationError("SKU is required.")
    return sku


def _whole_number(value, label):
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a whole number.")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a whole number.") from None
    if abs(number) > MAX_QUANTITY:
        raise ValidationError(f"{label} is too large.")
    return number


def _notes(payload):
    notes = payload.get("notes")
    if notes is None:
        return None
    if not isinstance(notes, str):
        raise ValidationError("Notes must be text.")
    return notes.strip() or None


@bp.post("/lookup")
def lookup():
    sku = _scanned_sku(request_payload())
    item = find_by_sku(sku)
    if item is None:
        raise ItemNotFoundError(f"Item not found: {sku}", details={"sku": sku})
    return jsonify(serialize_item(item))


@bp.post("/stock-change")
def stock_change():
    payload = request_payload()
    sku = _scanned_sku(payload)
    transaction_type = parse_transaction_type(payload.get("type") or payload.get("mode"))

    if payload.get("quantity_change") is not None:
        quantity_change = _whole_number(payload.get("quantity_change"), "Quantity change")
    else:
        quantity = _whole_number(payload.get("quantity", 1), "Quantity")
        quantity_change = scan_quantity_delta(transaction_type, quantity)

    notes = _notes(payload)
    transaction = apply_stock_change(sku, quantity_change, transaction_type, notes)
    item = find_by_sku(sku)
    return (
        jsonify(
            {
                "message": (
                    f"Successfully updated stock for SKU {sku}. "
                    f"Quantity: {quantity_change}"
                ),
                "transaction": serialize_transaction(transaction),
                "item": serialize_item(item),
            }
        ),
        201,
    )
