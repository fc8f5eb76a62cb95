from flask import Blueprint, jsonify, request

from stockroom.errors import ValidationError
from stockroom.forms import parse_transaction_type
from stockroom.models import Item
from stockroom.serializers import serialize_transaction
from stockroom.services import ledger

bp = Blueprint("reports", __name__, url_prefix="/reports")


@bp.get("/transactions")
def transactions_report():
    raw_type = (request.args.get("type") or "").strip()
    transaction_type = parse_transaction_type(raw_type) if raw_type else None

    raw_item_id = (request.args.get("item_id") or "").strip()
    item_id = None
    if raw_item_id:
        try:
            item_id = int(raw_item_id)
        except ValueError:
            raise ValidationError("Item must be a whole number.") from None

    transactions = ledger.list_filtered(transaction_type=transaction_type, item_id=item_id)
    item_ids = {transaction.item_id for transaction in transactions}
    items = (
        {item.id: item for item in Item.query.filter(Item.id.in_(item_ids)).all()}
        if item_ids
        else {}
    )

    rows = []
    for transaction in transactions:
        row = serialize_transaction(transaction)
        item = items.get(transaction.item_id)
        row["item_name"] = item.name if item else "Unknown Item"
        row["item_sku"] = item.sku if item else ""
        rows.append(row)
    return jsonify(rows)
