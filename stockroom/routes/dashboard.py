from flask import Blueprint, jsonify

from stockroom.serializers import serialize_item
from stockroom.services import dashboard

bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@bp.get("/")
def overview():
    return jsonify(
        {
            "summary": dashboard.inventory_summary(),
            "low_stock": [serialize_item(item) for item in dashboard.low_stock_items()],
            "activity": dashboard.daily_activity(days=7),
        }
    )
