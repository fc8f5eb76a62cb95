from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from werkzeug.exceptions import HTTPException

from stockroom.errors import StockroomError
from stockroom.extensions import db

bp = Blueprint("errors", __name__)


@bp.app_errorhandler(StockroomError)
def handle_stockroom_error(error: StockroomError):
    current_app.logger.warning("%s: %s", error.__class__.__name__, error.message)
    return jsonify(error.to_dict()), error.status_code


@bp.app_errorhandler(HTTPException)
def handle_http_error(error: HTTPException):
    return (
        jsonify({"error": error.name, "message": error.description}),
        error.code or 500,
    )


@bp.app_errorhandler(Exception)
def handle_exception(error: Exception):
    db.session.rollback()
    current_app.logger.exception("Unhandled exception", exc_info=error)
    message = str(error) or "Internal Server Error"
    return jsonify({"error": "InternalServerError", "message": message}), 500
