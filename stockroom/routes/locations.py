from flask import Blueprint, jsonify

from stockroom.forms import parse_location_name
from stockroom.serializers import serialize_location
from stockroom.services import locations as location_service
from stockroom.utils.requests import request_payload

bp = Blueprint("locations", __name__, url_prefix="/locations")


@bp.get("/")
def list_locations():
    return jsonify([serialize_location(loc) for loc in location_service.list_locations()])


@bp.post("/")
def add_location():
    name = parse_location_name(request_payload())
    location = location_service.add_location(name)
    return jsonify(serialize_location(location)), 201


@bp.patch("/<int:location_id>")
def rename_location(location_id):
    name = parse_location_name(request_payload())
    location = location_service.rename_location(location_id, name)
    return jsonify(serialize_location(location))


@bp.delete("/<int:location_id>")
def remove_location(location_id):
    location_service.remove_location(location_id)
    return "", 204
