from __future__ import annotations

import logging

from flask import current_app

from stockroom.errors import LocationNotFoundError, ValidationError
from stockroom.extensions import db
from stockroom.models import Location

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_NAME = "N/A"


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Location name is required.")
    return cleaned


def list_locations() -> list[Location]:
    return Location.query.order_by(Location.id).all()


def get_location(location_id: int | None) -> Location | None:
    if location_id is None:
        return None
    return db.session.get(Location, location_id)


def add_location(name: str) -> Location:
    location = Location(name=_clean_name(name))
    db.session.add(location)
    db.session.commit()
    logger.info("Added location %s (%s)", location.id, location.name)
    return location


def rename_location(location_id: int, new_name: str) -> Location:
    cleaned = _clean_name(new_name)
    location = get_location(location_id)
    if location is None:
        raise LocationNotFoundError(f"Location {location_id} does not exist.")
    location.name = cleaned
    db.session.commit()
    return location


def remove_location(location_id: int) -> None:
    """Delete a location. Items that reference it keep the dangling id."""
    location = get_location(location_id)
    if location is None:
        raise LocationNotFoundError(f"Location {location_id} does not exist.")
    name = location.name
    db.session.delete(location)
    db.session.commit()
    logger.info("Removed location %s (%s)", location_id, name)


def resolve_location_name(location_id: int | None) -> str:
    location = get_location(location_id)
    if location is None:
        return current_app.config.get("LOCATION_FALLBACK_NAME", DEFAULT_FALLBACK_NAME)
    return location.name
