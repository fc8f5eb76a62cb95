from __future__ import annotations

from typing import Any, Mapping

from flask import request


def request_payload() -> Mapping[str, Any]:
    """JSON body when one was sent, otherwise the submitted form."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form
