"""Error types raised by the inventory services."""

from __future__ import annotations

from typing import Any


class StockroomError(Exception):
    """Base exception for inventory errors.

    Every subclass is recoverable: callers report the message and carry on.
    """

    default_message = "An inventory error occurred"
    status_code = 400

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        error_dict: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.code:
            error_dict["code"] = self.code
        if self.details:
            error_dict["details"] = self.details
        return error_dict


class ValidationError(StockroomError):
    default_message = "Validation error"
    status_code = 400


class ItemNotFoundError(StockroomError):
    default_message = "Item not found"
    status_code = 404


class LocationNotFoundError(StockroomError):
    default_message = "Location not found"
    status_code = 404


class DuplicateSkuError(StockroomError):
    default_message = "SKU already in use"
    status_code = 409


class InsufficientStockError(StockroomError):
    default_message = "Not enough stock"
    status_code = 409


class DeviceAccessError(StockroomError):
    """Camera permission denied, no devices, or the device failed to start."""

    default_message = "Cannot access camera"
    status_code = 503
