"""Scan workflow: decode a label, pause, confirm the stock change, resume."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stockroom.errors import (
    DeviceAccessError,
    ItemNotFoundError,
    StockroomError,
    ValidationError,
)
from stockroom.models import Item, StockTransaction, TransactionType
from stockroom.scanning.devices import CodeScanner, ScanDevice, choose_device
from stockroom.services.catalog import find_by_sku
from stockroom.services.stock_mutation import apply_stock_change, scan_quantity_delta

logger = logging.getLogger(__name__)


class ScanMode:
    INBOUND = TransactionType.INBOUND
    OUTBOUND = TransactionType.OUTBOUND
    LOOKUP = "Lookup"

    ALL_MODES = [INBOUND, OUTBOUND, LOOKUP]


@dataclass(frozen=True)
class ScanMessage:
    text: str
    kind: str  # "success" or "error"


class ScanSession:
    """Drive a :class:`CodeScanner` through one scan at a time.

    Decoding is stopped as soon as a payload arrives and only restarted after
    the pending scan is confirmed, discarded, or looked up, so a second decode
    can never race a pending stock change.
    """

    def __init__(self, scanner: CodeScanner, mode: str = ScanMode.LOOKUP) -> None:
        self.scanner = scanner
        self.mode = mode
        self.devices: list[ScanDevice] = []
        self.device_id: str | None = None
        self.device_error: str | None = None
        self.pending_sku: str | None = None
        self.message: ScanMessage | None = None
        self.looked_up_item: Item | None = None
        self.decoding = False

    def open(self) -> None:
        try:
            self.devices = list(self.scanner.enumerate_devices())
            device = choose_device(self.devices)
        except DeviceAccessError as exc:
            self.device_error = exc.message
            logger.warning("Scanner unavailable: %s", exc.message)
            raise
        self.device_id = device.device_id
        self._start()

    def close(self) -> None:
        self._stop()

    def set_mode(self, mode: str) -> None:
        if mode not in ScanMode.ALL_MODES:
            raise ValidationError(f"Unknown scan mode {mode!r}.")
        self.mode = mode

    def switch_device(self, device_id: str) -> None:
        if device_id not in {device.device_id for device in self.devices}:
            raise DeviceAccessError(f"Camera {device_id} is not available.")
        self._stop()
        self.device_id = device_id
        self._start()

    def handle_decoded(self, text: str) -> None:
        if self.pending_sku is not None:
            return
        self._stop()
        self.pending_sku = text
        self.looked_up_item = None
        if self.mode == ScanMode.LOOKUP:
            self._lookup(text)

    def confirm(self, quantity: int = 1) -> StockTransaction | None:
        if self.pending_sku is None:
            raise ValidationError("Nothing has been scanned yet.")
        if self.mode == ScanMode.LOOKUP:
            raise ValidationError("Lookup scans do not change stock.")

        quantity_change = scan_quantity_delta(self.mode, quantity)
        sku = self.pending_sku
        transaction = None
        try:
            transaction = apply_stock_change(sku, quantity_change, self.mode)
        except StockroomError as exc:
            # Unknown SKUs, over-draws and the like end this scan, not the session.
            self.message = ScanMessage(exc.message, "error")
        else:
            self.message = ScanMessage(
                f"Successfully updated stock for SKU {sku}. Quantity: {quantity_change}",
                "success",
            )
        finally:
            self._reset()
        return transaction

    def scan_again(self) -> None:
        self._reset()

    def _lookup(self, sku: str) -> None:
        try:
            item = find_by_sku(sku)
            if item is None:
                raise ItemNotFoundError(f"Item not found: {sku}", details={"sku": sku})
        except ItemNotFoundError as exc:
            self.message = ScanMessage(exc.message, "error")
        else:
            self.looked_up_item = item
            self.message = ScanMessage(f"Found {item.name} ({item.sku})", "success")
        finally:
            self._reset()

    def _reset(self) -> None:
        self.pending_sku = None
        self._start()

    def _start(self) -> None:
        if self.decoding or self.device_id is None:
            return
        try:
            self.scanner.start_decoding(self.device_id, self.handle_decoded)
        except DeviceAccessError as exc:
            self.device_error = exc.message
            raise
        self.decoding = True
        self.device_error = None

    def _stop(self) -> None:
        if not self.decoding:
            return
        self.scanner.stop_decoding()
        self.decoding = False
