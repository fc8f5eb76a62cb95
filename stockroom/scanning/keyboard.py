from __future__ import annotations

from typing import Callable, TextIO

from stockroom.scanning.devices import ScanDevice

KEYBOARD_DEVICE = ScanDevice("keyboard", "Keyboard wedge scanner")


class KeyboardWedgeScanner:
    """Scanner for USB/Bluetooth readers that type each code followed by Enter."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._on_decoded: Callable[[str], None] | None = None

    def enumerate_devices(self) -> list[ScanDevice]:
        return [KEYBOARD_DEVICE]

    def start_decoding(self, device_id: str, on_decoded: Callable[[str], None]) -> None:
        self._on_decoded = on_decoded

    def stop_decoding(self) -> None:
        self._on_decoded = None

    def read_next(self) -> bool:
        """Read one line and deliver it. Returns False at end of input."""
        line = self._stream.readline()
        if not line:
            return False
        payload = line.strip()
        # Blank lines are failed reads; anything typed while paused is dropped.
        if payload and self._on_decoded is not None:
            self._on_decoded(payload)
        return True
