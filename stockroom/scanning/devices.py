"""Interface to the code-scanning capability and camera selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from stockroom.errors import DeviceAccessError

REAR_CAMERA_HINTS = ("back", "rear", "environment")


@dataclass(frozen=True)
class ScanDevice:
    device_id: str
    label: str = ""

    @property
    def display_label(self) -> str:
        return self.label or f"Camera {self.device_id}"


class CodeScanner(Protocol):
    """Turns a capture device into decoded text payloads.

    Implementations swallow per-frame decode failures and only call
    ``on_decoded`` for successful reads. ``stop_decoding`` returns once the
    device has been released.
    """

    def enumerate_devices(self) -> Sequence[ScanDevice]:
        ...

    def start_decoding(self, device_id: str, on_decoded: Callable[[str], None]) -> None:
        ...

    def stop_decoding(self) -> None:
        ...


def choose_device(devices: Sequence[ScanDevice]) -> ScanDevice:
    if not devices:
        raise DeviceAccessError("No cameras found on this device.")
    for device in devices:
        label = (device.label or "").lower()
        if any(hint in label for hint in REAR_CAMERA_HINTS):
            return device
    return devices[0]
