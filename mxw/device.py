"""Discovery of supported mice and feature-report access through hidraw."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Iterable

try:
    import fcntl
except ImportError:  # pragma: no cover - non-POSIX platforms
    fcntl = None

VENDOR_ID = 0x258A
INTERFACE = 0x02
SYSFS_HIDRAW = Path("/sys/class/hidraw")
DEV_DIR = Path("/dev")

_WIRED_PRODUCT_LIMIT = 0x2013

_IOC_WRITE = 1
_IOC_READ = 2
_HID_IOCTL_TYPE = ord("H")
_SET_FEATURE = 0x06
_GET_FEATURE = 0x07


class Product(IntEnum):
    """Product ids of supported mice."""

    MODEL_O = 0x2011
    MODEL_D = 0x2012
    MODEL_O_MINUS = 0x2013
    WIRED_MODEL_O_PRO = 0x2015
    MODEL_D_MINUS = 0x2025
    WIRED_MODEL_O = 0x2022
    WIRED_MODEL_D = 0x2023
    WIRED_MODEL_O_MINUS = 0x2024
    MODEL_O_PRO_WIRELESS = 0x2027
    MODEL_D2_PRO = 0x2034


_PRODUCT_IDS = frozenset(Product)


class DeviceNotFoundError(LookupError):
    """Raised when no supported mouse is connected."""


@dataclass(frozen=True)
class DeviceInfo:
    """A HID interface found on the system."""

    path: Path
    vendor_id: int
    product_id: int
    interface_number: int


def _read_interface_number(device_dir: Path) -> int:
    try:
        return int((device_dir.parent / "bInterfaceNumber").read_text().strip(), 16)
    except (OSError, ValueError):
        return -1


def _read_entry(entry: Path) -> DeviceInfo | None:
    device_dir = (entry / "device").resolve()
    try:
        uevent = (device_dir / "uevent").read_text()
    except OSError:
        return None

    for line in uevent.splitlines():
        name, _, value = line.partition("=")
        if name != "HID_ID":
            continue
        try:
            _bus, vendor, product = value.split(":")
            vendor_id, product_id = int(vendor, 16), int(product, 16)
        except ValueError:
            return None
        return DeviceInfo(
            path=DEV_DIR / entry.name,
            vendor_id=vendor_id,
            product_id=product_id,
            interface_number=_read_interface_number(device_dir),
        )
    return None


def list_devices(root: str | os.PathLike[str] = SYSFS_HIDRAW) -> list[DeviceInfo]:
    """List HID interfaces exposed under a sysfs hidraw class directory."""
    root = Path(root)
    if not root.is_dir():
        return []
    entries = sorted(root.iterdir(), key=lambda path: path.name)
    return [info for info in map(_read_entry, entries) if info is not None]


def select_device(devices: Iterable[DeviceInfo]) -> DeviceInfo:
    """Pick the supported mouse, preferring the wired product when both exist."""
    candidates = [
        info
        for info in devices
        if info.vendor_id == VENDOR_ID
        and info.product_id in _PRODUCT_IDS
        and info.interface_number == INTERFACE
    ]
    if not candidates:
        raise DeviceNotFoundError("no matching device found")
    return min(candidates, key=lambda info: info.product_id)


def is_wired(info: DeviceInfo) -> bool:
    """Whether the interface belongs to a mouse attached by cable."""
    return info.product_id <= _WIRED_PRODUCT_LIMIT


def _hid_ioctl(number: int, size: int) -> int:
    direction = _IOC_WRITE | _IOC_READ
    return (direction << 30) | (size << 16) | (_HID_IOCTL_TYPE << 8) | number


class HidrawDevice:
    """An open hidraw node that exchanges feature reports."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        if fcntl is None:
            raise OSError("hidraw devices are not supported on this platform")
        self.path = Path(path)
        self._fd: int | None = os.open(self.path, os.O_RDWR)

    def _descriptor(self) -> int:
        if self._fd is None:
            raise ValueError("device is closed")
        return self._fd

    def send_feature_report(self, data: bytes) -> int:
        """Send a feature report whose first byte is the report id."""
        if not data:
            raise ValueError("feature report must not be empty")
        buffer = bytearray(data)
        return fcntl.ioctl(
            self._descriptor(), _hid_ioctl(_SET_FEATURE, len(buffer)), buffer, True
        )

    def get_feature_report(self, size: int) -> bytes:
        """Read a feature report of ``size`` bytes, report id 0 first."""
        if size < 1:
            raise ValueError("feature report size must be positive")
        buffer = bytearray(size)
        fcntl.ioctl(self._descriptor(), _hid_ioctl(_GET_FEATURE, size), buffer, True)
        return bytes(buffer)

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> HidrawDevice:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_device(info: DeviceInfo) -> HidrawDevice:
    """Open the hidraw node described by ``info``."""
    return HidrawDevice(info.path)