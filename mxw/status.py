"""Queries of the mouse's connection state."""

from __future__ import annotations

import time
from typing import Protocol

REPORT_SIZE = 65

# Response byte 1 values, indexed by status: awake, asleep, unknown, waking up, ...
_STATUS_CODES = (0xA1, 0xA4, 0xA2, 0xA0, 0xA3)
_STATUS_QUERY = 0x83
_UNKNOWN_STATUS = 2
_SLEEPING = 1


class FeatureDevice(Protocol):
    def send_feature_report(self, data: bytes) -> object: ...

    def get_feature_report(self, size: int) -> bytes: ...


class StatusError(RuntimeError):
    """Raised when the mouse answers with an unrecognised status."""


class DeviceSleepingError(RuntimeError):
    """Raised when the mouse is asleep and cannot be configured."""


def get_buffer(device: FeatureDevice) -> bytes:
    """Ask for the status report and return the raw response."""
    request = bytearray(REPORT_SIZE)
    request[3] = 0x02
    request[4] = 0x02
    request[6] = _STATUS_QUERY

    device.send_feature_report(bytes(request))
    time.sleep(0.05)
    return device.get_feature_report(REPORT_SIZE)


def get_status(device: FeatureDevice) -> int:
    """Return the status index of the mouse (0 awake, 1 asleep, 3 waking up)."""
    get_buffer(device)
    response = device.get_feature_report(REPORT_SIZE)

    try:
        status = _STATUS_CODES.index(response[1])
    except ValueError:
        raise StatusError("failed to get status") from None

    if response[6] != _STATUS_QUERY:
        return _UNKNOWN_STATUS
    return status


def check_sleep(device: FeatureDevice) -> None:
    """Raise DeviceSleepingError if the mouse is asleep."""
    if get_status(device) == _SLEEPING:
        raise DeviceSleepingError("device is sleeping")