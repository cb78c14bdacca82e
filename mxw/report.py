"""Information read back from the mouse."""

from __future__ import annotations

import time
from typing import Protocol

from termcolor import colored

from mxw.bindings import REPORT_SIZE
from mxw.status import get_buffer, get_status

_AWAKE = 0
_ASLEEP = 1
_WAKING_UP = 3
_FIRMWARE_QUERY = 0x81


class FeatureDevice(Protocol):
    def send_feature_report(self, data: bytes) -> object: ...

    def get_feature_report(self, size: int) -> bytes: ...


def _charging(percentage: int) -> str:
    if percentage <= 24:
        return colored("charging", "red")
    if percentage <= 74:
        return colored("charging", "yellow")
    if percentage <= 99:
        return colored("charging", "light_yellow")
    return colored("fully charged", "green")


def battery_text(device: FeatureDevice, wired: bool) -> str:
    """Describe the battery level, or the mouse's state when it has none to give."""
    status = get_status(device)
    response = get_buffer(device)

    percentage = response[8] or 1

    if status == _AWAKE:
        if wired:
            return f"{percentage}% ({_charging(percentage)})"
        return f"{percentage}%"
    if status == _ASLEEP:
        return "(asleep)"
    if status == _WAKING_UP:
        return "(waking up)"
    return (
        f"[1:{response[1]:02X}, 6:{response[6]:02X}, 8:{response[8]:02X}] "
        f"({colored('unknown status', 'red')})"
    )


def firmware_version(device: FeatureDevice, wired: bool) -> str:
    """Return the firmware version as four dotted numbers."""
    request = bytearray(REPORT_SIZE)
    if wired:
        request[3] = 0x02
    request[4] = 0x03
    request[6] = _FIRMWARE_QUERY

    device.send_feature_report(bytes(request))
    time.sleep(0.05)
    response = device.get_feature_report(REPORT_SIZE)
    return ".".join(str(part) for part in response[7:11])