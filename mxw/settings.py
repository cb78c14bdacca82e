"""Device settings that are programmed with a single feature report each."""

from __future__ import annotations

import time
from enum import Enum
from typing import Iterable, Protocol

from mxw.bindings import (
    DEFAULT_PROFILE,
    REPORT_SIZE,
    Button,
    MouseFn,
    set_binding,
)
from mxw.color import Color
from mxw.status import check_sleep

POLLING_RATES = (1, 2, 4, 8)
LIFT_OFF_DISTANCES = (1, 2)
PROFILES = (1, 2, 3)

_HEADER_OFFSET = 3
_DISABLED_SLEEP = b"\xff\xff"
_BRIGHTNESS_DELAY = 0.03


class FeatureDevice(Protocol):
    def send_feature_report(self, data: bytes) -> object: ...

    def get_feature_report(self, size: int) -> bytes: ...


class ScrollDirection(Enum):
    """Whether the scroll wheel keeps or swaps its directions."""

    DEFAULT = "default"
    INVERT = "invert"


def _report(*header: int) -> bytearray:
    report = bytearray(REPORT_SIZE)
    report[_HEADER_OFFSET : _HEADER_OFFSET + len(header)] = bytes(header)
    return report


def _profile(profile: int | None) -> int:
    return DEFAULT_PROFILE if profile is None else profile


def _place(report: bytearray, offset: int, data: bytes) -> None:
    if offset + len(data) > len(report):
        raise ValueError("too many values for one report")
    report[offset : offset + len(data)] = data


def _choice(value: int | str, allowed: tuple[int, ...], what: str) -> int:
    try:
        number = int(str(value))
    except ValueError:
        number = None
    if number not in allowed:
        options = ", ".join(map(str, allowed))
        raise ValueError(f"{what} must be one of {options}")
    return number


def set_profile(device: FeatureDevice, profile_id: int) -> None:
    """Make ``profile_id`` the active profile."""
    check_sleep(device)
    report = _report(0x02, 0x01, 0x00, 0x05)
    report[7] = profile_id
    device.send_feature_report(bytes(report))


def set_sleep(device: FeatureDevice, minutes: int, seconds: int | None = None) -> None:
    """Set the idle time before the mouse sleeps; zero disables sleeping."""
    check_sleep(device)
    report = _report(0x02, 0x02, 0x00, 0x07)

    total = minutes * 60 + (seconds or 0)
    report[7:9] = total.to_bytes(2, "big") if total > 0 else _DISABLED_SLEEP
    device.send_feature_report(bytes(report))


def set_led_brightness(
    device: FeatureDevice, wired: int, wireless: int | None = None
) -> None:
    """Set LED brightness for wired use and, separately, for wireless use."""
    check_sleep(device)
    report = _report(0x02, 0x02, 0x02, 0x02, 0x01)
    report[8] = wired
    device.send_feature_report(bytes(report))

    time.sleep(_BRIGHTNESS_DELAY)

    report[7] = 0x00
    report[8] = wired if wireless is None else wireless
    device.send_feature_report(bytes(report))


def set_polling_rate(device: FeatureDevice, ms: int | str) -> None:
    """Set the polling interval in milliseconds (1, 2, 4 or 8)."""
    interval = _choice(ms, POLLING_RATES, "polling rate")
    check_sleep(device)
    report = _report(0x02, 0x01, 0x01)
    report[7] = interval
    device.send_feature_report(bytes(report))


def set_lift_off(device: FeatureDevice, mm: int | str) -> None:
    """Set the lift-off distance in millimetres (1 or 2)."""
    distance = _choice(mm, LIFT_OFF_DISTANCES, "lift-off distance")
    check_sleep(device)
    report = _report(0x02, 0x01, 0x01, 0x07)
    report[7] = distance - 1
    device.send_feature_report(bytes(report))


def set_debounce(device: FeatureDevice, profile: int | None, ms: int) -> None:
    """Set the button debounce time in milliseconds for a profile."""
    check_sleep(device)
    report = _report(0x02, 0x01, 0x00, 0x08)
    report[7] = _profile(profile)
    report[8] = ms
    device.send_feature_report(bytes(report))


def set_dpi_stage(device: FeatureDevice, profile: int | None, stage: int) -> None:
    """Select the active DPI stage of a profile."""
    check_sleep(device)
    report = _report(0x02, 0x02, 0x01, 0x02)
    report[7] = _profile(profile)
    report[8] = stage
    device.send_feature_report(bytes(report))


def set_dpi_stages(
    device: FeatureDevice, profile: int | None, stages: Iterable[int]
) -> None:
    """Set the DPI value of each stage of a profile."""
    stages = list(stages)
    report = _report(0x02, 0x12, 0x01, 0x01)
    report[7] = _profile(profile)
    report[8] = len(stages)

    # Each stage carries its value twice, for the X and Y axes.
    encoded = b"".join(stage.to_bytes(2, "big") * 2 for stage in stages)
    _place(report, 9, encoded)
    device.send_feature_report(bytes(report))


def set_dpi_colors(
    device: FeatureDevice, profile: int | None, colors: Iterable[Color]
) -> None:
    """Set the LED colour shown for each DPI stage of a profile."""
    check_sleep(device)
    report = _report(0x02, 0x13, 0x02, 0x01)
    report[7] = _profile(profile)
    _place(report, 8, b"".join(bytes(color) for color in colors))
    device.send_feature_report(bytes(report))


def set_scroll(device: FeatureDevice, direction: ScrollDirection) -> None:
    """Keep or invert the scroll wheel's directions on every profile."""
    check_sleep(device)
    direction = ScrollDirection(direction)

    if direction is ScrollDirection.INVERT:
        up, down = MouseFn.SCROLL_DOWN, MouseFn.SCROLL_UP
    else:
        up, down = MouseFn.SCROLL_UP, MouseFn.SCROLL_DOWN

    for profile in PROFILES:
        set_binding(device, profile, Button.SCROLL_UP, up)
        set_binding(device, profile, Button.SCROLL_DOWN, down)