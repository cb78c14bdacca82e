"""Button bindings and the reports that program them."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Protocol, Union

from termcolor import colored

from mxw.keys import Key

DEFAULT_PROFILE = 1
REPORT_SIZE = 65
_BINDING_OFFSET = 10
_CHECK_SIZE = 55
_MAX_ATTEMPTS = 3

# Replies to the check read after a binding was sent.
_RESEND = 0xA2
_RETRY = 0xA0
_WAIT = 0xA4


class FeatureDevice(Protocol):
    def send_feature_report(self, data: bytes) -> object: ...

    def get_feature_report(self, size: int) -> bytes: ...


class UnsupportedBindingError(NotImplementedError):
    """Raised for binding kinds the mouse cannot be programmed with yet."""


class Button(IntEnum):
    """Mouse buttons, valued by their id on the wire."""

    LEFT = 1
    RIGHT = 2
    SCROLL = 3
    FORWARD = 5
    BACK = 4
    DPI_BTN = 20
    SCROLL_UP = 16
    SCROLL_DOWN = 17


class MouseFn(IntEnum):
    """Mouse functions a button can perform."""

    LEFT = 1
    RIGHT = 2
    SCROLL = 3
    FORWARD = 5
    BACK = 4
    SCROLL_UP = 16
    SCROLL_DOWN = 17
    PROFILE_CYCLE_UP = 24
    PROFILE_CYCLE_DOWN = 25
    BATTERY_STATUS = 12


class KeyboardFn(IntEnum):
    """Keyboard functions a button can perform."""

    PROFILE_CYCLE_UP = 1
    PROFILE_CYCLE_DOWN = 2
    LAYER_CYCLE_UP = 3
    LAYER_CYCLE_DOWN = 4


class DPIFn(IntEnum):
    """DPI modifiers a button can perform."""

    STAGE_UP = 1
    STAGE_DOWN = 2
    CYCLE_UP = 6
    CYCLE_DOWN = 7


class MediaFn(Enum):
    """Multimedia functions, valued by their two code bytes."""

    PLAYER = (1, 131)
    PLAY_PAUSE = (0, 205)
    NEXT = (0, 181)
    PREVIOUS = (0, 182)
    STOP = (0, 183)
    MUTE = (0, 226)
    VOLUME_UP = (0, 233)
    VOLUME_DOWN = (0, 234)


@dataclass(frozen=True)
class KeyBinding:
    """A single key, optionally held together with a modifier key."""

    key: Key
    modifier: Key | None = None


@dataclass(frozen=True)
class NoBinding:
    """A button that does nothing."""


Binding = Union[KeyBinding, MouseFn, KeyboardFn, DPIFn, MediaFn, NoBinding]

_MODIFIER_BITS = {
    "ControlLeft": 0x01,
    "ShiftRight": 0x02,
    "AltRight": 0x04,
    "MetaLeft": 0x08,
}

_MOUSE_SPECIAL = {
    MouseFn.BATTERY_STATUS: (12, 0x01, 1),
    MouseFn.PROFILE_CYCLE_UP: (8, 0x01, 4),
    MouseFn.PROFILE_CYCLE_DOWN: (8, 0x01, 3),
}


def _encode_key(binding: KeyBinding) -> bytes:
    encoded = bytearray((0x04, 0x02, 0x00, 0x00))
    if binding.modifier is not None:
        encoded[2] = _MODIFIER_BITS.get(binding.modifier.code, 0x00)
    if binding.key.modifier is not None:
        encoded[2] |= binding.key.modifier
    else:
        encoded[3] = binding.key.scan_code
    return bytes(encoded)


def encode_binding(binding: Binding) -> bytes:
    """Return the bytes describing ``binding`` inside a bind report."""
    if isinstance(binding, KeyBinding):
        return _encode_key(binding)
    if isinstance(binding, MouseFn):
        return bytes(_MOUSE_SPECIAL.get(binding, (0x01, 0x01, binding.value)))
    if isinstance(binding, KeyboardFn):
        return bytes((0x05, 0x02, binding.value, 0x0F))
    if isinstance(binding, MediaFn):
        first, second = binding.value
        return bytes((0x05, 0x02, first, second))
    if isinstance(binding, DPIFn):
        return bytes((0x07, 0x01, binding.value))
    if isinstance(binding, NoBinding):
        return b""
    raise UnsupportedBindingError(f"binding {binding!r} is not implemented")


def build_bind_report(profile: int | None, button: Button, binding: Binding) -> bytes:
    """Build the feature report assigning ``binding`` to ``button``."""
    report = bytearray(REPORT_SIZE)
    report[3] = 0x02
    report[4] = 0x09
    report[5] = 0x03
    report[7] = DEFAULT_PROFILE if profile is None else profile
    report[8] = Button(button).value

    encoded = encode_binding(binding)
    report[_BINDING_OFFSET : _BINDING_OFFSET + len(encoded)] = encoded
    return bytes(report)


def set_binding(
    device: FeatureDevice, profile: int | None, button: Button, binding: Binding
) -> None:
    """Program ``button`` with ``binding`` and wait for the mouse to accept it."""
    report = build_bind_report(profile, button, binding)
    device.send_feature_report(report)
    set_and_check(device, report, 0, False)


def set_and_check(
    device: FeatureDevice, report: bytes, depth: int, waiting: bool
) -> None:
    """Poll the mouse after a bind report, resending it when asked to."""
    while True:
        if depth >= _MAX_ATTEMPTS:
            print(f"{colored('error', 'red', attrs=['bold'])}: failed to bind key")

        time.sleep(0.1)

        if not waiting:
            response = device.get_feature_report(_CHECK_SIZE)
            time.sleep(0.04)
            reply = response[0]
            if reply == _RESEND:
                device.send_feature_report(report)
            elif reply == _WAIT:
                waiting = True
            elif reply != _RETRY:
                return

        depth += 1