"""Keyboard keys that can be bound to a mouse button."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable


class InvalidKeyError(ValueError):
    """Raised when a key cannot be looked up."""


@dataclass(frozen=True)
class Key:
    """A keyboard key known by its HID scan code, JS keyCode and JS code."""

    scan_code: int
    key_code: int
    code: str
    modifier: int | None = None


_RAW_KEYS = (
    (4, 65, "KeyA", None),
    (5, 66, "KeyB", None),
    (6, 67, "KeyC", None),
    (7, 68, "KeyD", None),
    (8, 69, "KeyE", None),
    (9, 70, "KeyF", None),
    (10, 71, "KeyG", None),
    (11, 72, "KeyH", None),
    (12, 73, "KeyI", None),
    (13, 74, "KeyJ", None),
    (14, 75, "KeyK", None),
    (15, 76, "KeyL", None),
    (16, 77, "KeyM", None),
    (17, 78, "KeyN", None),
    (18, 79, "KeyO", None),
    (19, 80, "KeyP", None),
    (20, 81, "KeyQ", None),
    (21, 82, "KeyR", None),
    (22, 83, "KeyS", None),
    (23, 84, "KeyT", None),
    (24, 85, "KeyU", None),
    (25, 86, "KeyV", None),
    (26, 87, "KeyW", None),
    (27, 88, "KeyX", None),
    (28, 89, "KeyY", None),
    (29, 90, "KeyZ", None),
    (30, 49, "Digit1", None),
    (31, 50, "Digit2", None),
    (32, 51, "Digit3", None),
    (33, 52, "Digit4", None),
    (34, 53, "Digit5", None),
    (35, 54, "Digit6", None),
    (36, 55, "Digit7", None),
    (37, 56, "Digit8", None),
    (38, 57, "Digit9", None),
    (39, 48, "Digit0", None),
    (40, 13, "Enter", None),
    (41, 27, "Escape", None),
    (42, 8, "Backspace", None),
    (43, 9, "Tab", None),
    (44, 32, "Space", None),
    (45, 189, "Minus", None),
    (46, 187, "Equal", None),
    (47, 219, "BracketLeft", None),
    (48, 221, "BracketRight", None),
    (49, 220, "Backslash", None),
    (51, 186, "Semicolon", None),
    (52, 222, "Quote", None),
    (53, 192, "Backquote", None),
    (54, 188, "Comma", None),
    (55, 190, "Period", None),
    (56, 191, "Slash", None),
    (57, 20, "CapsLock", None),
    (58, 112, "F1", None),
    (59, 113, "F2", None),
    (60, 114, "F3", None),
    (61, 115, "F4", None),
    (62, 116, "F5", None),
    (63, 117, "F6", None),
    (64, 118, "F7", None),
    (65, 119, "F8", None),
    (66, 120, "F9", None),
    (67, 121, "F10", None),
    (68, 122, "F11", None),
    (69, 123, "F12", None),
    (70, 44, "PrintScreen", None),
    (71, 145, "ScrollLock", None),
    (72, 19, "Pause", None),
    (73, 45, "Insert", None),
    (74, 36, "Home", None),
    (75, 33, "PageUp", None),
    (76, 46, "Delete", None),
    (77, 35, "End", None),
    (78, 34, "PageDown", None),
    (79, 39, "ArrowRight", None),
    (80, 37, "ArrowLeft", None),
    (81, 40, "ArrowDown", None),
    (82, 38, "ArrowUp", None),
    (83, 144, "NumLock", None),
    (84, 111, "NumpadDivide", None),
    (85, 106, "NumpadMultiply", None),
    (86, 109, "NumpadSubtract", None),
    (87, 107, "NumpadAdd", None),
    (99, 110, "NumpadDecimal", None),
    (101, 93, "ContextMenu", None),
    (224, 17, "ControlLeft", 1),
    (225, 16, "ShiftRight", 2),
    (226, 18, "AltRight", 4),
    (227, 91, "MetaLeft", 8),
    (231, 92, "MetaRight", 128),
)

_KEYS = tuple(Key(*row) for row in _RAW_KEYS)

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_u8(text: str) -> int:
    if not text:
        raise InvalidKeyError("cannot parse integer from empty string")
    if not _UNSIGNED.fullmatch(text):
        raise InvalidKeyError("invalid digit found in string")
    value = int(text)
    if value > 0xFF:
        raise InvalidKeyError("number too large to fit in target type")
    return value


def _find(predicate: Callable[[Key], bool]) -> Key:
    key = next((key for key in _KEYS if predicate(key)), None)
    # Only keys that carry a modifier bit are accepted.
    if key is None or key.modifier is None:
        raise InvalidKeyError("key code is invalid")
    return key


def parse_scan_code(text: str) -> Key:
    """Look a key up by its decimal HID scan code."""
    value = _parse_u8(text)
    return _find(lambda key: key.scan_code == value)


def parse_key_code(text: str) -> Key:
    """Look a key up by its decimal JS-style keyCode."""
    value = _parse_u8(text)
    return _find(lambda key: key.key_code == value)


def parse_code(text: str) -> Key:
    """Look a key up by its JS-style code name."""
    return _find(lambda key: key.code == text)