"""RGB colours given on the command line as six hex digits."""

from __future__ import annotations

import string
from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """An RGB colour with 8-bit channels."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 0xFF:
                raise ValueError("color channels must be in the range 0-255")

    def __bytes__(self) -> bytes:
        return bytes((self.red, self.green, self.blue))


def parse_hex(text: str) -> Color:
    """Parse a colour written as ``RRGGBB``."""
    if len(text.encode()) != 6:
        raise ValueError("color hex must be of length 6")

    digits = text[1:] if text.startswith("+") else text
    if not digits or any(char not in string.hexdigits for char in digits):
        raise ValueError("could not parse color hex")

    red, green, blue = int(digits, 16).to_bytes(3, "big")
    return Color(red, green, blue)