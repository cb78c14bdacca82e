"""Argument validators for inclusive numeric ranges."""

from __future__ import annotations

import re
import sys
from typing import Callable

_UNSIGNED = re.compile(r"\+?[0-9]+")
_USIZE_MAX = sys.maxsize * 2 + 1


def _parse_unsigned(text: str) -> int:
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _UNSIGNED.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > _USIZE_MAX:
        raise ValueError("number too large to fit in target type")
    return value


def contains(start: int, end: int) -> Callable[[str], int]:
    """Return a validator accepting unsigned integers in ``start..=end``."""

    def validate(text: str) -> int:
        value = _parse_unsigned(text)
        if not start <= value <= end:
            raise ValueError(f"not in range {start}-{end}")
        return value

    return validate