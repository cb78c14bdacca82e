"""LED effects and the reports that select them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol

from mxw.bindings import DEFAULT_PROFILE, REPORT_SIZE
from mxw.color import Color
from mxw.status import check_sleep

RATE_DEFAULT = 40
_COLOR_OFFSET = 12


class FeatureDevice(Protocol):
    def send_feature_report(self, data: bytes) -> object: ...

    def get_feature_report(self, size: int) -> bytes: ...


class EffectKind(IntEnum):
    """LED effects, valued by their id on the wire."""

    OFF = 0
    GLORIOUS = 1
    CYCLE = 2
    PULSE = 3
    SOLID = 4
    PULSE_ONE = 5
    TAIL = 6
    RAVE = 7
    WAVE = 8


# Allowed number of colours and number of colour slots in the report.
_COLOR_COUNTS = {
    EffectKind.PULSE: (2, 6),
    EffectKind.RAVE: (1, 2),
    EffectKind.SOLID: (1, 1),
    EffectKind.PULSE_ONE: (1, 1),
}
_WITHOUT_RATE = frozenset({EffectKind.SOLID, EffectKind.OFF})


@dataclass(frozen=True)
class Effect:
    """An LED effect with its optional rate and colours."""

    kind: EffectKind
    rate: int | None = None
    colors: tuple[Color, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", EffectKind(self.kind))
        object.__setattr__(self, "colors", tuple(self.colors))

        low, high = _COLOR_COUNTS.get(self.kind, (0, 0))
        if not low <= len(self.colors) <= high:
            if low == high:
                raise ValueError(f"{self.kind.name.lower()} takes {low} colors")
            raise ValueError(
                f"{self.kind.name.lower()} takes from {low} to {high} colors"
            )
        if self.rate is not None and self.kind in _WITHOUT_RATE:
            raise ValueError(f"{self.kind.name.lower()} takes no rate")


def rate_check(rate: int | None, effect_id: int) -> int:
    """Convert an effect rate of 0-100 into the value the mouse expects."""
    value = RATE_DEFAULT if rate is None else rate
    if not 0 <= value <= 100:
        raise ValueError("rate must be in the range of 0-100")

    if effect_id in (EffectKind.RAVE, EffectKind.WAVE):
        return (105 - value) * 2
    return (105 - value) // 5


def _length(effect: Effect) -> int:
    if effect.kind in (EffectKind.PULSE, EffectKind.RAVE):
        return len(effect.colors) * 3 + 5
    if effect.kind in (EffectKind.SOLID, EffectKind.PULSE_ONE):
        return 0x08
    return 0x05


def build_effect_report(profile: int | None, effect: Effect) -> bytes:
    """Build the feature report selecting ``effect`` for ``profile``."""
    report = bytearray(REPORT_SIZE)
    report[3] = 0x02
    report[4] = _length(effect)
    report[5] = 0x02
    report[7] = DEFAULT_PROFILE if profile is None else profile
    report[8] = 0xFF
    report[9] = effect.kind.value

    if effect.kind not in _WITHOUT_RATE:
        report[11] = rate_check(effect.rate, effect.kind)
    if effect.kind is EffectKind.CYCLE:
        report[12] = 0xFF

    colors = b"".join(bytes(color) for color in effect.colors)
    report[_COLOR_OFFSET : _COLOR_OFFSET + len(colors)] = colors
    return bytes(report)


def set_effect(device: FeatureDevice, profile: int | None, effect: Effect) -> None:
    """Switch the mouse's LEDs to ``effect``."""
    check_sleep(device)
    device.send_feature_report(build_effect_report(profile, effect))