import pytest

from mxw.bindings import DEFAULT_PROFILE, REPORT_SIZE
from mxw.color import parse_hex
from mxw.effects import (
    Effect,
    EffectKind,
    build_effect_report,
    rate_check,
    set_effect,
)
from mxw.status import DeviceSleepingError

RED = parse_hex("FF0000")
GREEN = parse_hex("00FF00")
BLUE = parse_hex("0000FF")


class StatusDevice:
    def __init__(self, status_byte):
        self.status_byte = status_byte
        self.sent = []

    def send_feature_report(self, data):
        self.sent.append(bytes(data))
        return len(data)

    def get_feature_report(self, size):
        response = bytearray(size)
        response[1] = self.status_byte
        response[6] = 0x83
        return bytes(response)


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda _seconds: None)


def test_rate_default_is_forty():
    assert rate_check(None, EffectKind.GLORIOUS) == rate_check(40, EffectKind.GLORIOUS)
    assert rate_check(None, EffectKind.WAVE) == rate_check(40, EffectKind.WAVE)


def test_rate_pinned_value():
    assert rate_check(100, EffectKind.GLORIOUS) == 1


@pytest.mark.parametrize("rate", [0, 5, 40, 55, 100])
def test_fast_effects_use_finer_scale(rate):
    assert rate_check(rate, EffectKind.RAVE) == 10 * rate_check(rate, EffectKind.TAIL)


def test_rate_decreases_as_speed_grows():
    values = [rate_check(rate, EffectKind.WAVE) for rate in range(0, 101, 10)]
    assert values == sorted(values, reverse=True)
    assert len(set(values)) == len(values)


@pytest.mark.parametrize("rate", [-1, 101])
def test_rate_out_of_range(rate):
    with pytest.raises(ValueError, match="0-100"):
        rate_check(rate, EffectKind.CYCLE)


def test_report_header():
    report = build_effect_report(2, Effect(EffectKind.GLORIOUS, rate=60))
    assert len(report) == REPORT_SIZE
    assert report[7] == 2
    assert report[8] == 0xFF
    assert report[9] == EffectKind.GLORIOUS
    assert report[11] == rate_check(60, EffectKind.GLORIOUS)


def test_default_profile():
    effect = Effect(EffectKind.TAIL)
    assert build_effect_report(None, effect) == build_effect_report(
        DEFAULT_PROFILE, effect
    )


def test_off_has_no_rate():
    report = build_effect_report(1, Effect(EffectKind.OFF))
    assert report[9] == EffectKind.OFF
    assert report[11] == 0
    assert report[12:] == bytes(REPORT_SIZE - 12)


def test_cycle_marks_byte_twelve():
    assert build_effect_report(1, Effect(EffectKind.CYCLE))[12] == 0xFF


def test_solid_places_color_without_rate():
    report = build_effect_report(1, Effect(EffectKind.SOLID, colors=(GREEN,)))
    assert report[12:15] == bytes(GREEN)
    assert report[11] == 0


def test_pulse_places_colors_and_pads():
    colors = (RED, GREEN, BLUE)
    report = build_effect_report(1, Effect(EffectKind.PULSE, rate=10, colors=colors))
    assert report[12:21] == b"".join(bytes(color) for color in colors)
    assert report[21:30] == bytes(9)
    assert report[9] == EffectKind.PULSE


def test_length_byte_grows_with_colors():
    two = build_effect_report(1, Effect(EffectKind.PULSE, colors=(RED, GREEN)))
    three = build_effect_report(1, Effect(EffectKind.PULSE, colors=(RED, GREEN, BLUE)))
    assert three[4] - two[4] == len(bytes(BLUE))


def test_single_color_effects_share_length():
    rave = build_effect_report(1, Effect(EffectKind.RAVE, colors=(RED,)))
    solid = build_effect_report(1, Effect(EffectKind.SOLID, colors=(RED,)))
    pulse_one = build_effect_report(1, Effect(EffectKind.PULSE_ONE, colors=(RED,)))
    assert rave[4] == solid[4] == pulse_one[4]
    assert rave[12:15] == pulse_one[12:15] == bytes(RED)


@pytest.mark.parametrize(
    "kind, colors",
    [
        (EffectKind.PULSE, (RED,)),
        (EffectKind.PULSE, (RED,) * 7),
        (EffectKind.RAVE, ()),
        (EffectKind.RAVE, (RED, GREEN, BLUE)),
        (EffectKind.SOLID, ()),
        (EffectKind.GLORIOUS, (RED,)),
    ],
)
def test_wrong_color_count_rejected(kind, colors):
    with pytest.raises(ValueError, match="colors"):
        Effect(kind, colors=colors)


def test_solid_rejects_rate():
    with pytest.raises(ValueError, match="rate"):
        Effect(EffectKind.SOLID, rate=10, colors=(RED,))


def test_invalid_rate_in_effect_raises_on_build():
    with pytest.raises(ValueError, match="0-100"):
        build_effect_report(1, Effect(EffectKind.WAVE, rate=200))


def test_set_effect_sends_report_after_status_check():
    device = StatusDevice(0xA1)
    effect = Effect(EffectKind.RAVE, rate=70, colors=(RED, BLUE))
    set_effect(device, 3, effect)
    assert device.sent[-1] == build_effect_report(3, effect)
    assert len(device.sent) == 2


def test_set_effect_refuses_sleeping_device():
    device = StatusDevice(0xA4)
    with pytest.raises(DeviceSleepingError):
        set_effect(device, 1, Effect(EffectKind.OFF))
    assert all(report[6] == 0x83 for report in device.sent)