import pytest

from mxw.bindings import UnsupportedBindingError
from mxw.cli import build_parser, main, run
from mxw.status import DeviceSleepingError


class FakeDevice:
    def __init__(self, status=0xA1, battery=57, firmware=(1, 2, 3, 4)):
        self.sent = []
        response = bytearray(65)
        response[1] = status
        response[6] = 0x83
        response[7:11] = bytes(firmware)
        if battery is not None:
            response[8] = battery
        self.response = bytes(response)

    def send_feature_report(self, data):
        self.sent.append(bytes(data))
        return len(data)

    def get_feature_report(self, size):
        if size != 65:
            return bytes(size)
        return self.response


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda seconds: None)


def parse(*argv):
    return build_parser().parse_args(list(argv))


def execute(*argv, device=None, wired=False):
    device = device or FakeDevice()
    run(parse(*argv), device, wired)
    return device


def test_profile_report_bytes():
    device = execute("config", "profile", "2")
    report = device.sent[-1]
    assert report[3:8] == bytes((0x02, 0x01, 0x00, 0x05, 2))


@pytest.mark.parametrize("value", ["0", "4", "x"])
def test_profile_out_of_range(value):
    with pytest.raises(SystemExit):
        parse("config", "profile", value)


def test_dpi_stages_default():
    args = parse("config", "dpi-stages")
    assert args.stages == [400, 800, 1600, 3200]
    assert args.profile is None


def test_dpi_stages_report():
    device = execute("config", "dpi-stages", "400", "800", "1600", "3200")
    report = device.sent[-1]
    assert report[8] == 4
    assert report[9:13] == b"\x01\x90\x01\x90"


@pytest.mark.parametrize(
    "argv",
    [
        ["400", "800"],
        ["400", "800", "1600", "3200", "6400"],
        ["50", "800", "1600", "3200"],
    ],
)
def test_dpi_stages_rejected(argv):
    with pytest.raises(SystemExit):
        parse("config", "dpi-stages", *argv)


def test_dpi_colors_default_round_trip():
    args = parse("config", "dpi-colors")
    assert [bytes(c) for c in args.colors] == [
        b"\xff\xff\x00",
        b"\x00\x00\xff",
        b"\xff\x00\x00",
        b"\x00\xff\x00",
    ]


def test_pulse_colors_and_rate():
    device = execute("config", "led-effect", "-p", "2", "pulse", "FF0000", "00FF00")
    report = device.sent[-1]
    assert report[7] == 2
    assert report[9] == 3
    assert report[12:18] == b"\xff\x00\x00\x00\xff\x00"


@pytest.mark.parametrize("count", [1, 7])
def test_pulse_color_count_rejected(count):
    with pytest.raises(SystemExit):
        parse("config", "led-effect", "pulse", *["FF0000"] * count)


def test_solid_effect():
    device = execute("config", "led-effect", "solid", "123456")
    report = device.sent[-1]
    assert report[9] == 4
    assert report[12:15] == b"\x12\x34\x56"


def test_rate_default_is_none():
    args = parse("config", "led-effect", "wave")
    assert args.rate is None
    assert args.effect == "wave"


def test_rate_out_of_range():
    with pytest.raises(SystemExit):
        parse("config", "led-effect", "cycle", "-r", "101")


def test_bind_key_without_modifier_rejected():
    with pytest.raises(SystemExit):
        parse("config", "bind", "left", "key", "code", "KeyA")


def test_bind_modifier_key():
    device = execute("config", "bind", "left", "key", "code", "ControlLeft")
    binds = [r for r in device.sent if r[4] == 0x09]
    assert binds[-1][10:14] == b"\x04\x02\x01\x00"


def test_bind_mouse_function():
    device = execute("config", "bind", "scroll-down", "mouse", "scroll-up")
    report = device.sent[-1]
    assert report[8] == 17
    assert report[10:13] == b"\x01\x01\x10"


def test_bind_media_function():
    device = execute("config", "bind", "-p", "3", "back", "media", "play-pause")
    report = device.sent[-1]
    assert report[7] == 3
    assert report[10:14] == bytes((0x05, 0x02, 0, 205))


def test_bind_macro_unsupported():
    with pytest.raises(UnsupportedBindingError):
        execute("config", "bind", "left", "macro")


def test_battery_wireless(capsys):
    execute("report", "battery", device=FakeDevice(battery=57))
    assert capsys.readouterr().out.strip() == "57%"


def test_battery_asleep(capsys):
    execute("report", "battery", device=FakeDevice(status=0xA4))
    assert capsys.readouterr().out.strip() == "(asleep)"


def test_firmware(capsys):
    execute("report", "firmware", device=FakeDevice(battery=None))
    assert capsys.readouterr().out.strip() == "1.2.3.4"


def test_lift_off():
    device = execute("config", "lift-off", "2")
    assert device.sent[-1][7] == 1


def test_polling_rate_choice_rejected():
    with pytest.raises(SystemExit):
        parse("config", "polling-rate", "3")


def test_sleep_zero_disables():
    device = execute("config", "sleep", "0")
    assert device.sent[-1][7:9] == b"\xff\xff"


def test_led_brightness_wireless_defaults_to_wired():
    device = execute("config", "led-brightness", "100")
    first, second = device.sent[-2], device.sent[-1]
    assert (first[7], first[8]) == (1, 100)
    assert (second[7], second[8]) == (0, 100)


def test_scroll_invert_binds_every_profile():
    device = execute("config", "scroll", "invert")
    binds = [r for r in device.sent if r[4] == 0x09]
    assert len(binds) == 6
    assert sorted({r[7] for r in binds}) == [1, 2, 3]
    up = [r for r in binds if r[8] == 16]
    assert all(r[12] == 17 for r in up)


def test_sleeping_device_refused():
    with pytest.raises(DeviceSleepingError):
        execute("config", "debounce", "4", device=FakeDevice(status=0xA4))


def test_debounce_out_of_range():
    with pytest.raises(SystemExit):
        parse("config", "debounce", "17")


def test_main_version(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--version"])
    assert info.value.code == 0
    assert "0.1.2" in capsys.readouterr().out


def test_main_requires_command():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2