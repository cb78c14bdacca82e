"""Command line interface for configuring and querying supported mice."""

from __future__ import annotations

import argparse
import sys
from enum import Enum
from typing import Callable, Sequence

from termcolor import colored

from mxw.bindings import (
    Button,
    DPIFn,
    KeyBinding,
    KeyboardFn,
    MediaFn,
    MouseFn,
    NoBinding,
    UnsupportedBindingError,
    set_binding,
)
from mxw.color import parse_hex
from mxw.device import (
    DeviceNotFoundError,
    is_wired,
    list_devices,
    open_device,
    select_device,
)
from mxw.effects import Effect, EffectKind, set_effect
from mxw.keys import parse_code, parse_key_code, parse_scan_code
from mxw.report import battery_text, firmware_version
from mxw.settings import (
    ScrollDirection,
    set_debounce,
    set_dpi_colors,
    set_dpi_stage,
    set_dpi_stages,
    set_led_brightness,
    set_lift_off,
    set_polling_rate,
    set_profile,
    set_scroll,
    set_sleep,
)
from mxw.validation import contains

VERSION = "0.1.2"
DESCRIPTION = "Cross platform CLI tool for Glorious' wireless mice."

DEFAULT_DPI_STAGES = (400, 800, 1600, 3200)
DEFAULT_DPI_COLORS = ("FFFF00", "0000FF", "FF0000", "00FF00")
RATE_HELP = "Effect rate, 0-100 [default: 40]"
PROFILE_HELP = "Profile id (1-3) [default: 1]"


def _checked(parse: Callable[[str], object]) -> Callable[[str], object]:
    """Wrap a parser so its ValueError message is shown by argparse."""

    def convert(text: str) -> object:
        try:
            return parse(text)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None

    convert.__name__ = getattr(parse, "__name__", "value")
    return convert


def _ranged(start: int, end: int) -> Callable[[str], object]:
    return _checked(contains(start, end))


_BYTE = _ranged(0, 255)
_COLOR = _checked(parse_hex)


def _count(low: int, high: int) -> type[argparse.Action]:
    """An action that accepts between ``low`` and ``high`` values."""

    class _CountAction(argparse.Action):
        def __call__(self, parser, namespace, values, option_string=None):
            values = list(values)
            if not low <= len(values) <= high:
                if low == high:
                    message = f"expected {low} values, got {len(values)}"
                else:
                    message = f"expected {low} to {high} values, got {len(values)}"
                raise argparse.ArgumentError(self, message)
            setattr(namespace, self.dest, values)

    return _CountAction


def _command_name(member: Enum) -> str:
    return member.name.lower().replace("_", "-")


def _member(enum: type[Enum], name: str) -> Enum:
    return enum[name.upper().replace("-", "_")]


def _add_profile(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-p", "--profile", type=_ranged(1, 3), help=PROFILE_HELP)


def _add_rate(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--rate", type=_ranged(0, 100), help=RATE_HELP)


# Handlers called by run(); each takes the parsed arguments, the device and
# whether the mouse is attached by cable.


def _report_battery(args, device, wired):
    print(battery_text(device, wired))


def _report_firmware(args, device, wired):
    print(firmware_version(device, wired))


def _config_profile(args, device, wired):
    set_profile(device, args.id)


def _config_led_effect(args, device, wired):
    kind = _member(EffectKind, args.effect)
    colors = getattr(args, "colors", None)
    if colors is None:
        color = getattr(args, "color", None)
        colors = [] if color is None else [color]
    effect = Effect(kind, getattr(args, "rate", None), tuple(colors))
    set_effect(device, args.profile, effect)


def _config_led_brightness(args, device, wired):
    set_led_brightness(device, args.wired, args.wireless)


def _config_sleep(args, device, wired):
    set_sleep(device, args.minutes, args.seconds)


def _config_dpi_stage(args, device, wired):
    set_dpi_stage(device, args.profile, args.id)


def _config_dpi_stages(args, device, wired):
    set_dpi_stages(device, args.profile, args.stages)


def _config_dpi_colors(args, device, wired):
    set_dpi_colors(device, args.profile, args.colors)


def _config_lift_off(args, device, wired):
    set_lift_off(device, args.mm)


def _config_polling_rate(args, device, wired):
    set_polling_rate(device, args.ms)


def _config_debounce(args, device, wired):
    set_debounce(device, args.profile, args.ms)


def _config_scroll(args, device, wired):
    set_scroll(device, ScrollDirection(args.direction))


_FUNCTION_ENUMS = {
    "keyboard": KeyboardFn,
    "mouse": MouseFn,
    "dpi": DPIFn,
    "media": MediaFn,
}


def _binding(args):
    if args.binding == "key":
        return KeyBinding(args.key, args.modifier)
    if args.binding == "none":
        return NoBinding()
    enum = _FUNCTION_ENUMS.get(args.binding)
    if enum is None:
        raise UnsupportedBindingError(f"{args.binding} bindings are not implemented")
    return _member(enum, args.function)


def _config_bind(args, device, wired):
    button = _member(Button, args.button)
    set_binding(device, args.profile, button, _binding(args))


def _build_effects(parser: argparse.ArgumentParser) -> None:
    effects = parser.add_subparsers(dest="effect", required=True, metavar="EFFECT")

    for name, help_text in (
        ("glorious", "Name says it all"),
        ("cycle", "Cycle through all colors"),
    ):
        _add_rate(effects.add_parser(name, help=help_text))

    pulse = effects.add_parser("pulse", help="Pulse on/off through given colors")
    _add_rate(pulse)
    pulse.add_argument(
        "colors",
        metavar="COLORS",
        nargs="+",
        type=_COLOR,
        action=_count(2, 6),
        help="From 2 to 6 colors in hex format",
    )

    solid = effects.add_parser("solid", help="Solid color")
    solid.add_argument("color", type=_COLOR, help="Color in hex format")

    pulse_one = effects.add_parser("pulse-one", help="Pulse on/off one color")
    _add_rate(pulse_one)
    pulse_one.add_argument("color", type=_COLOR)

    _add_rate(effects.add_parser("tail", help="Glorious, but colors don't \"move\""))

    rave = effects.add_parser("rave", help="Strobe-like effect")
    _add_rate(rave)
    rave.add_argument(
        "colors",
        metavar="COLORS",
        nargs="+",
        type=_COLOR,
        action=_count(1, 2),
        help="1 or 2 colors in hex format",
    )

    _add_rate(effects.add_parser("wave", help="Glorious, but more circus"))
    effects.add_parser("off", help="No effect, LED off")


def _build_bind(parser: argparse.ArgumentParser) -> None:
    _add_profile(parser)
    parser.add_argument(
        "button", choices=[_command_name(b) for b in Button], help="Mouse button"
    )
    bindings = parser.add_subparsers(dest="binding", required=True, metavar="BINDING")

    key = bindings.add_parser("key", help="Single key")
    kinds = key.add_subparsers(dest="key_kind", required=True, metavar="KIND")
    for name, parse, help_text in (
        ("scan-code", parse_scan_code, "Hardware scan code"),
        ("key-code", parse_key_code, "JS-style KeyCode"),
        ("code", parse_code, "JS-style Code"),
    ):
        kind = kinds.add_parser(name, help=help_text)
        kind.add_argument("key", type=_checked(parse))
        kind.add_argument(
            "-m", "--modifier", type=_checked(parse), help="Optional modifier"
        )

    for name, help_text in (
        ("keyboard", "Keyboard function"),
        ("mouse", "Mouse function"),
        ("dpi", "DPI modifier"),
        ("macro", "(not implemented) Macro"),
        ("media", "Multimedia"),
        ("shortcut", "(not implemented) Launch applications etc."),
        ("none", "Do nothing"),
    ):
        sub = bindings.add_parser(name, help=help_text)
        enum = _FUNCTION_ENUMS.get(name)
        if enum is not None:
            functions = sub.add_subparsers(
                dest="function", required=True, metavar="FUNCTION"
            )
            for member in enum:
                functions.add_parser(_command_name(member))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for every report and config command."""
    parser = argparse.ArgumentParser(prog="mxw", description=DESCRIPTION)
    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {VERSION}"
    )
    kinds = parser.add_subparsers(dest="kind", required=True, metavar="COMMAND")

    report = kinds.add_parser("report", help="Retrieve information about the device")
    reports = report.add_subparsers(dest="report", required=True, metavar="REPORT")
    reports.add_parser(
        "battery", help="Battery percentage (if available)"
    ).set_defaults(handler=_report_battery)
    reports.add_parser("firmware", help="Device firmware version").set_defaults(
        handler=_report_firmware
    )

    config = kinds.add_parser("config", help="Change the device's various settings")
    configs = config.add_subparsers(dest="config", required=True, metavar="SETTING")

    profile = configs.add_parser("profile", help="Active profile by id")
    profile.add_argument("id", type=_ranged(1, 3))
    profile.set_defaults(handler=_config_profile)

    led_effect = configs.add_parser("led-effect", help="LED Effect")
    _add_profile(led_effect)
    _build_effects(led_effect)
    led_effect.set_defaults(handler=_config_led_effect)

    brightness = configs.add_parser(
        "led-brightness", help="LED brightness value[s] (0-255)"
    )
    brightness.add_argument("wired", type=_BYTE)
    brightness.add_argument(
        "wireless", nargs="?", type=_BYTE, help="[default: <WIRED>]"
    )
    brightness.set_defaults(handler=_config_led_brightness)

    sleep = configs.add_parser("sleep", help="Sleep delay in minutes [and seconds]")
    sleep.add_argument("minutes", type=_BYTE)
    sleep.add_argument("seconds", nargs="?", type=_BYTE, help="[default: 0]")
    sleep.set_defaults(handler=_config_sleep)

    dpi_stage = configs.add_parser("dpi-stage", help="Active DPI stage by id")
    _add_profile(dpi_stage)
    dpi_stage.add_argument("id", type=_ranged(1, 4))
    dpi_stage.set_defaults(handler=_config_dpi_stage)

    dpi_stages = configs.add_parser("dpi-stages", help="Set DPI stages (200-19000)")
    _add_profile(dpi_stages)
    dpi_stages.add_argument(
        "stages",
        metavar="STAGE",
        nargs="*",
        type=_ranged(100, 19000),
        action=_count(4, 4),
        default=list(DEFAULT_DPI_STAGES),
        help="[default: 400 800 1600 3200]",
    )
    dpi_stages.set_defaults(handler=_config_dpi_stages)

    dpi_colors = configs.add_parser("dpi-colors", help="Set DPI stage colors")
    _add_profile(dpi_colors)
    dpi_colors.add_argument(
        "colors",
        metavar="COLOR",
        nargs="*",
        type=_COLOR,
        action=_count(4, 4),
        default=[parse_hex(text) for text in DEFAULT_DPI_COLORS],
        help="[default: " + " ".join(DEFAULT_DPI_COLORS) + "]",
    )
    dpi_colors.set_defaults(handler=_config_dpi_colors)

    lift_off = configs.add_parser("lift-off", help="Lift-off distance in mm")
    lift_off.add_argument("mm", choices=["1", "2"])
    lift_off.set_defaults(handler=_config_lift_off)

    polling = configs.add_parser("polling-rate", help="Polling rate in ms")
    polling.add_argument("ms", choices=["1", "2", "4", "8"])
    polling.set_defaults(handler=_config_polling_rate)

    debounce = configs.add_parser("debounce", help="Debounce in ms (0-16)")
    _add_profile(debounce)
    debounce.add_argument("ms", type=_ranged(0, 16))
    debounce.set_defaults(handler=_config_debounce)

    bind = configs.add_parser("bind", help="Key binding")
    _build_bind(bind)
    bind.set_defaults(handler=_config_bind)

    scroll = configs.add_parser("scroll", help="Scroll inversion")
    scroll.add_argument("direction", choices=[d.value for d in ScrollDirection])
    scroll.set_defaults(handler=_config_scroll)

    return parser


def run(args: argparse.Namespace, device, wired: bool) -> None:
    """Carry out the parsed command on an open device."""
    args.handler(args, device, wired)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``mxw`` command."""
    args = build_parser().parse_args(argv)

    try:
        info = select_device(list_devices())
    except DeviceNotFoundError as exc:
        print(f"{colored('error', 'red', attrs=['bold'])}: {exc}")
        return 1

    try:
        with open_device(info) as device:
            run(args, device, is_wired(info))
    except (OSError, ValueError, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())