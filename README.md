# mxw

A command-line tool for Glorious mice (Model O, Model D, their minus and
pro variants, wired and wireless). It reads the battery level and the
firmware version, and changes the settings that the vendor's own software
exposes: active profile, LED effects and brightness, DPI stages and
colours, polling rate, lift-off distance, debounce, sleep delay, button
bindings and scroll direction.

When more than one supported interface is present, the one with the
lowest product id is used, which is the wired one when both are there.

## Installation

```
pip install .
```

The tool finds the mouse under `/sys/class/hidraw` and talks to it with
feature reports on the matching `/dev/hidraw*` node, so it runs on Linux
only, and your user needs read and write access to that node (for example
through a udev rule).

## Usage

Retrieve information:

```
mxw report battery
mxw report firmware
```

`report battery` prints the percentage, with the charging state when the
mouse is on its cable, or `(asleep)` / `(waking up)` when the mouse cannot
answer.

Change settings:

```
mxw config profile 2
mxw config sleep 5 30
mxw config led-brightness 128 64
mxw config led-effect --profile 1 solid FF0000
mxw config led-effect pulse --rate 60 FF0000 00FF00 0000FF
mxw config led-effect off
mxw config dpi-stage 2
mxw config dpi-stages 400 800 1600 3200
mxw config dpi-colors FFFF00 0000FF FF0000 00FF00
mxw config polling-rate 1
mxw config lift-off 2
mxw config debounce 4
mxw config scroll invert
```

Commands that take `--profile` use profile 1 when it is left out. A sleep
delay of zero disables sleeping. Most settings refuse to be changed while
the mouse is asleep and report `device is sleeping`.

Bind buttons:

```
mxw config bind forward media play-pause
mxw config bind dpi-btn dpi cycle-up
mxw config bind right mouse left
mxw config bind back key code ShiftRight --modifier ControlLeft
mxw config bind scroll none
```

Run `mxw --help`, or `--help` after any subcommand, for the full list of
options, value ranges and defaults; `mxw --version` prints the version.

## Limitations

- Only Linux hidraw devices are supported.
- `key` bindings accept only the modifier keys (`ControlLeft`,
  `ShiftRight`, `AltRight`, `MetaLeft`, `MetaRight`, by code, scan code or
  key code); any other key is rejected with `key code is invalid`.
- `macro` and `shortcut` bindings are listed but not implemented; they
  fail with an error.
- Settings can only be written, not read back, apart from the battery
  level and firmware version.

## Using it from Python

The report builders work without a device and return the 65-byte feature
report that would be sent:

```python
from mxw.bindings import Button, MediaFn, build_bind_report
from mxw.color import parse_hex
from mxw.effects import Effect, EffectKind, build_effect_report

report = build_effect_report(1, Effect(EffectKind.SOLID, colors=(parse_hex("FF0000"),)))
bind = build_bind_report(None, Button.FORWARD, MediaFn.PLAY_PAUSE)
```

`mxw.device.select_device(mxw.device.list_devices())` finds the mouse and
`mxw.device.open_device` opens it as a context manager for use with the
`set_*` functions in `mxw.settings`, `mxw.effects` and `mxw.bindings`.

## Running the tests

```
pip install .[test]
pytest
```