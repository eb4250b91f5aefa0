"""Translation between typed setting values and msigd's text protocol.

Encoding produces argument vectors such as::

    --monitor 1 --brightness 75
    --monitor 1 --color_rgb 50,40,30

Decoding understands the ``--list`` output (``index,serial,vendor,model,path``
per line) and the ``--query --numeric`` output (``key: value`` per line).
Decoding never raises: any field that cannot be read takes its default.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from msictl.core.model import ColorRgb, Monitor, MonitorSettings, MysticLightConfig
from msictl.core.settings import CHOICE, RANGE, RGB, SETTINGS, SettingSpec, get_spec

LIST_ARGS: tuple[str, ...] = ("--list",)
QUERY_ARGS: tuple[str, ...] = ("--query", "--numeric")
HELP_ARGS: tuple[str, ...] = ("--help",)
MONITOR_FLAG = "--monitor"
MYSTIC_FLAG = "--mystic"
FLAG_PREFIX = "--"

_MIN_LIST_FIELDS = 4
_TRUE_TOKENS = frozenset({"on", "1", "true"})
_RGB_CHANNEL_KEYS = (
    ("color_red", "red"),
    ("color_green", "green"),
    ("color_blue", "blue"),
)
LOGGER = logging.getLogger(__name__)


def monitor_args(monitor_id: str) -> list[str]:
    return [MONITOR_FLAG, monitor_id]


def setting_flag(spec: SettingSpec) -> str:
    return f"{FLAG_PREFIX}{spec.key}"


def encode_value(spec: SettingSpec, value: Any) -> str:
    if spec.kind == RGB:
        return f"{value.r},{value.g},{value.b}"
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, Enum):
        return str(value.value)
    return str(int(value))


def build_set_args(monitor_id: str, name: str, value: Any) -> list[str]:
    """Arguments applying an already validated ``value`` to setting ``name``."""
    spec = get_spec(name)
    return [*monitor_args(monitor_id), setting_flag(spec), encode_value(spec, value)]


def build_query_args(monitor_id: str) -> list[str]:
    return [*monitor_args(monitor_id), *QUERY_ARGS]


def build_mystic_args(monitor_id: str, config: MysticLightConfig) -> list[str]:
    value = ",".join([config.led_group, config.mode.value, *config.colors])
    return [*monitor_args(monitor_id), MYSTIC_FLAG, value]


def parse_monitor_list(output: str) -> list[Monitor]:
    monitors: list[Monitor] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        parts = [part.strip() for part in line.split(",")]
        if len(parts) < _MIN_LIST_FIELDS:
            LOGGER.debug("Skipping short monitor list line: %r", line)
            continue
        monitors.append(Monitor(id=parts[0], serial=parts[1], model=parts[3]))
    return monitors


def parse_key_values(output: str) -> dict[str, str]:
    values: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.strip().partition(":")
        if not sep:
            continue
        values[key.strip().lower().replace(" ", "_")] = value.strip()
    return values


def parse_settings(output: str) -> MonitorSettings:
    values = parse_key_values(output)
    decoded: dict[str, Any] = {}
    for name, spec in SETTINGS.items():
        result = _decode_field(spec, values)
        if result is None:
            if spec.key in values:
                LOGGER.debug("Unparsable %s=%r, using default", spec.key, values[spec.key])
            result = spec.default
        decoded[name] = result
    return MonitorSettings(**decoded)


def _decode_field(spec: SettingSpec, values: dict[str, str]) -> Any | None:
    if spec.kind == RGB:
        return _decode_rgb(spec, values)
    text = values.get(spec.key)
    if text is None:
        return None
    if spec.kind == RANGE:
        return _decode_int(text, spec.minimum, spec.maximum)
    if spec.kind == CHOICE:
        return _decode_choice(spec, text)
    return text in _TRUE_TOKENS


def _decode_int(text: str, minimum: int | None, maximum: int | None) -> int | None:
    try:
        number = int(text)
    except ValueError:
        return None
    if minimum is not None and number < minimum:
        return None
    if maximum is not None and number > maximum:
        return None
    return number


def _decode_choice(spec: SettingSpec, text: str) -> Enum | None:
    assert spec.choices is not None
    members = list(spec.choices)
    for member in members:
        if member.value == text:
            return member
    if text.isdecimal() and int(text) < len(members):
        return members[int(text)]
    return None


def _decode_rgb(spec: SettingSpec, values: dict[str, str]) -> ColorRgb | None:
    channels: list[int] = []
    for keys in _RGB_CHANNEL_KEYS:
        channel = None
        for key in keys:
            if key in values:
                channel = _decode_int(values[key], spec.minimum, spec.maximum)
                if channel is not None:
                    break
        if channel is None:
            break
        channels.append(channel)
    if len(channels) == 3:
        return ColorRgb(*channels)

    combined = values.get(spec.key)
    if combined is None:
        return None
    parts = combined.split(":")
    if len(parts) != 3:
        return None
    parsed = [_decode_int(part.strip(), spec.minimum, spec.maximum) for part in parts]
    if any(part is None for part in parsed):
        return None
    return ColorRgb(*parsed)
