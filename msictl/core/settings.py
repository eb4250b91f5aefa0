"""Setting catalog: the domain of every controllable monitor attribute."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from msictl.core.errors import SettingValidationError
from msictl.core.model import (
    AlarmClock,
    AudioSource,
    ColorPreset,
    ColorRgb,
    GameMode,
    ImageEnhancement,
    InputSource,
    KvmMode,
    MonitorSettings,
    MysticLightConfig,
    MysticLightMode,
    NightVision,
    Position,
    PowerButton,
    ProMode,
    ResponseTime,
    ScreenAssistance,
    ScreenSize,
)

RANGE = "range"
TOGGLE = "toggle"
CHOICE = "choice"
RGB = "rgb"

RGB_CHANNEL_MAX = 100
_TRUE_WORDS = frozenset({"on", "1", "true"})
_FALSE_WORDS = frozenset({"off", "0", "false"})
_HEX_COLOR_RE = re.compile(r"^#?[0-9a-fA-F]{6}$")
_MAX_LED_COLORS = 2
_COLORLESS_MODES = frozenset({MysticLightMode.OFF, MysticLightMode.RAINBOW, MysticLightMode.RANDOM})


@dataclass(frozen=True)
class SettingSpec:
    name: str
    kind: str
    key: str
    minimum: int | None = None
    maximum: int | None = None
    choices: type[Enum] | None = None

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").capitalize()

    @property
    def default(self) -> Any:
        return getattr(_DEFAULTS, self.name)

    @property
    def tokens(self) -> tuple[str, ...]:
        if self.choices is None:
            return ()
        return tuple(member.value for member in self.choices)


def _range(name: str, maximum: int, minimum: int = 0) -> SettingSpec:
    return SettingSpec(name=name, kind=RANGE, key=name, minimum=minimum, maximum=maximum)


def _toggle(name: str, key: str | None = None) -> SettingSpec:
    return SettingSpec(name=name, kind=TOGGLE, key=key or name)


def _choice(name: str, choices: type[Enum]) -> SettingSpec:
    return SettingSpec(name=name, kind=CHOICE, key=name, choices=choices)


_DEFAULTS = MonitorSettings()

SETTINGS: dict[str, SettingSpec] = {
    spec.name: spec
    for spec in (
        _range("brightness", 100),
        _range("contrast", 100),
        _range("sharpness", 5),
        _choice("response_time", ResponseTime),
        _toggle("eye_saver"),
        _choice("image_enhancement", ImageEnhancement),
        _choice("color_preset", ColorPreset),
        SettingSpec(name="color_rgb", kind=RGB, key="color_rgb", minimum=0, maximum=RGB_CHANNEL_MAX),
        _toggle("hdcr"),
        # msigd publishes and accepts this one as "refresh_display".
        _toggle("refresh_rate_display", key="refresh_display"),
        _range("osd_transparency", 5),
        _range("osd_timeout", 30),
        _choice("night_vision", NightVision),
        _range("black_tuner", 20),
        _choice("screen_assistance", ScreenAssistance),
        _choice("refresh_position", Position),
        _choice("alarm_clock", AlarmClock),
        _choice("alarm_position", Position),
        _toggle("sound_enable"),
        _toggle("zero_latency"),
        _toggle("free_sync"),
        _choice("game_mode", GameMode),
        _choice("pro_mode", ProMode),
        _choice("input", InputSource),
        _toggle("auto_scan"),
        _toggle("screen_info"),
        _choice("screen_size", ScreenSize),
        _choice("power_button", PowerButton),
        _toggle("hdmi_cec"),
        _choice("kvm", KvmMode),
        _choice("audio_source", AudioSource),
        _toggle("rgb_led"),
    )
}


def get_spec(name: str) -> SettingSpec:
    spec = SETTINGS.get(name)
    if spec is None:
        available = ", ".join(sorted(SETTINGS))
        raise SettingValidationError(
            f"Unknown setting '{name}'. Available: {available}",
            setting=name,
            allowed=available,
        )
    return spec


def describe_setting(name: str) -> str:
    """Human-readable domain of a setting, e.g. ``0-100`` or ``normal, fast, fastest``."""
    spec = get_spec(name)
    if spec.kind == RANGE:
        return f"{spec.minimum}-{spec.maximum}"
    if spec.kind == TOGGLE:
        return "on, off"
    if spec.kind == CHOICE:
        return ", ".join(spec.tokens)
    return f"R,G,B (each {spec.minimum}-{spec.maximum})"


def validate_setting(name: str, value: Any) -> Any:
    """Check ``value`` against the domain of ``name`` and return it normalized.

    Choice settings accept either an enum member or its canonical token and
    always return the enum member. RGB accepts a ``ColorRgb`` or any
    three-item sequence of ints and returns a ``ColorRgb``.
    """
    spec = get_spec(name)
    if spec.kind == RANGE:
        return _validate_int(spec, value, spec.label)
    if spec.kind == TOGGLE:
        if not isinstance(value, bool):
            raise _invalid(spec, f"{spec.label} must be on or off (got {value!r})")
        return value
    if spec.kind == CHOICE:
        return _validate_choice(spec, value)
    return _validate_rgb(spec, value)


def parse_setting_text(name: str, text: str) -> Any:
    """Turn command-line text into a validated value for ``name``."""
    spec = get_spec(name)
    raw = text.strip()
    if spec.kind == RANGE:
        try:
            number = int(raw)
        except ValueError:
            raise _invalid(spec, f"{spec.label} must be an integer {describe_setting(name)} (got '{raw}')") from None
        return validate_setting(name, number)
    if spec.kind == TOGGLE:
        lowered = raw.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise _invalid(spec, f"{spec.label} must be on or off (got '{raw}')")
    if spec.kind == CHOICE:
        return validate_setting(name, raw.lower())
    parts = [part.strip() for part in raw.split(",")]
    try:
        channels = [int(part) for part in parts]
    except ValueError:
        raise _invalid(spec, f"{spec.label} must be R,G,B integers (got '{raw}')") from None
    return validate_setting(name, channels)


def validate_mystic_light(led_group: str, mode: Any, colors: Sequence[str] = ()) -> MysticLightConfig:
    allowed_modes = ", ".join(m.value for m in MysticLightMode)
    group = str(led_group).strip().lower()
    if group != "all" and not (group.isdigit() and int(group) > 0):
        raise SettingValidationError(
            f"LED group must be 'all' or a positive index (got '{led_group}')",
            setting="mystic",
            allowed="all, 1, 2, ...",
        )

    if isinstance(mode, MysticLightMode):
        resolved = mode
    else:
        try:
            resolved = MysticLightMode(str(mode).strip().lower())
        except ValueError:
            raise SettingValidationError(
                f"LED mode must be one of: {allowed_modes}",
                setting="mystic",
                allowed=allowed_modes,
            ) from None

    normalized: list[str] = []
    for color in colors:
        if not _HEX_COLOR_RE.match(color.strip()):
            raise SettingValidationError(
                f"LED color must be a hex RRGGBB value (got '{color}')",
                setting="mystic",
                allowed="#RRGGBB",
            )
        normalized.append(color.strip().lstrip("#").lower())

    if resolved in _COLORLESS_MODES and normalized:
        raise SettingValidationError(
            f"LED mode '{resolved.value}' does not take colors",
            setting="mystic",
            allowed="no colors",
        )
    if resolved not in _COLORLESS_MODES and not 1 <= len(normalized) <= _MAX_LED_COLORS:
        raise SettingValidationError(
            f"LED mode '{resolved.value}' needs 1 to {_MAX_LED_COLORS} colors",
            setting="mystic",
            allowed="#RRGGBB",
        )

    return MysticLightConfig(led_group=group, mode=resolved, colors=tuple(normalized))


def _validate_int(spec: SettingSpec, value: Any, label: str) -> int:
    assert spec.minimum is not None and spec.maximum is not None
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid(spec, f"{label} must be an integer {spec.minimum}-{spec.maximum} (got {value!r})")
    if not spec.minimum <= value <= spec.maximum:
        raise _invalid(spec, f"{label} must be {spec.minimum}-{spec.maximum} (got {value})")
    return value


def _validate_choice(spec: SettingSpec, value: Any) -> Enum:
    assert spec.choices is not None
    if isinstance(value, spec.choices):
        return value
    if isinstance(value, str):
        try:
            return spec.choices(value)
        except ValueError:
            pass
    raise _invalid(spec, f"{spec.label} must be one of: {', '.join(spec.tokens)}")


def _validate_rgb(spec: SettingSpec, value: Any) -> ColorRgb:
    if isinstance(value, ColorRgb):
        channels = [value.r, value.g, value.b]
    elif isinstance(value, (list, tuple)) and len(value) == 3:
        channels = list(value)
    else:
        raise _invalid(spec, f"{spec.label} needs exactly three channels (got {value!r})")
    for channel_name, channel in zip(("Red", "Green", "Blue"), channels):
        _validate_int(spec, channel, f"{channel_name} channel")
    return ColorRgb(*channels)


def _invalid(spec: SettingSpec, message: str) -> SettingValidationError:
    return SettingValidationError(message, setting=spec.name, allowed=describe_setting(spec.name))
