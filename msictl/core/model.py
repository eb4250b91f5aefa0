"""Core data models used across codec, executor, service, and CLI."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any

UNKNOWN_FIRMWARE = "Unknown"


@dataclass(frozen=True)
class Monitor:
    id: str
    serial: str
    model: str
    firmware: str = UNKNOWN_FIRMWARE


@dataclass(frozen=True)
class RawResponse:
    returncode: int
    stdout: str
    stderr: str


@dataclass(frozen=True)
class ColorRgb:
    r: int
    g: int
    b: int


# Enum members are declared in msigd's numeric order: a member's index in
# list(EnumClass) is its positional alias on the wire.


class ResponseTime(Enum):
    NORMAL = "normal"
    FAST = "fast"
    FASTEST = "fastest"


class ImageEnhancement(Enum):
    OFF = "off"
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    STRONGEST = "strongest"


class ColorPreset(Enum):
    COOL = "cool"
    NORMAL = "normal"
    WARM = "warm"
    CUSTOM = "custom"


class NightVision(Enum):
    OFF = "off"
    NORMAL = "normal"
    STRONG = "strong"
    STRONGEST = "strongest"
    AI = "ai"


class Position(Enum):
    LEFT_TOP = "left_top"
    RIGHT_TOP = "right_top"
    LEFT_BOTTOM = "left_bottom"
    RIGHT_BOTTOM = "right_bottom"


class ScreenAssistance(Enum):
    OFF = "off"
    RED1 = "red1"
    RED2 = "red2"
    RED3 = "red3"
    RED4 = "red4"
    RED5 = "red5"
    RED6 = "red6"
    WHITE1 = "white1"
    WHITE2 = "white2"
    WHITE3 = "white3"
    WHITE4 = "white4"
    WHITE5 = "white5"
    WHITE6 = "white6"


class AlarmClock(Enum):
    OFF = "off"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"


class GameMode(Enum):
    USER = "user"
    FPS = "fps"
    RACING = "racing"
    RTS = "rts"
    RPG = "rpg"
    PREMIUM_COLOR = "premium_color"


class ProMode(Enum):
    USER = "user"
    READER = "reader"
    CINEMA = "cinema"
    DESIGNER = "designer"
    OFFICE = "office"
    SRGB = "srgb"
    ADOBE_RGB = "adobe_rgb"
    DCI_P3 = "dci_p3"
    ECO = "eco"
    ANTI_BLUE = "anti_blue"
    MOVIE = "movie"


class InputSource(Enum):
    HDMI1 = "hdmi1"
    HDMI2 = "hdmi2"
    DP = "dp"
    USBC = "usbc"


class ScreenSize(Enum):
    AUTO = "auto"
    RATIO_4_3 = "4:3"
    RATIO_16_9 = "16:9"
    RATIO_21_9 = "21:9"
    RATIO_1_1 = "1:1"
    SIZE_19 = "19"
    SIZE_24 = "24"


class PowerButton(Enum):
    OFF = "off"
    STANDBY = "standby"


class KvmMode(Enum):
    AUTO = "auto"
    UPSTREAM = "upstream"
    TYPE_C = "type_c"


class AudioSource(Enum):
    ANALOG = "analog"
    DIGITAL = "digital"


class MysticLightMode(Enum):
    OFF = "off"
    STATIC = "static"
    BREATHING = "breathing"
    BLINKING = "blinking"
    FLASHING = "flashing"
    BLINDS = "blinds"
    METEOR = "meteor"
    RAINBOW = "rainbow"
    RANDOM = "random"


@dataclass(frozen=True)
class MysticLightConfig:
    led_group: str
    mode: MysticLightMode
    colors: tuple[str, ...] = ()


@dataclass(frozen=True)
class MonitorSettings:
    """Full settings snapshot of one monitor. Every field always holds a value."""

    brightness: int = 50
    contrast: int = 50
    sharpness: int = 0
    response_time: ResponseTime = ResponseTime.NORMAL
    eye_saver: bool = False
    image_enhancement: ImageEnhancement = ImageEnhancement.OFF
    color_preset: ColorPreset = ColorPreset.NORMAL
    color_rgb: ColorRgb = field(default_factory=lambda: ColorRgb(r=50, g=50, b=50))
    hdcr: bool = False
    refresh_rate_display: bool = False
    osd_transparency: int = 0
    osd_timeout: int = 20
    night_vision: NightVision = NightVision.OFF
    black_tuner: int = 10
    screen_assistance: ScreenAssistance = ScreenAssistance.OFF
    refresh_position: Position = Position.LEFT_TOP
    alarm_clock: AlarmClock = AlarmClock.OFF
    alarm_position: Position = Position.LEFT_TOP
    sound_enable: bool = True
    zero_latency: bool = False
    free_sync: bool = False
    game_mode: GameMode = GameMode.USER
    pro_mode: ProMode = ProMode.USER
    input: InputSource = InputSource.HDMI1
    auto_scan: bool = True
    screen_info: bool = True
    screen_size: ScreenSize = ScreenSize.AUTO
    power_button: PowerButton = PowerButton.OFF
    hdmi_cec: bool = False
    kvm: KvmMode = KvmMode.AUTO
    audio_source: AudioSource = AudioSource.ANALOG
    rgb_led: bool = True

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, ColorRgb):
                value = asdict(value)
            data[item.name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MonitorSettings:
        """Rebuild a snapshot from `to_dict` output, defaulting any bad entry."""
        defaults = cls()
        values: dict[str, Any] = {}
        for item in fields(cls):
            default = getattr(defaults, item.name)
            values[item.name] = _coerce_like(default, data.get(item.name))
        return cls(**values)


def _coerce_like(default: Any, raw: Any) -> Any:
    if raw is None:
        return default
    if isinstance(default, bool):
        return raw if isinstance(raw, bool) else default
    if isinstance(default, int):
        return raw if isinstance(raw, int) and not isinstance(raw, bool) else default
    if isinstance(default, Enum):
        try:
            return type(default)(raw)
        except ValueError:
            return default
    if isinstance(default, ColorRgb):
        if not isinstance(raw, dict):
            return default
        channels = [raw.get(name) for name in ("r", "g", "b")]
        if all(isinstance(c, int) and not isinstance(c, bool) for c in channels):
            return ColorRgb(*channels)
        return default
    return default


@dataclass(frozen=True)
class ApplyResult:
    monitor_id: str
    setting: str
    value: str
    args: tuple[str, ...]
    output: str
