"""Stable public API for building tooling on top of msictl.

This module is the supported integration surface for third-party callers
(GUI front ends, tray applets, scripts). Every failure is raised as a subclass
of `MsictlError` whose message is suitable for display; the subclass keeps
validation problems, launch problems, and msigd-reported failures apart.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from msictl.core.config import Config
from msictl.core.errors import (
    ConfigError,
    DeviceSelectionError,
    MsictlError,
    ProcessError,
    ProcessReportedError,
    ProcessStartError,
    SettingValidationError,
)
from msictl.core.executor import AvailabilityCache, MsigdExecutor
from msictl.core.model import (
    AlarmClock,
    ApplyResult,
    AudioSource,
    ColorPreset,
    ColorRgb,
    GameMode,
    ImageEnhancement,
    InputSource,
    KvmMode,
    Monitor,
    MonitorSettings,
    MysticLightMode,
    NightVision,
    Position,
    PowerButton,
    ProMode,
    ResponseTime,
    ScreenAssistance,
    ScreenSize,
)
from msictl.core.service import MonitorService
from msictl.core.settings import SETTINGS, describe_setting

__all__ = [
    "MsictlError",
    "SettingValidationError",
    "DeviceSelectionError",
    "Config",
    "ConfigError",
    "ProcessError",
    "ProcessStartError",
    "ProcessReportedError",
    "AlarmClock",
    "ApplyResult",
    "AudioSource",
    "ColorPreset",
    "ColorRgb",
    "GameMode",
    "ImageEnhancement",
    "InputSource",
    "KvmMode",
    "Monitor",
    "MonitorSettings",
    "MysticLightMode",
    "NightVision",
    "Position",
    "PowerButton",
    "ProMode",
    "ResponseTime",
    "ScreenAssistance",
    "ScreenSize",
    "SettingInfo",
    "Client",
]


@dataclass(frozen=True)
class SettingInfo:
    """Name, allowed domain, and default of one controllable setting."""

    name: str
    kind: str
    allowed: str
    default: Any


class Client:
    """Public client for querying and configuring MSI monitors through msigd.

    A `Client` wraps configuration loading, msigd invocation, and output
    decoding behind typed operations. Settings are addressed by the names in
    `MonitorSettings` (``brightness``, ``input``, ``color_rgb``...).
    """

    def __init__(
        self,
        *,
        executor: MsigdExecutor | None = None,
        config: Config | None = None,
        availability: AvailabilityCache | None = None,
        state_file: Path | None = None,
    ) -> None:
        self._service = MonitorService(
            executor=executor,
            config=config,
            availability=availability,
            state_file=state_file,
        )

    def check_available(self) -> bool:
        return self._service.check_available()

    def list_monitors(self) -> list[Monitor]:
        return self._service.list_monitors()

    def get_settings(self, monitor_id: str) -> MonitorSettings:
        return self._service.get_settings(monitor_id)

    def get_cached_settings(self, monitor_id: str) -> MonitorSettings | None:
        return self._service.cached_settings(monitor_id)

    def clear_cached_settings(self, monitor_id: str) -> None:
        self._service.clear_cached_settings(monitor_id)

    def set_setting(self, monitor_id: str, setting: str, value: Any) -> ApplyResult:
        return self._service.set_setting(monitor_id, setting, value)

    def set_color_rgb(self, monitor_id: str, r: int, g: int, b: int) -> ApplyResult:
        return self._service.set_color_rgb(monitor_id, r, g, b)

    def set_mystic_light(
        self,
        monitor_id: str,
        mode: MysticLightMode | str,
        colors: Sequence[str] = (),
        *,
        led_group: str = "all",
    ) -> ApplyResult:
        return self._service.set_mystic_light(monitor_id, mode, colors, led_group=led_group)

    def resolve_monitor(self, monitor_id: str | None = None) -> str:
        return self._service.resolve_monitor(monitor_id)

    def select_monitor(self, monitor_id: str) -> Monitor:
        return self._service.select_monitor(monitor_id)

    def describe_setting(self, setting: str) -> str:
        return describe_setting(setting)

    def setting_catalog(self) -> list[SettingInfo]:
        return [
            SettingInfo(
                name=spec.name,
                kind=spec.kind,
                allowed=describe_setting(spec.name),
                default=spec.default,
            )
            for spec in SETTINGS.values()
        ]
