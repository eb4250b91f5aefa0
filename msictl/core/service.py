"""Service layer used by CLI and future UI frontends."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from msictl.core import state
from msictl.core.codec import build_mystic_args, build_set_args, parse_monitor_list, parse_settings
from msictl.core.config import Config, load_config
from msictl.core.errors import DeviceSelectionError
from msictl.core.executor import AvailabilityCache, MsigdExecutor
from msictl.core.model import ApplyResult, Monitor, MonitorSettings, MysticLightMode
from msictl.core.settings import validate_mystic_light, validate_setting

LOGGER = logging.getLogger(__name__)


class MonitorService:
    def __init__(
        self,
        *,
        executor: MsigdExecutor | None = None,
        config: Config | None = None,
        availability: AvailabilityCache | None = None,
        state_file: Path | None = None,
    ) -> None:
        self.config = config or load_config()
        self.executor = executor or MsigdExecutor(self.config.binary)
        self.availability = availability or AvailabilityCache()
        self.state_file = state_file

    def check_available(self) -> bool:
        if self.config.cache_availability:
            return self.availability.get(self.executor.check_available)
        return self.executor.check_available()

    def list_monitors(self) -> list[Monitor]:
        return parse_monitor_list(self.executor.list_monitors())

    def get_settings(self, monitor_id: str) -> MonitorSettings:
        settings = parse_settings(self.executor.query_monitor(monitor_id))
        if self.config.settings_cache:
            state.update_settings_cache(monitor_id, settings, self.state_file)
        return settings

    def cached_settings(self, monitor_id: str) -> MonitorSettings | None:
        return state.get_cached_settings(monitor_id, self.state_file)

    def clear_cached_settings(self, monitor_id: str) -> None:
        state.clear_monitor_cache(monitor_id, self.state_file)

    def set_setting(self, monitor_id: str, name: str, value: Any) -> ApplyResult:
        normalized = validate_setting(name, value)
        args = build_set_args(monitor_id, name, normalized)
        output = self.executor.execute(args)
        LOGGER.info("Applied %s=%s on monitor %s", name, args[-1], monitor_id)
        self._refresh_cached_field(monitor_id, name, normalized)
        return ApplyResult(
            monitor_id=monitor_id,
            setting=name,
            value=args[-1],
            args=tuple(args),
            output=output,
        )

    def set_color_rgb(self, monitor_id: str, r: int, g: int, b: int) -> ApplyResult:
        return self.set_setting(monitor_id, "color_rgb", (r, g, b))

    def set_mystic_light(
        self,
        monitor_id: str,
        mode: MysticLightMode | str,
        colors: Sequence[str] = (),
        led_group: str = "all",
    ) -> ApplyResult:
        config = validate_mystic_light(led_group, mode, colors)
        args = build_mystic_args(monitor_id, config)
        output = self.executor.execute(args)
        return ApplyResult(
            monitor_id=monitor_id,
            setting="mystic",
            value=args[-1],
            args=tuple(args),
            output=output,
        )

    def resolve_monitor(self, monitor_id: str | None = None) -> str:
        if monitor_id:
            return monitor_id

        monitors = self.list_monitors()
        if not monitors:
            raise DeviceSelectionError("No MSI monitors found. Ensure msigd can see your monitor.")

        selected = state.load_state(self.state_file).selected_monitor_id
        if selected and any(m.id == selected for m in monitors):
            return selected

        if len(monitors) > 1:
            candidate_desc = ", ".join(f"{m.id} ({m.model}, {m.serial})" for m in monitors)
            raise DeviceSelectionError(
                f"Multiple monitors found: {candidate_desc}. Use --monitor or 'msictl select' to choose one."
            )
        return monitors[0].id

    def select_monitor(self, monitor_id: str) -> Monitor:
        monitors = self.list_monitors()
        for monitor in monitors:
            if monitor.id == monitor_id:
                state.select_monitor(monitor_id, self.state_file)
                return monitor
        available = ", ".join(m.id for m in monitors) or "<none>"
        raise DeviceSelectionError(f"No monitor with id '{monitor_id}'. Available: {available}")

    def _refresh_cached_field(self, monitor_id: str, name: str, value: Any) -> None:
        if not self.config.settings_cache:
            return
        cached = self.cached_settings(monitor_id)
        if cached is None:
            return
        state.update_settings_cache(monitor_id, dataclasses.replace(cached, **{name: value}), self.state_file)
