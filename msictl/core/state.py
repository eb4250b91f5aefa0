"""Persisted selection and last-known settings per monitor.

Problems reading or writing the state file are logged and otherwise ignored:
the state only saves the user some typing and a round trip to the monitor.
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from msictl.core.model import MonitorSettings

STATE_VERSION = 1
LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedSettings:
    settings: MonitorSettings
    cached_at: float


@dataclass(frozen=True)
class PersistedState:
    version: int = STATE_VERSION
    selected_monitor_id: str | None = None
    settings_cache: dict[str, CachedSettings] = field(default_factory=dict)


def state_path() -> Path:
    xdg_state = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local/state"))
    return xdg_state / "msictl" / "state.json"


def load_state(path: Path | None = None) -> PersistedState:
    path = path or state_path()
    if not path.exists():
        return PersistedState()
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        LOGGER.warning("Failed to load persisted state from %s: %s", path, exc)
        return PersistedState()
    if not isinstance(doc, dict) or doc.get("version") is None:
        return PersistedState()

    cache: dict[str, CachedSettings] = {}
    raw_cache = doc.get("settings_cache")
    if isinstance(raw_cache, dict):
        for monitor_id, entry in raw_cache.items():
            if not isinstance(entry, dict) or not isinstance(entry.get("settings"), dict):
                continue
            cached_at = entry.get("cached_at", 0.0)
            if isinstance(cached_at, bool) or not isinstance(cached_at, (int, float)):
                LOGGER.warning("Ignoring invalid cached_at %r for monitor %s in %s", cached_at, monitor_id, path)
                cached_at = 0.0
            cache[monitor_id] = CachedSettings(
                settings=MonitorSettings.from_dict(entry["settings"]),
                cached_at=float(cached_at),
            )

    selected = doc.get("selected_monitor_id")
    return PersistedState(
        version=STATE_VERSION,
        selected_monitor_id=selected if isinstance(selected, str) else None,
        settings_cache=cache,
    )


def save_state(state: PersistedState, path: Path | None = None) -> None:
    path = path or state_path()
    doc: dict[str, Any] = {
        "version": STATE_VERSION,
        "selected_monitor_id": state.selected_monitor_id,
        "settings_cache": {
            monitor_id: {"settings": cached.settings.to_dict(), "cached_at": cached.cached_at}
            for monitor_id, cached in state.settings_cache.items()
        },
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(doc, indent=2, sort_keys=True), encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("Failed to save persisted state to %s: %s", path, exc)


def select_monitor(monitor_id: str | None, path: Path | None = None) -> None:
    state = load_state(path)
    save_state(
        PersistedState(selected_monitor_id=monitor_id, settings_cache=state.settings_cache),
        path,
    )


def update_settings_cache(monitor_id: str, settings: MonitorSettings, path: Path | None = None) -> None:
    state = load_state(path)
    cache = dict(state.settings_cache)
    cache[monitor_id] = CachedSettings(settings=settings, cached_at=time.time())
    save_state(
        PersistedState(selected_monitor_id=state.selected_monitor_id, settings_cache=cache),
        path,
    )


def get_cached_settings(monitor_id: str, path: Path | None = None) -> MonitorSettings | None:
    cached = load_state(path).settings_cache.get(monitor_id)
    return cached.settings if cached else None


def clear_monitor_cache(monitor_id: str, path: Path | None = None) -> None:
    state = load_state(path)
    cache = {k: v for k, v in state.settings_cache.items() if k != monitor_id}
    save_state(
        PersistedState(selected_monitor_id=state.selected_monitor_id, settings_cache=cache),
        path,
    )
