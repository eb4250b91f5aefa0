"""Typer CLI entrypoint."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any

import typer

from msictl.core.config import Config, load_config
from msictl.core.errors import MsictlError
from msictl.core.model import ColorRgb
from msictl.core.service import MonitorService
from msictl.core.settings import (
    SETTINGS,
    describe_setting,
    parse_setting_text,
    validate_mystic_light,
    validate_setting,
)

app = typer.Typer(help="MSI monitor control via msigd")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_MONITOR_HELP = "Monitor id from 'msictl monitors' (defaults to the selected or only monitor)"


def _configure_logging(config: Config, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format=_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _build_service(ctx: typer.Context) -> MonitorService:
    return MonitorService(config=ctx.obj)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, ColorRgb):
        return f"{value.r},{value.g},{value.b}"
    return str(value)


def _fail(exc: MsictlError) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    try:
        config = load_config()
    except MsictlError as exc:
        raise _fail(exc) from None
    _configure_logging(config, verbose)
    ctx.obj = config


@app.command("check")
def check(ctx: typer.Context) -> None:
    """Check whether msigd can be launched."""
    service = _build_service(ctx)
    if service.check_available():
        typer.echo(f"{service.config.binary} is available")
        return
    typer.echo(f"Error: {service.config.binary} could not be started. Is msigd installed?", err=True)
    raise typer.Exit(code=1)


@app.command("monitors")
def list_monitors(ctx: typer.Context) -> None:
    """List connected MSI monitors."""
    try:
        monitors = _build_service(ctx).list_monitors()
        if not monitors:
            typer.echo("No MSI monitors found")
            return
        for monitor in monitors:
            typer.echo(f"{monitor.id}: {monitor.model} serial={monitor.serial} firmware={monitor.firmware}")
    except MsictlError as exc:
        raise _fail(exc) from None


@app.command("select")
def select_monitor(ctx: typer.Context, monitor_id: str) -> None:
    """Remember MONITOR_ID as the default target for later commands."""
    try:
        monitor = _build_service(ctx).select_monitor(monitor_id)
        typer.echo(f"Selected monitor {monitor.id} ({monitor.model})")
    except MsictlError as exc:
        raise _fail(exc) from None


@app.command("settings")
def list_settings() -> None:
    """List every controllable setting with its allowed values."""
    for name, spec in SETTINGS.items():
        typer.echo(f"{name}: {describe_setting(name)} (default {_format_value(spec.default)})")


@app.command("query")
def query(
    ctx: typer.Context,
    monitor: str | None = typer.Option(None, "--monitor", "-m", help=_MONITOR_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print settings as JSON"),
    cached: bool = typer.Option(False, "--cached", help="Show the last queried settings without calling msigd"),
) -> None:
    """Print the current settings of a monitor."""
    try:
        service = _build_service(ctx)
        monitor_id = service.resolve_monitor(monitor)
        if cached:
            settings = service.cached_settings(monitor_id)
            if settings is None:
                typer.echo(f"No cached settings for monitor {monitor_id}", err=True)
                raise typer.Exit(code=1)
        else:
            settings = service.get_settings(monitor_id)

        if as_json:
            typer.echo(json.dumps(settings.to_dict(), indent=2))
            return
        typer.echo(f"Monitor {monitor_id}")
        for name in SETTINGS:
            typer.echo(f"  {name}: {_format_value(getattr(settings, name))}")
    except MsictlError as exc:
        raise _fail(exc) from None


@app.command("set")
def set_setting(
    ctx: typer.Context,
    setting: str,
    value: str | None = typer.Argument(None),
    monitor: str | None = typer.Option(None, "--monitor", "-m", help=_MONITOR_HELP),
) -> None:
    """Set SETTING to VALUE on a monitor.

    If VALUE is omitted, prints the allowed values for SETTING.
    """
    try:
        if value is None:
            typer.echo(f"Allowed values for '{setting}': {describe_setting(setting)}")
            return
        parsed = parse_setting_text(setting, value)
        service = _build_service(ctx)
        result = service.set_setting(service.resolve_monitor(monitor), setting, parsed)
        typer.echo(f"Set {result.setting}={result.value} on monitor {result.monitor_id}")
    except MsictlError as exc:
        raise _fail(exc) from None


@app.command("rgb")
def set_rgb(
    ctx: typer.Context,
    red: int,
    green: int,
    blue: int,
    monitor: str | None = typer.Option(None, "--monitor", "-m", help=_MONITOR_HELP),
) -> None:
    """Set the custom color channels (each 0-100)."""
    try:
        validate_setting("color_rgb", (red, green, blue))
        service = _build_service(ctx)
        result = service.set_color_rgb(service.resolve_monitor(monitor), red, green, blue)
        typer.echo(f"Set color_rgb={result.value} on monitor {result.monitor_id}")
    except MsictlError as exc:
        raise _fail(exc) from None


@app.command("mystic")
def set_mystic(
    ctx: typer.Context,
    mode: str,
    colors: list[str] | None = typer.Argument(None, help="Hex colors, e.g. ff0000"),
    led: str = typer.Option("all", "--led", help="LED group: 'all' or an LED index"),
    monitor: str | None = typer.Option(None, "--monitor", "-m", help=_MONITOR_HELP),
) -> None:
    """Configure Mystic Light LEDs."""
    try:
        validate_mystic_light(led, mode, colors or ())
        service = _build_service(ctx)
        result = service.set_mystic_light(
            service.resolve_monitor(monitor),
            mode,
            colors or (),
            led_group=led,
        )
        typer.echo(f"Set mystic={result.value} on monitor {result.monitor_id}")
    except MsictlError as exc:
        raise _fail(exc) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
