"""YAML configuration loading, validated against the packaged JSON schema."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from msictl.core.errors import ConfigError
from msictl.core.executor import DEFAULT_BINARY

BINARY_ENV = "MSICTL_BINARY"
LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    binary: str = DEFAULT_BINARY
    log_level: str = "WARNING"
    cache_availability: bool = True
    settings_cache: bool = True


def config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "msictl" / "config.yaml"


def _load_schema_validator() -> Any:
    schema_text = resources.files("msictl.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at root")
    return loaded


def load_config(path: Path | None = None) -> Config:
    path = path or config_path()
    doc: dict[str, Any] = {}
    if path.exists():
        doc = _read_yaml(path)
        try:
            _load_schema_validator().validate(doc)
        except ValidationError as exc:
            where = ".".join(str(p) for p in exc.path)
            where = f" ({where})" if where else ""
            raise ConfigError(f"Schema validation failed for {path}{where}: {exc.message}") from exc
        LOGGER.debug("Loaded configuration from %s", path)

    defaults = Config()
    binary = os.environ.get(BINARY_ENV) or doc.get("binary", defaults.binary)
    return Config(
        binary=binary,
        log_level=doc.get("log_level", defaults.log_level).upper(),
        cache_availability=doc.get("cache_availability", defaults.cache_availability),
        settings_cache=doc.get("settings_cache", defaults.settings_cache),
    )
