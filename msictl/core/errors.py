"""Domain-specific errors for msictl."""

from __future__ import annotations


class MsictlError(Exception):
    """Base error for msictl."""


class SettingValidationError(MsictlError):
    """Raised when a value falls outside a setting's declared domain."""

    def __init__(self, message: str, *, setting: str, allowed: str) -> None:
        super().__init__(message)
        self.setting = setting
        self.allowed = allowed


class DeviceSelectionError(MsictlError):
    """Raised when a monitor id cannot be resolved to a single connected monitor."""


class ConfigError(MsictlError):
    """Raised when the configuration file cannot be read or is invalid."""


class ProcessError(MsictlError):
    """Base error for msigd invocation problems."""


class ProcessStartError(ProcessError):
    """Raised when the msigd binary could not be launched at all."""


class ProcessReportedError(ProcessError):
    """Raised when msigd ran but its output and exit status indicate failure."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"msigd command failed: {detail.strip() or '<no output>'}")
        self.detail = detail
