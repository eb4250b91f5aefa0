"""msigd process invocation and outcome classification."""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Callable, Sequence

from msictl.core.codec import HELP_ARGS, LIST_ARGS, build_query_args
from msictl.core.errors import ProcessReportedError, ProcessStartError
from msictl.core.model import RawResponse

DEFAULT_BINARY = "msigd"
LOGGER = logging.getLogger(__name__)


def run_command(binary: str, args: Sequence[str]) -> RawResponse:
    cmd = [binary, *args]
    LOGGER.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        raise ProcessStartError(f"Failed to execute {binary}: {exc}") from exc
    return RawResponse(
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
    )


def classify(response: RawResponse) -> str:
    """Return msigd's stdout on success, raise ``ProcessReportedError`` otherwise.

    msigd exits non-zero when some settings cannot be read even though the
    rest were printed, so ``key: value`` data on stdout counts as success
    whatever the exit status says.
    """
    if response.stdout and ":" in response.stdout:
        if response.returncode != 0:
            LOGGER.info(
                "msigd exited with status %d but produced data; treating as success",
                response.returncode,
            )
        return response.stdout
    if response.returncode == 0:
        return response.stdout
    if response.stderr:
        raise ProcessReportedError(response.stderr)
    raise ProcessReportedError(response.stdout)


class AvailabilityCache:
    """Write-once memo of whether msigd can be launched.

    The first ``get`` runs the probe under a lock; every later call returns
    the stored answer without locking until ``reset`` clears it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: bool | None = None

    def get(self, probe: Callable[[], bool]) -> bool:
        value = self._value
        if value is not None:
            return value
        with self._lock:
            if self._value is None:
                self._value = probe()
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = None

    @property
    def cached(self) -> bool | None:
        return self._value


class MsigdExecutor:
    def __init__(self, binary: str = DEFAULT_BINARY) -> None:
        self.binary = binary

    def execute(self, args: Sequence[str]) -> str:
        return classify(run_command(self.binary, args))

    def list_monitors(self) -> str:
        return self.execute(LIST_ARGS)

    def query_monitor(self, monitor_id: str) -> str:
        return self.execute(build_query_args(monitor_id))

    def check_available(self) -> bool:
        try:
            self.execute(HELP_ARGS)
        except ProcessReportedError:
            # --help exits non-zero on some builds.
            return True
        except ProcessStartError as exc:
            LOGGER.warning("%s", exc)
            return False
        return True
