from __future__ import annotations

import subprocess
import threading

import pytest

from msictl.core.errors import ProcessReportedError, ProcessStartError
from msictl.core.executor import AvailabilityCache, MsigdExecutor, classify, run_command
from msictl.core.model import RawResponse


def _cp(cmd: list[str], rc: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(cmd, rc, stdout=stdout, stderr=stderr)


def test_data_on_stdout_wins_over_exit_status() -> None:
    assert classify(RawResponse(returncode=1, stdout="brightness: 50", stderr="")) == "brightness: 50"


def test_data_on_stdout_wins_even_with_stderr() -> None:
    response = RawResponse(returncode=2, stdout="brightness: 50\n", stderr="cannot read hdcr")
    assert classify(response) == "brightness: 50\n"


def test_clean_exit_returns_stdout_even_when_empty() -> None:
    assert classify(RawResponse(returncode=0, stdout="", stderr="")) == ""
    assert classify(RawResponse(returncode=0, stdout="done", stderr="")) == "done"


def test_failure_surfaces_stderr() -> None:
    with pytest.raises(ProcessReportedError) as exc:
        classify(RawResponse(returncode=1, stdout="", stderr="device not found"))
    assert exc.value.detail == "device not found"
    assert "device not found" in str(exc.value)


def test_failure_without_stderr_surfaces_stdout() -> None:
    with pytest.raises(ProcessReportedError) as exc:
        classify(RawResponse(returncode=1, stdout="usage error", stderr=""))
    assert exc.value.detail == "usage error"

    with pytest.raises(ProcessReportedError) as exc:
        classify(RawResponse(returncode=1, stdout="", stderr=""))
    assert exc.value.detail == ""


def test_run_command_missing_binary_is_start_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(ProcessStartError) as exc:
        run_command("msigd", ["--list"])
    assert "msigd" in str(exc.value)


def test_run_command_permission_denied_is_start_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        raise PermissionError(13, "Permission denied", cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(ProcessStartError):
        run_command("/opt/msigd", ["--help"])


def test_executor_builds_command_lines(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        assert kwargs["check"] is False
        assert kwargs["capture_output"] is True
        return _cp(cmd, 0, stdout="brightness: 75\n")

    monkeypatch.setattr(subprocess, "run", fake_run)

    executor = MsigdExecutor("/usr/local/bin/msigd")
    executor.list_monitors()
    executor.query_monitor("2")
    assert calls == [
        ["/usr/local/bin/msigd", "--list"],
        ["/usr/local/bin/msigd", "--monitor", "2", "--query", "--numeric"],
    ]


def test_check_available_tolerates_nonzero_help(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: _cp(cmd, 1, stdout="Usage msigd"))
    assert MsigdExecutor().check_available() is True


def test_check_available_false_when_binary_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert MsigdExecutor().check_available() is False


def test_availability_cache_probes_once_until_reset() -> None:
    cache = AvailabilityCache()
    probes: list[int] = []

    def probe() -> bool:
        probes.append(1)
        return True

    assert cache.cached is None
    assert cache.get(probe) is True
    assert cache.get(probe) is True
    assert len(probes) == 1

    cache.reset()
    assert cache.cached is None
    assert cache.get(lambda: False) is False


def test_availability_cache_concurrent_readers_probe_once() -> None:
    cache = AvailabilityCache()
    probes: list[int] = []
    start = threading.Event()

    def probe() -> bool:
        probes.append(1)
        return True

    def reader() -> None:
        start.wait()
        assert cache.get(probe) is True

    threads = [threading.Thread(target=reader) for _ in range(8)]
    for thread in threads:
        thread.start()
    start.set()
    for thread in threads:
        thread.join()
    assert len(probes) == 1
