from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from msictl.api import Client, Config, ProcessStartError, SettingInfo, SettingValidationError
from msictl.core.model import ColorRgb, Monitor


def _cp(cmd: list[str], rc: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(cmd, rc, stdout=stdout, stderr=stderr)


@pytest.fixture
def client(tmp_path: Path) -> Client:
    return Client(config=Config(), state_file=tmp_path / "state.json")


def test_public_client_lists_monitors(monkeypatch: pytest.MonkeyPatch, client: Client) -> None:
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda cmd, **kwargs: _cp(cmd, 0, stdout="1,A02019010700,MS,MAG274QRF-QD,/dev/hidraw4\n"),
    )
    assert client.list_monitors() == [Monitor(id="1", serial="A02019010700", model="MAG274QRF-QD")]


def test_public_client_partial_query_succeeds(monkeypatch: pytest.MonkeyPatch, client: Client) -> None:
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda cmd, **kwargs: _cp(cmd, 1, stdout="brightness: 50\ncolor_rgb: 10:20:30\n", stderr="hdcr unsupported"),
    )
    settings = client.get_settings("1")
    assert settings.brightness == 50
    assert settings.color_rgb == ColorRgb(10, 20, 30)
    assert client.get_cached_settings("1") == settings


def test_public_client_set_setting(monkeypatch: pytest.MonkeyPatch, client: Client) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return _cp(cmd, 0)

    monkeypatch.setattr(subprocess, "run", fake_run)

    result = client.set_setting("1", "game_mode", "fps")
    assert result.value == "fps"
    assert calls == [["msigd", "--monitor", "1", "--game_mode", "fps"]]


def test_public_client_validation_before_process(monkeypatch: pytest.MonkeyPatch, client: Client) -> None:
    def fake_run(cmd, **kwargs):
        raise AssertionError("msigd must not run for invalid values")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(SettingValidationError):
        client.set_color_rgb("1", 0, 0, 101)


def test_public_client_availability(monkeypatch: pytest.MonkeyPatch, client: Client) -> None:
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert client.check_available() is False
    with pytest.raises(ProcessStartError):
        client.list_monitors()


def test_public_client_setting_catalog(client: Client) -> None:
    catalog = client.setting_catalog()
    assert all(isinstance(info, SettingInfo) for info in catalog)
    by_name = {info.name: info for info in catalog}
    assert by_name["osd_timeout"].allowed == "0-30"
    assert by_name["osd_timeout"].default == 20
    assert client.describe_setting("audio_source") == "analog, digital"
