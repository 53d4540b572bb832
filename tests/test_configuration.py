"""Mini README: Tests for environment driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gastozero.configuration import GastoZeroSettings


def test_settings_read_prefixed_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("GASTOZERO_DATA_DIRECTORY", str(tmp_path / "ledger"))
    monkeypatch.setenv("GASTOZERO_INTERFACE_PORT", "9000")
    monkeypatch.setenv("GASTOZERO_LOG_LEVEL", "debug")

    settings = GastoZeroSettings()

    assert settings.data_directory == (tmp_path / "ledger").resolve()
    assert settings.data_directory.is_dir()
    assert settings.interface_port == 9000
    assert settings.log_level == "DEBUG"


def test_settings_reject_unknown_log_level(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("GASTOZERO_DATA_DIRECTORY", str(tmp_path))
    monkeypatch.setenv("GASTOZERO_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        GastoZeroSettings()


@pytest.mark.parametrize(("environment", "expected"), [("production", True), (" Production ", True), ("development", False)])
def test_settings_recognise_production_environment(tmp_path, monkeypatch, environment: str, expected: bool) -> None:
    monkeypatch.setenv("GASTOZERO_DATA_DIRECTORY", str(tmp_path))
    monkeypatch.setenv("GASTOZERO_ENVIRONMENT", environment)

    assert GastoZeroSettings().is_production is expected
