from __future__ import annotations

import pytest

from vimnote.runtime import telemetry
from vimnote.runtime.telemetry import TelemetrySettings


@pytest.fixture(autouse=True)
def restore_telemetry():
    yield
    telemetry.configure()


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIMNOTE_LOG_LEVEL", "debug")
    monkeypatch.setenv("VIMNOTE_LOG_JSON", "yes")
    monkeypatch.setenv("VIMNOTE_DISABLE_CONSOLE", "1")
    monkeypatch.setenv("VIMNOTE_LOG_BUFFER_SIZE", "not-a-number")

    settings = TelemetrySettings.from_env()

    assert settings.level == "DEBUG"
    assert settings.json_format is True
    assert settings.console is False
    assert settings.buffer_size == 2048


def test_presets() -> None:
    assert TelemetrySettings.preset("development").level == "DEBUG"
    production = TelemetrySettings.preset("production")
    assert production.buffered is True
    assert production.console is False
    assert TelemetrySettings.preset("quiet").level == "ERROR"

    with pytest.raises(ValueError):
        TelemetrySettings.preset("loud")


def test_configure_rejects_settings_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(TelemetrySettings(), preset="quiet")


def test_configure_swaps_active_settings_and_logger_cache() -> None:
    before = telemetry.get_logger("vimnote.test")

    applied = telemetry.configure(preset="quiet")

    assert telemetry.active_settings() is applied
    assert telemetry.get_logger("vimnote.test") is not before


def test_span_reraises_and_records_failure() -> None:
    telemetry.configure(preset="quiet")

    with pytest.raises(RuntimeError):
        with telemetry.span("test::boom", component=True, metadata={"k": 1}) as handle:
            handle.add_metadata("stage", "inside")
            raise RuntimeError("boom")
