"""Unit tests for structlog configuration."""

import pytest
import structlog

from infrastructure.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def _renderer():
    return structlog.get_config()["processors"][-1]


def test_force_color_uses_console_renderer(monkeypatch):
    monkeypatch.setenv("FORCE_COLOR", "1")

    configure_logging()

    assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)


def test_non_tty_uses_json_renderer(monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setattr("sys.stdout.isatty", lambda: False)

    configure_logging()

    assert isinstance(_renderer(), structlog.processors.JSONRenderer)


def test_level_filters_lower_events(monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setattr("sys.stdout.isatty", lambda: False)

    configure_logging("warning")

    wrapper = structlog.get_config()["wrapper_class"]
    assert wrapper.info is not wrapper.warning
    assert wrapper.__name__ == "BoundLoggerFilteringAtWarning"
