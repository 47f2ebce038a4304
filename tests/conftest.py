"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
import logging
from typing import Any

import pytest

from jsonlayout import EventEncoder, JsonLayout, LogEvent, StaticPathLookup, resolve_labels
from jsonlayout.core import LayoutSettings

TEST_HOST = "test-host"


@pytest.fixture
def make_event() -> Callable[..., LogEvent]:
    """Factory for events with sensible defaults; keyword arguments override them."""

    def _make(**overrides: Any) -> LogEvent:
        values: dict[str, Any] = {
            "level": "INFO",
            "logger_name": "svc.Main",
            "message": "started",
            "thread_name": "main",
            "timestamp": 0,
        }
        values.update(overrides)
        return LogEvent(**values)

    return _make


@pytest.fixture
def make_encoder() -> Callable[..., EventEncoder]:
    """Factory for encoders built from raw configuration strings."""

    def _make(
        *,
        included_fields: str | None = None,
        excluded_fields: str | None = None,
        renamed_field_labels: str | None = None,
        fields: dict[str, str] | None = None,
        tags: tuple[str, ...] = (),
        path: str | None = None,
    ) -> EventEncoder:
        labels = resolve_labels(included_fields, excluded_fields, renamed_field_labels)
        return EventEncoder(
            labels,
            host_name=TEST_HOST,
            fields=fields,
            tags=tags,
            path_lookup=StaticPathLookup(path),
        )

    return _make


@pytest.fixture
def layout() -> JsonLayout:
    """Activated layout with a fixed host name."""
    layout = JsonLayout(host_name=TEST_HOST)
    layout.activate_options()
    return layout


@pytest.fixture
def test_settings() -> LayoutSettings:
    """Settings that ignore the process environment and any .env file."""
    return LayoutSettings(host_name=TEST_HOST, _env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def isolated_logger(request: pytest.FixtureRequest) -> Generator[logging.Logger, None, None]:
    """Non-propagating logger whose handlers are closed and removed afterwards."""
    logger = logging.getLogger(f"tests.{request.node.name}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
