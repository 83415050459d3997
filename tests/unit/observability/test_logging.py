"""Tests for observability/logging.py."""

from __future__ import annotations

import io
import logging
from types import SimpleNamespace

import pytest
import structlog
from structlog.contextvars import get_contextvars

from expboard_search.observability.logging import (
    bind_search_context,
    clear_search_context,
    configure_logging,
    resolve_level,
)


def _make_settings(**overrides: object) -> SimpleNamespace:
    """Create a minimal mock settings object."""
    defaults: dict[str, object] = {"log_format": "console", "log_level": "INFO"}
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_console_mode(self) -> None:
        """Console mode configures without error."""
        configure_logging(_make_settings(log_format="console"))  # type: ignore[arg-type]
        assert structlog.get_logger() is not None

    def test_json_mode(self) -> None:
        """JSON mode renders stdlib records as JSON."""
        configure_logging(_make_settings(log_format="json"))  # type: ignore[arg-type]

        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.getLogger().handlers[0].formatter)
        target = logging.getLogger("test_json_mode")
        target.addHandler(handler)
        target.setLevel(logging.INFO)
        target.info("geocode_lookup")
        target.removeHandler(handler)

        output = stream.getvalue()
        assert '"event": "geocode_lookup"' in output

    def test_sets_level(self) -> None:
        """Log level is applied to the root logger."""
        configure_logging(_make_settings(log_level="WARNING"))  # type: ignore[arg-type]
        assert logging.getLogger().level == logging.WARNING

    def test_quiets_http_loggers(self) -> None:
        """httpx is held at WARNING even in debug mode."""
        configure_logging(_make_settings(log_level="DEBUG"))  # type: ignore[arg-type]
        assert logging.getLogger("httpx").level == logging.WARNING


@pytest.mark.unit
class TestSearchContext:
    """Tests for bind/clear search context."""

    def test_bind_and_clear(self) -> None:
        """The generation is bound and then cleared."""
        bind_search_context(7, query="design")
        assert get_contextvars() == {"search_generation": 7, "query": "design"}
        clear_search_context()
        assert get_contextvars() == {}


@pytest.mark.unit
class TestResolveLevel:
    """Tests for resolve_level."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
            ("debug", logging.DEBUG),
            ("unknown", logging.INFO),
        ],
    )
    def test_resolve_level(self, name: str, expected: int) -> None:
        """Level names resolve to logging constants."""
        assert resolve_level(name) == expected
