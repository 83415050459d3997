"""Tests for observability/tracing.py."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from expboard_search.observability import tracing
from expboard_search.observability.tracing import (
    configure_tracing,
    disable_tracing,
    get_tracer,
    traced_stage,
)


def _make_settings(**overrides: object) -> SimpleNamespace:
    """Create a minimal mock settings object."""
    defaults: dict[str, object] = {
        "otel_exporter": "none",
        "otel_endpoint": "http://localhost:4317",
        "otel_service_name": "test-service",
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _mock_tracer() -> tuple[MagicMock, MagicMock]:
    mock_span = MagicMock()
    mock_span.__enter__ = MagicMock(return_value=mock_span)
    mock_span.__exit__ = MagicMock(return_value=False)
    mock_tracer = MagicMock()
    mock_tracer.start_as_current_span.return_value = mock_span
    return mock_tracer, mock_span


@pytest.mark.unit
class TestConfigureTracing:
    """Tests for configure_tracing."""

    def test_configure_tracing_none(self) -> None:
        """'none' exporter leaves tracing off."""
        configure_tracing(_make_settings(otel_exporter="none"))  # type: ignore[arg-type]
        assert get_tracer() is None

    def test_configure_tracing_console(self) -> None:
        """'console' exporter creates a tracer."""
        configure_tracing(_make_settings(otel_exporter="console"))  # type: ignore[arg-type]
        assert get_tracer() is not None
        disable_tracing()
        assert get_tracer() is None


@pytest.mark.unit
class TestTracedStage:
    """Tests for the traced_stage decorator."""

    @pytest.mark.asyncio
    async def test_noop_when_disabled(self) -> None:
        """Decorated coroutine runs normally when tracing is disabled."""

        @traced_stage("geocode_lookup")
        async def stage(x: int) -> int:
            return x * 2

        assert await stage(5) == 10

    @pytest.mark.asyncio
    async def test_creates_span(self) -> None:
        """With a tracer active, a span named after the stage is opened."""
        mock_tracer, mock_span = _mock_tracer()
        tracing._tracer = mock_tracer

        @traced_stage("semantic_match")
        async def stage() -> str:
            return "done"

        assert await stage() == "done"
        mock_tracer.start_as_current_span.assert_called_once_with("search.semantic_match")
        mock_span.set_attribute.assert_any_call("search.stage", "semantic_match")
        mock_span.set_attribute.assert_any_call("search.status", "ok")

    @pytest.mark.asyncio
    async def test_records_exception(self) -> None:
        """Exceptions are recorded on the span and re-raised."""
        mock_tracer, mock_span = _mock_tracer()
        tracing._tracer = mock_tracer

        @traced_stage("search")
        async def stage() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await stage()
        mock_span.set_attribute.assert_any_call("search.status", "error")
        mock_span.record_exception.assert_called_once()
