"""OpenTelemetry tracing for search stages."""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from functools import wraps
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

import structlog

if TYPE_CHECKING:
    from expboard_core.config.settings import Settings

logger = structlog.get_logger()

# Set by configure_tracing(); None while tracing is disabled
_tracer: Any = None

P = ParamSpec("P")
R = TypeVar("R")


def configure_tracing(settings: Settings) -> None:
    """Install a tracer provider for the configured exporter.

    OpenTelemetry is imported lazily so the default (``none``) never loads it.
    """
    global _tracer

    if settings.otel_exporter == "none":
        _tracer = None
        return

    from opentelemetry import trace
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider

    provider = TracerProvider(
        resource=Resource.create({"service.name": settings.otel_service_name})
    )

    if settings.otel_exporter == "console":
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    else:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        from opentelemetry.sdk.trace.export import BatchSpanProcessor

        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_endpoint))
        )

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer("expboard-search")
    logger.info("tracing_configured", exporter=settings.otel_exporter)


def get_tracer() -> Any:  # noqa: ANN401
    """Return the active tracer, or None when tracing is disabled."""
    return _tracer


def disable_tracing() -> None:
    """Turn tracing off (used by tests)."""
    global _tracer
    _tracer = None


def traced_stage(
    stage_name: str,
) -> Callable[
    [Callable[P, Coroutine[Any, Any, R]]], Callable[P, Coroutine[Any, Any, R]]
]:
    """Async decorator that wraps a search stage in a span.

    Noop when tracing is disabled.
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, R]],
    ) -> Callable[P, Coroutine[Any, Any, R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if _tracer is None:
                return await func(*args, **kwargs)
            with _tracer.start_as_current_span(f"search.{stage_name}") as span:
                span.set_attribute("search.stage", stage_name)
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    span.set_attribute("search.status", "error")
                    span.record_exception(exc)
                    raise
                span.set_attribute("search.status", "ok")
                return result

        return wrapper

    return decorator
