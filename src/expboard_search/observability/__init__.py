"""Observability: structured logging and tracing."""

from expboard_search.observability.logging import (
    bind_search_context,
    clear_search_context,
    configure_logging,
)
from expboard_search.observability.tracing import (
    configure_tracing,
    disable_tracing,
    get_tracer,
    traced_stage,
)

__all__ = [
    "bind_search_context",
    "clear_search_context",
    "configure_logging",
    "configure_tracing",
    "disable_tracing",
    "get_tracer",
    "traced_stage",
]
