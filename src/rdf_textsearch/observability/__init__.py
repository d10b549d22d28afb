"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from rdf_textsearch.observability.context import get_trace_context, index_context, set_trace_context, trace_context
from rdf_textsearch.observability.logging import (
    JsonFormatter,
    configure_logging,
    configure_logging_from_settings,
)
from rdf_textsearch.observability.metrics import (
    INDEX_DOC_COUNT,
    INDEX_REBUILDS,
    SEARCH_LATENCY,
    get_metrics,
    get_metrics_content_type,
    init_metrics,
    track_latency,
)
from rdf_textsearch.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "INDEX_DOC_COUNT",
    "INDEX_REBUILDS",
    "SEARCH_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "index_context",
    "init_metrics",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
