"""Unit tests for observability module."""

import json
import logging

from opentelemetry.sdk.trace import TracerProvider
import pytest
from rdflib import Literal, Namespace

from rdf_textsearch.config import reset_settings
from rdf_textsearch.observability import (
    INDEX_REBUILDS,
    JsonFormatter,
    SEARCH_LATENCY,
    configure_logging,
    configure_logging_from_settings,
    create_span,
    get_metrics,
    get_metrics_content_type,
    get_trace_context,
    index_context,
    init_tracing,
    set_trace_context,
    track_latency,
)
from rdf_textsearch.observability import metrics as metrics_module, tracing as tracing_module
from rdf_textsearch.observability.context import update_span_id
from rdf_textsearch.search.text_index import TextIndex
from rdf_textsearch.terms import Quad


EX = Namespace("http://example.org/")


def _record(msg="test message", level=logging.INFO):
    return logging.LogRecord(
        name="rdf_textsearch.search.text_index",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


class _FormattingHandler(logging.Handler):
    """Formats records as they are emitted, while the caller's context is live."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.lines = []

    def emit(self, record):
        self.lines.append(JsonFormatter().format(record))


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestJsonFormatter:
    """Tests for structured JSON logging."""

    def test_format_includes_trace_context(self):
        data = json.loads(JsonFormatter().format(_record()))

        assert data["message"] == "test message"
        assert data["level"] == "INFO"
        assert data["component"] == "text_index"
        assert "timestamp" in data
        assert "trace_id" in data
        assert "span_id" in data

    def test_format_includes_extra_fields(self):
        record = _record()
        record.documents = 3

        data = json.loads(JsonFormatter().format(record))

        assert data["documents"] == 3
        assert "lineno" not in data

    def test_format_includes_index_from_context(self):
        set_trace_context("aa" * 16, "bb" * 8, index="description")

        data = json.loads(JsonFormatter().format(_record()))

        assert data["index"] == "description"
        assert data["trace_id"] == "aa" * 16

    def test_format_truncates_and_redacts(self):
        record = _record(msg="x" * 5000)
        record.api_key = "secret"

        data = json.loads(JsonFormatter().format(record))

        assert data["message"].endswith("...")
        assert data["api_key"] == "[REDACTED]"

    def test_json_default_handles_set_and_bytes(self):
        formatter = JsonFormatter()

        assert formatter._json_default({3, 1, 2}) == [1, 2, 3]
        assert formatter._json_default(b"ok") == "ok"

    def test_json_default_handles_unorderable_set(self):
        value = JsonFormatter()._json_default({1, "a"})

        assert isinstance(value, list)
        assert len(value) == 2


@pytest.mark.unit
class TestConfigureLogging:
    def test_json_handler_installed(self, restore_root_logger):
        configure_logging("debug", json_output=True)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

    def test_plain_handler_and_overrides(self, restore_root_logger):
        configure_logging("info", json_output=False, logger_levels={"rdf_textsearch.dataset": "error"})

        assert not isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("rdf_textsearch.dataset").level == logging.ERROR

    def test_from_settings(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("RDF_TEXTSEARCH_LOG_LEVEL", "warning")
        monkeypatch.setenv("RDF_TEXTSEARCH_LOG_JSON", "false")
        reset_settings()

        configure_logging_from_settings()

        assert restore_root_logger.level == logging.WARNING
        assert not isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)


@pytest.mark.unit
class TestTraceContext:
    def test_get_trace_context_generates_ids(self):
        ctx = get_trace_context()

        assert len(ctx["trace_id"]) == 32
        assert len(ctx["span_id"]) == 16

    def test_update_span_id_preserves_trace_id(self):
        set_trace_context("aa" * 16, "bb" * 8, index="alpha")
        update_span_id("cc" * 8)

        ctx = get_trace_context()

        assert ctx["trace_id"] == "aa" * 16
        assert ctx["span_id"] == "cc" * 8
        assert ctx["index"] == "alpha"

    def test_index_context_restores_previous(self):
        set_trace_context("aa" * 16, "bb" * 8)

        with index_context("alpha"):
            assert get_trace_context()["index"] == "alpha"

        assert "index" not in get_trace_context()
        assert get_trace_context()["trace_id"] == "aa" * 16

    def test_search_logs_carry_index_name(self):
        index_logger = logging.getLogger("rdf_textsearch.search.text_index")
        handler = _FormattingHandler()
        level = index_logger.level
        index_logger.addHandler(handler)
        index_logger.setLevel(logging.DEBUG)
        try:
            index = TextIndex([EX.label], name="labels")
            index.add(Quad(EX.subject0, EX.label, Literal("test")))
            index.search("test")
        finally:
            index_logger.removeHandler(handler)
            index_logger.setLevel(level)

        assert handler.lines
        assert all(json.loads(line)["index"] == "labels" for line in handler.lines)


@pytest.mark.unit
class TestTracing:
    def test_init_tracing_applies_resource_attributes(self):
        provider = init_tracing("test-service", resource_attributes={"service.version": "2.0.0"})

        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "test-service"
        assert provider.resource.attributes["service.version"] == "2.0.0"

    def test_get_tracer_initializes_when_missing(self):
        tracing_module._tracer_holder["tracer"] = None

        assert tracing_module.get_tracer() is not None

    def test_create_span_updates_context(self):
        init_tracing("test-service")

        with create_span("test.operation", attributes={"test.key": "value"}) as span:
            span_id = format(span.get_span_context().span_id, "016x")

        assert get_trace_context()["span_id"] == span_id

    def test_create_span_reraises(self):
        with pytest.raises(RuntimeError, match="boom"):
            with create_span("test.failure"):
                raise RuntimeError("boom")


@pytest.mark.unit
class TestMetrics:
    def test_track_latency_observes(self):
        with track_latency(SEARCH_LATENCY, index="latency-test"):
            pass

        assert b'textsearch_search_latency_seconds_count{index="latency-test"} 1.0' in get_metrics()

    def test_index_rebuilds_counted_once_per_change(self):
        index = TextIndex([EX.label], name="rebuild-test")
        counter = metrics_module._INDEX_REBUILDS_PROM.labels(index="rebuild-test")
        before = counter._value.get()

        index.add(Quad(EX.subject0, EX.label, Literal("test")))
        index.search("test")
        index.search("test")

        assert counter._value.get() == before + 1

    def test_document_count_gauge(self):
        index = TextIndex([EX.label], name="gauge-test")
        index.add(Quad(EX.subject0, EX.label, Literal("test")))
        index.add(Quad(EX.subject1, EX.label, Literal("text")))

        index.search("test")

        assert metrics_module._INDEX_DOC_COUNT_PROM.labels(index="gauge-test")._value.get() == 2

    def test_counter_bridge_accepts_labels(self):
        INDEX_REBUILDS.labels(index="bridge-test").inc()

        assert metrics_module._INDEX_REBUILDS_PROM.labels(index="bridge-test")._value.get() == 1

    def test_unknown_kind_raises(self):
        bridge = metrics_module.MetricBridge(
            metrics_module._INDEX_REBUILDS_PROM,
            otel_name="bogus",
            otel_description="bogus",
            otel_kind="summary",
        )

        with pytest.raises(ValueError, match="Unknown metric kind"):
            bridge.inc({"index": "bogus"}, 1.0)

    def test_content_type(self):
        assert get_metrics_content_type().startswith("text/plain")
