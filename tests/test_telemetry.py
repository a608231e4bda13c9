"""
Tests for tracing setup and the JSON log formatter.
"""

from __future__ import annotations

import json
import logging

from opentelemetry import trace

from conftest import make_settings
from gateway.main import create_app
from gateway.telemetry.logging import _JSON_FORMAT, _SafeOtelFormatter
from gateway.telemetry.tracing import setup_tracing


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("gateway.test", logging.INFO, __file__, 1, message, None, None)


class TestTracingSetup:
    def test_provider_installed_once(self):
        first = setup_tracing()
        assert setup_tracing() is first
        assert trace.get_tracer_provider() is first

    def test_repeated_app_creation_keeps_provider(self):
        create_app(make_settings())
        provider = trace.get_tracer_provider()
        create_app(make_settings())
        assert trace.get_tracer_provider() is provider


class TestJsonFormatter:
    def test_record_inside_span_carries_its_ids(self):
        setup_tracing()
        formatter = _SafeOtelFormatter(_JSON_FORMAT)
        tracer = trace.get_tracer(__name__)

        with tracer.start_as_current_span("unit") as span:
            line = json.loads(formatter.format(_record("inside")))
            context = span.get_span_context()

        assert line["trace_id"] == trace.format_trace_id(context.trace_id)
        assert line["span_id"] == trace.format_span_id(context.span_id)
        assert line["trace_id"] != "0"
        assert line["service"] == "problem-solver-gateway"

    def test_record_outside_span_gets_zero_ids(self):
        line = json.loads(_SafeOtelFormatter(_JSON_FORMAT).format(_record("outside")))
        assert line["trace_id"] == "0"
        assert line["span_id"] == "0"
        assert line["message"] == "outside"
