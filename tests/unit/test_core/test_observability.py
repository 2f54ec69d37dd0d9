"""Tests for the tool observability decorator and audit helpers."""

import asyncio
import logging

import pytest

from specledger.core.observability import (
    AuditEventType,
    MetricsCollector,
    audit_log,
    mcp_tool,
)

AUDIT_LOGGER = "specledger.core.observability.audit"
METRICS_LOGGER = "specledger.core.observability.metrics"


def _audit_records(caplog):
    return [r.audit for r in caplog.records if r.name == AUDIT_LOGGER]


def _metric_records(caplog):
    return [r.metric for r in caplog.records if r.name == METRICS_LOGGER]


class TestMcpTool:
    def test_successful_call(self, caplog):
        @mcp_tool(tool_name="spec-read")
        def handler(spec):
            return {"success": True, "data": {"spec": spec}}

        with caplog.at_level(logging.INFO, logger="specledger.core.observability"):
            assert handler("001")["data"] == {"spec": "001"}

        audit = _audit_records(caplog)
        assert audit[-1]["details"]["tool"] == "spec-read"
        assert audit[-1]["details"]["success"] is True
        counters = [m for m in _metric_records(caplog) if m["name"] == "tool.invocations"]
        assert counters[-1]["labels"] == {"tool": "spec-read", "status": "success"}

    def test_error_envelope_counts_as_failure(self, caplog):
        @mcp_tool(tool_name="spec-update")
        def handler():
            return {"success": False, "error": "Content conflict", "data": {}}

        with caplog.at_level(logging.INFO, logger="specledger.core.observability"):
            handler()

        details = _audit_records(caplog)[-1]["details"]
        assert details["success"] is False
        assert details["error"] == "Content conflict"

    def test_exceptions_propagate_and_are_recorded(self, caplog):
        @mcp_tool()
        def exploding():
            raise RuntimeError("boom")

        with caplog.at_level(logging.INFO, logger="specledger.core.observability"):
            with pytest.raises(RuntimeError):
                exploding()

        details = _audit_records(caplog)[-1]["details"]
        assert details["tool"] == "exploding"
        assert details["error"] == "boom"

    def test_async_handlers_stay_async(self, caplog):
        @mcp_tool(tool_name="spec-deps", emit_metrics=False)
        async def handler():
            return {"success": True}

        with caplog.at_level(logging.INFO, logger="specledger.core.observability"):
            assert asyncio.run(handler()) == {"success": True}

        assert _metric_records(caplog) == []
        assert _audit_records(caplog)[-1]["details"]["tool"] == "spec-deps"


class TestAuditLog:
    def test_known_event_type(self, caplog):
        with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER):
            audit_log("document_write", spec="001-a", operation="update-section")
        event = _audit_records(caplog)[-1]
        assert event["event_type"] == AuditEventType.DOCUMENT_WRITE.value
        assert event["details"] == {"spec": "001-a", "operation": "update-section"}

    def test_unknown_event_type_keeps_original_name(self, caplog):
        with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER):
            audit_log("custom_thing", spec="001-a")
        event = _audit_records(caplog)[-1]
        assert event["event_type"] == "tool_invocation"
        assert event["details"]["original_event_type"] == "custom_thing"

    def test_event_types_cover_emitted_events(self):
        assert {e.value for e in AuditEventType} == {"tool_invocation", "document_write", "write_conflict", "backfill"}


def test_metrics_collector_prefix(caplog):
    collector = MetricsCollector(prefix="testing")
    with caplog.at_level(logging.INFO, logger=METRICS_LOGGER):
        collector.timer("write.latency", 12.5, labels={"spec": "001"})
    record = [r for r in caplog.records if r.name == METRICS_LOGGER][-1]
    assert record.getMessage() == "METRIC: testing.write.latency"
    assert record.metric["type"] == "timer"
    assert record.metric["value"] == 12.5
