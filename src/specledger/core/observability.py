"""
Metrics and audit trail for the agent tools.

Both go out as log records: metrics on ``specledger.core.observability.metrics``
(payload in ``record.metric``), audit events on ``...audit`` (payload in
``record.audit``). Whatever handler ``EngineConfig.setup_logging()`` installed
decides where they end up.

    @mcp.tool(name="spec-read")
    @mcp_tool(tool_name="spec-read")
    def spec_read(spec: str) -> dict:
        ...
"""

import asyncio
import functools
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class MetricType(Enum):
    COUNTER = "counter"
    TIMER = "timer"


class AuditEventType(Enum):
    """What an audit record is about."""

    TOOL_INVOCATION = "tool_invocation"
    DOCUMENT_WRITE = "document_write"
    WRITE_CONFLICT = "write_conflict"
    BACKFILL = "backfill"


@dataclass
class Metric:
    name: str
    value: Union[int, float]
    metric_type: MetricType
    labels: Dict[str, str] = field(default_factory=dict)
    timestamp: str = field(default_factory=_utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "type": self.metric_type.value,
            "labels": self.labels,
            "timestamp": self.timestamp,
        }


@dataclass
class AuditEvent:
    event_type: AuditEventType
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=_utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {"event_type": self.event_type.value, "timestamp": self.timestamp, "details": self.details}


class MetricsCollector:
    """Counters and timers, each logged as one INFO record named ``<prefix>.<metric>``."""

    def __init__(self, prefix: str = "specledger"):
        self.prefix = prefix
        self._logger = logging.getLogger(f"{__name__}.metrics")

    def emit(self, metric: Metric) -> None:
        self._logger.info("METRIC: %s.%s", self.prefix, metric.name, extra={"metric": metric.to_dict()})

    def counter(self, name: str, value: int = 1, labels: Optional[Dict[str, str]] = None) -> None:
        self.emit(Metric(name, value, MetricType.COUNTER, labels or {}))

    def timer(self, name: str, duration_ms: float, labels: Optional[Dict[str, str]] = None) -> None:
        """Record a duration in milliseconds."""
        self.emit(Metric(name, duration_ms, MetricType.TIMER, labels or {}))


class AuditLogger:
    """Who called which tool, and which documents were written."""

    def __init__(self):
        self._logger = logging.getLogger(f"{__name__}.audit")

    def log(self, event: AuditEvent) -> None:
        self._logger.info("AUDIT: %s", event.event_type.value, extra={"audit": event.to_dict()})

    def tool_invocation(self, tool_name: str, success: bool = True, duration_ms: Optional[float] = None, **details: Any) -> None:
        details = {"tool": tool_name, "success": success, "duration_ms": duration_ms, **details}
        self.log(AuditEvent(AuditEventType.TOOL_INVOCATION, details))


_metrics = MetricsCollector()
_audit = AuditLogger()


def get_metrics() -> MetricsCollector:
    return _metrics


def audit_log(event_type: str, **details: Any) -> None:
    """
    Record an audit event by name.

    Names outside :class:`AuditEventType` are filed as tool invocations,
    with the given name kept under ``original_event_type``.
    """
    try:
        kind = AuditEventType(event_type)
    except ValueError:
        kind = AuditEventType.TOOL_INVOCATION
        details["original_event_type"] = event_type
    _audit.log(AuditEvent(kind, details))


class _Invocation:
    """Outcome of one tool call, reported once the call returns or raises."""

    def __init__(self, name: str, emit_metrics: bool, audit: bool):
        self.name = name
        self.emit_metrics = emit_metrics
        self.audit = audit
        self.success = True
        self.error: Optional[str] = None
        self.started = time.perf_counter()

    def check(self, result: Any) -> Any:
        # Tools report engine errors as envelopes rather than raising
        if isinstance(result, dict) and result.get("success") is False:
            self.success, self.error = False, result.get("error")
        return result

    def failed(self, exc: Exception) -> None:
        self.success, self.error = False, str(exc)

    def finish(self) -> None:
        elapsed_ms = (time.perf_counter() - self.started) * 1000
        if self.emit_metrics:
            status = "success" if self.success else "error"
            _metrics.counter("tool.invocations", labels={"tool": self.name, "status": status})
            _metrics.timer("tool.latency", elapsed_ms, labels={"tool": self.name})
        if self.audit:
            _audit.tool_invocation(self.name, self.success, round(elapsed_ms, 2), error=self.error)


def mcp_tool(
    tool_name: Optional[str] = None, emit_metrics: bool = True, audit: bool = True
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Wrap a tool handler with an invocation counter, a latency timer and an audit entry.

    A call fails when it raises (the exception propagates) or when it
    returns an error envelope.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = tool_name or func.__name__

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> T:
                call = _Invocation(name, emit_metrics, audit)
                try:
                    return call.check(await func(*args, **kwargs))
                except Exception as exc:
                    call.failed(exc)
                    raise
                finally:
                    call.finish()

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> T:
            call = _Invocation(name, emit_metrics, audit)
            try:
                return call.check(func(*args, **kwargs))
            except Exception as exc:
                call.failed(exc)
                raise
            finally:
                call.finish()

        return sync_wrapper

    return decorator
