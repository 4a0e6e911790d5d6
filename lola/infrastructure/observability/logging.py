import structlog
import logging
import sys
from typing import Dict, Any, List, Optional
import os


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    service_name: str = "lola-agent"
) -> None:
    """Setup structured logging configuration"""

    # stderr keeps the CLI's stdout reserved for answers
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True
    )

    # HTTP client and bot libraries are chatty at INFO
    for noisy in ("httpx", "httpcore", "openai", "telegram.ext"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    processors = [
        structlog.stdlib.filter_by_level,
        # Picks up session_id/job_id bound per job by the job runner
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(
        service=service_name,
        environment=os.getenv("ENVIRONMENT", "development")
    )


class AgentLogger:
    """Specialized logger for agent operations"""

    def __init__(self, name: str):
        self.logger = structlog.get_logger(name)

    def log_job_event(
        self,
        event_type: str,
        session_id: str,
        data: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Log job lifecycle events (started, completed, failed)"""

        self.logger.info(
            "job_event",
            event_type=event_type,
            session_id=session_id,
            data=data or {},
            **kwargs
        )

    def log_tool_execution(
        self,
        tool_name: str,
        session_id: str,
        input_data: Dict[str, Any],
        output_preview: Optional[str] = None,
        duration_ms: Optional[float] = None,
        success: bool = True,
        error: Optional[str] = None
    ):
        """Log tool execution events"""

        self.logger.info(
            "tool_execution",
            tool_name=tool_name,
            session_id=session_id,
            input_data=input_data,
            output_preview=output_preview,
            duration_ms=duration_ms,
            success=success,
            error=error
        )

    def log_step_transition(
        self,
        session_id: str,
        from_node: str,
        to_node: str,
        step_count: int,
        step_limit: int
    ):
        """Log step-loop state transitions"""

        self.logger.debug(
            "step_transition",
            session_id=session_id,
            from_node=from_node,
            to_node=to_node,
            step_count=step_count,
            step_limit=step_limit
        )

    def log_session_event(
        self,
        session_id: str,
        action: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Log session registry and memory updates"""

        self.logger.info(
            "session_event",
            session_id=session_id,
            action=action,
            details=details or {}
        )


# Global logger instance
agent_logger = AgentLogger("lola")


def metric_key(name: str, tags: Optional[Dict[str, str]] = None) -> str:
    """``name`` or ``name{k=v,...}`` with tags in sorted order"""

    if not tags:
        return name
    labels = ",".join(f"{k}={v}" for k, v in sorted(tags.items()))
    return f"{name}{{{labels}}}"


class LatencyStats:
    __slots__ = ("count", "total_ms", "min_ms", "max_ms")

    def __init__(self):
        self.count = 0
        self.total_ms = 0.0
        self.min_ms = float("inf")
        self.max_ms = 0.0

    def add(self, duration_ms: float):
        self.count += 1
        self.total_ms += duration_ms
        self.min_ms = min(self.min_ms, duration_ms)
        self.max_ms = max(self.max_ms, duration_ms)

    def summary(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "avg": self.total_ms / self.count if self.count else 0.0,
            "min": self.min_ms if self.count else 0.0,
            "max": self.max_ms,
        }


class MetricsCollector:
    """In-process latencies, counters and gauges, mirrored to the debug log.

    Tags become part of the key, so callers must keep tag values bounded.
    """

    def __init__(self):
        self.latencies: Dict[str, LatencyStats] = {}
        self.counters: Dict[str, int] = {}
        self.gauges: Dict[str, float] = {}

    def record_latency(self, operation: str, duration_ms: float, tags: Optional[Dict[str, str]] = None):
        key = metric_key(f"latency.{operation}", tags)
        self.latencies.setdefault(key, LatencyStats()).add(duration_ms)
        agent_logger.logger.debug("metric", metric_type="latency", key=key, duration_ms=duration_ms)

    def increment_counter(self, name: str, value: int = 1, tags: Optional[Dict[str, str]] = None):
        key = metric_key(name, tags)
        self.counters[key] = self.counters.get(key, 0) + value
        agent_logger.logger.debug("metric", metric_type="counter", key=key, value=value)

    def set_gauge(self, name: str, value: float, tags: Optional[Dict[str, str]] = None):
        key = metric_key(name, tags)
        self.gauges[key] = value
        agent_logger.logger.debug("metric", metric_type="gauge", key=key, value=value)

    def keys(self) -> List[str]:
        return [*self.latencies, *self.counters, *self.gauges]

    def get_metrics_summary(self) -> Dict[str, Any]:
        summary: Dict[str, Any] = {key: stats.summary() for key, stats in self.latencies.items()}
        summary.update(self.counters)
        summary.update(self.gauges)
        return summary


# Global metrics collector
metrics = MetricsCollector()
