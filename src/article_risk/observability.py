"""Structured logging and in-memory metrics for analysis submissions."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from threading import Lock
from typing import Any


def configure_logging(level: str) -> None:
    """Configure console logging format once."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
    )


def log_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    """Emit one structured JSON log line."""

    payload = {
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "event": event,
        **fields,
    }
    logger.info(json.dumps(payload, default=str, ensure_ascii=False, separators=(",", ":")))


class SessionMetrics:
    """Thread-safe counters for analysis submissions."""

    _EXPOSED = (
        ("submissions_total", "counter", "Analysis submissions sent to the service."),
        ("ignored_total", "counter", "Submissions ignored while another was in flight."),
        ("success_total", "counter", "Submissions that produced an analysis."),
        ("errors_total", "counter", "Submissions that ended in a failure or were cancelled."),
        ("latency_ms_sum", "counter", "Sum of analysis latency in milliseconds."),
        ("latency_ms_count", "counter", "Number of latency observations."),
    )

    def __init__(self) -> None:
        self._lock = Lock()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self.submissions_total = 0
            self.ignored_total = 0
            self.success_total = 0
            self.errors_total = 0
            self.latency_ms_sum = 0.0
            self.latency_ms_count = 0

    def record_submission(self) -> None:
        with self._lock:
            self.submissions_total += 1

    def record_ignored(self) -> None:
        with self._lock:
            self.ignored_total += 1

    def record_success(self, latency_ms: float) -> None:
        with self._lock:
            self.success_total += 1
            self._observe_latency(latency_ms)

    def record_error(self, latency_ms: float) -> None:
        with self._lock:
            self.errors_total += 1
            self._observe_latency(latency_ms)

    def _observe_latency(self, latency_ms: float) -> None:
        # caller holds the lock
        self.latency_ms_sum += max(latency_ms, 0.0)
        self.latency_ms_count += 1

    def render_prometheus(self, prefix: str = "article_risk") -> str:
        lines: list[str] = []
        with self._lock:
            for attribute, kind, help_text in self._EXPOSED:
                value = getattr(self, attribute)
                rendered = f"{value:.3f}" if isinstance(value, float) else str(value)
                name = f"{prefix}_{attribute}"
                lines.append(f"# HELP {name} {help_text}")
                lines.append(f"# TYPE {name} {kind}")
                lines.append(f"{name} {rendered}")
        return "\n".join(lines) + "\n"


_metrics = SessionMetrics()


def get_metrics() -> SessionMetrics:
    """Return the process-wide metrics collector."""

    return _metrics
