"""Submission lifecycle for one operator session.

The session holds exactly one state variant at a time:

    Idle -> Submitting -> Succeeded | Failed -> Submitting -> ...

A submit while ``Submitting`` is ignored, so at most one request is ever in
flight and the completion that lands always belongs to the latest
submission. The check and the transition happen before the first ``await``,
which makes them atomic on the event loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from time import perf_counter
from typing import Callable, ClassVar, Union

from .errors import AnalysisServiceError
from .observability import SessionMetrics, get_metrics, log_event
from .schemas import AnalysisRequest, AnalysisResponse, SessionStateName

FALLBACK_ERROR_MESSAGE = "분석 중 오류가 발생했습니다."

logger = logging.getLogger("article_risk.session")

Transport = Callable[[AnalysisRequest], AnalysisResponse]


@dataclass(frozen=True)
class Idle:
    name: ClassVar[SessionStateName] = "idle"


@dataclass(frozen=True)
class Submitting:
    request: AnalysisRequest
    name: ClassVar[SessionStateName] = "submitting"


@dataclass(frozen=True)
class Succeeded:
    response: AnalysisResponse
    name: ClassVar[SessionStateName] = "succeeded"


@dataclass(frozen=True)
class Failed:
    message: str
    name: ClassVar[SessionStateName] = "failed"


SessionState = Union[Idle, Submitting, Succeeded, Failed]


def can_submit(title: str | None, body: str | None) -> bool:
    """True when both fields are non-empty after trimming."""

    return bool((title or "").strip()) and bool((body or "").strip())


def failure_message(exc: BaseException) -> str:
    """Readable text for a failed submission, or the fixed fallback."""

    if isinstance(exc, AnalysisServiceError):
        text = exc.message or ""
    else:
        text = str(exc)
    return text.strip() or FALLBACK_ERROR_MESSAGE


class AnalysisSession:
    """Owns the current submission state and drives the transport."""

    def __init__(
        self,
        transport: Transport,
        *,
        metrics: SessionMetrics | None = None,
        metrics_enabled: bool = True,
    ) -> None:
        self._transport = transport
        self._metrics = metrics or get_metrics()
        self._metrics_enabled = metrics_enabled
        self._state: SessionState = Idle()

    @property
    def state(self) -> SessionState:
        return self._state

    def set_transport_for_tests(self, transport: Transport) -> None:
        self._transport = transport

    def reset_state_for_tests(self) -> None:
        self._state = Idle()

    async def submit(self, title: str, body: str) -> bool:
        """Run one analysis; returns False when nothing was sent.

        A cancelled call leaves the session ``Failed`` with the fallback
        message before the cancellation propagates, so the next submit is
        accepted.
        """

        if not can_submit(title, body):
            log_event(logger, "analysis_submit_invalid", state=self._state.name)
            return False
        if isinstance(self._state, Submitting):
            if self._metrics_enabled:
                self._metrics.record_ignored()
            log_event(logger, "analysis_submit_ignored", state=self._state.name)
            return False

        request = AnalysisRequest(title=title, body=body)
        self._state = Submitting(request)
        if self._metrics_enabled:
            self._metrics.record_submission()
        log_event(
            logger,
            "analysis_submitted",
            title_length=len(request.title),
            body_length=len(request.body),
        )

        started = perf_counter()
        try:
            response = await asyncio.to_thread(self._transport, request)
        except asyncio.CancelledError:
            self._fail(FALLBACK_ERROR_MESSAGE, "CancelledError", started)
            raise
        except Exception as exc:
            self._fail(failure_message(exc), type(exc).__name__, started)
            return True

        latency_ms = (perf_counter() - started) * 1000.0
        self._state = Succeeded(response)
        if self._metrics_enabled:
            self._metrics.record_success(latency_ms)
        log_event(
            logger,
            "analysis_succeeded",
            final_risk_score=response.final_risk_score,
            final_risk_level=response.final_risk_level,
            categories=list(response.breakdown),
            latency_ms=round(latency_ms, 3),
        )
        return True

    def _fail(self, message: str, error_type: str, started: float) -> None:
        latency_ms = (perf_counter() - started) * 1000.0
        self._state = Failed(message)
        if self._metrics_enabled:
            self._metrics.record_error(latency_ms)
        log_event(
            logger,
            "analysis_failed",
            error=message,
            error_type=error_type,
            latency_ms=round(latency_ms, 3),
        )
