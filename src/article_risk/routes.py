"""HTTP routes for the operator console."""

from __future__ import annotations

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from .client import AnalysisServiceClient
from .config import get_settings
from .errors import ApiError
from .observability import get_metrics, log_event
from .renderer import build_report
from .schemas import HealthResponse, SessionView, SubmitAnalysisRequest, SubmitAnalysisResponse
from .session import AnalysisSession, Failed, SessionState, Succeeded, can_submit

router = APIRouter()
logger = logging.getLogger("article_risk")

_settings = get_settings()
_metrics = get_metrics()
_client = AnalysisServiceClient.from_settings(_settings)
_session = AnalysisSession(
    _client.analyze,
    metrics=_metrics,
    metrics_enabled=_settings.metrics_enabled,
)


def get_session() -> AnalysisSession:
    """Return the process-wide operator session."""

    return _session


def session_view(state: SessionState) -> SessionView:
    """Project a session state onto its JSON view."""

    if isinstance(state, Succeeded):
        return SessionView(state=state.name, report=build_report(state.response))
    if isinstance(state, Failed):
        return SessionView(state=state.name, message=state.message)
    return SessionView(state=state.name)


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        service=_settings.service_name,
        version=_settings.service_version,
        timestamp=datetime.now(tz=timezone.utc),
    )


@router.get("/metrics", response_class=PlainTextResponse)
def metrics() -> str:
    if not _settings.metrics_enabled:
        raise HTTPException(status_code=404, detail="metrics endpoint disabled")
    return _metrics.render_prometheus()


@router.get("/analysis", response_model=SessionView)
def current_analysis() -> SessionView:
    return session_view(_session.state)


@router.post("/analysis", response_model=SubmitAnalysisResponse)
async def submit_analysis(payload: SubmitAnalysisRequest, request: Request) -> SubmitAnalysisResponse:
    trace_id = request.headers.get("x-trace-id")
    if not can_submit(payload.title, payload.body):
        raise ApiError(
            status_code=422,
            code="VALIDATION_FAILED",
            message="Title and body must not be blank.",
            trace_id=trace_id,
            details=[
                {"field": name, "issue": "must not be blank"}
                for name, value in (("title", payload.title), ("body", payload.body))
                if not value.strip()
            ],
        )

    accepted = await _session.submit(payload.title, payload.body)
    view = session_view(_session.state)
    log_event(
        logger,
        "analysis_submit_handled",
        trace_id=trace_id,
        accepted=accepted,
        state=view.state,
    )
    return SubmitAnalysisResponse(**view.model_dump(), accepted=accepted)
