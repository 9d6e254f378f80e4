"""Outbound client for the remote article analysis service."""

from __future__ import annotations

import json
import logging
import socket
from typing import Any
from urllib import error as url_error
from urllib import request as url_request
from uuid import uuid4

from pydantic import ValidationError

from .config import Settings
from .errors import AnalysisServiceError
from .observability import log_event
from .schemas import AnalysisRequest, AnalysisResponse

ANALYZE_PATH = "/api/v1/analyze"

logger = logging.getLogger("article_risk.client")


def _service_message(raw: str) -> str | None:
    """Pull a readable error message out of an error response body."""

    try:
        body = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(body, dict):
        return None

    for key in ("detail", "message"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()

    error = body.get("error")
    if isinstance(error, dict):
        value = error.get("message")
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class AnalysisServiceClient:
    """Posts articles to ``/api/v1/analyze`` and parses the analysis."""

    def __init__(self, *, base_url: str, timeout_seconds: float) -> None:
        self._base_url = base_url
        self._timeout_seconds = max(timeout_seconds, 0.1)

    @classmethod
    def from_settings(cls, settings: Settings) -> AnalysisServiceClient:
        return cls(
            base_url=settings.analysis_base_url,
            timeout_seconds=settings.analysis_timeout_seconds,
        )

    @property
    def endpoint(self) -> str:
        return f"{self._base_url.rstrip('/')}{ANALYZE_PATH}"

    def analyze(self, payload: AnalysisRequest, *, trace_id: str | None = None) -> AnalysisResponse:
        """Submit one article and return the parsed analysis.

        Raises ``AnalysisServiceError`` for every transport or service failure.
        """

        trace_id = trace_id or uuid4().hex
        body = self._post_json(payload.to_wire(), trace_id=trace_id)
        try:
            return AnalysisResponse.model_validate(body)
        except ValidationError as exc:
            log_event(
                logger,
                "analysis_response_invalid",
                trace_id=trace_id,
                error_count=exc.error_count(),
            )
            raise AnalysisServiceError("Analysis service returned an unsupported payload shape.") from exc

    def _post_json(self, payload: dict[str, Any], *, trace_id: str) -> dict[str, Any]:
        request = url_request.Request(
            url=self.endpoint,
            data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
            method="POST",
            headers={
                "content-type": "application/json",
                "accept": "application/json",
                "x-trace-id": trace_id,
            },
        )

        try:
            with url_request.urlopen(request, timeout=self._timeout_seconds) as response:
                raw = response.read()
        except url_error.HTTPError as exc:
            details = exc.read().decode("utf-8", errors="ignore")
            message = _service_message(details) or f"Analysis service HTTP {exc.code}"
            raise AnalysisServiceError(message, status_code=exc.code) from exc
        except url_error.URLError as exc:
            raise AnalysisServiceError(f"Analysis service unreachable: {exc.reason}") from exc
        except (TimeoutError, socket.timeout) as exc:
            raise AnalysisServiceError(
                f"Analysis service timed out after {self._timeout_seconds:.1f}s"
            ) from exc
        except OSError as exc:
            raise AnalysisServiceError(f"Analysis service network error: {exc}") from exc

        try:
            body = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise AnalysisServiceError("Analysis service returned invalid JSON.") from exc

        if not isinstance(body, dict):
            raise AnalysisServiceError("Analysis service returned an unsupported payload shape.")
        return body
