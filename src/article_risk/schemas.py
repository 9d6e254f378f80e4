"""Pydantic schemas for the analysis wire contract and the display model."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


RiskTier = Literal["low", "medium", "high", "critical"]
RiskLevelKind = Literal["danger", "warning", "safe"]
SessionStateName = Literal["idle", "submitting", "succeeded", "failed"]


class AnalysisRequest(BaseModel):
    """Article submitted for analysis."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str

    @field_validator("title", "body")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_wire(self) -> dict[str, str]:
        """Payload for ``POST /api/v1/analyze``."""

        return {"article_title": self.title, "article_body": self.body}


class FoundUrl(BaseModel):
    """Related article found by the cross-reference check."""

    url: str
    similarity: float


class CategoryReport(BaseModel):
    """One category entry of the analysis breakdown."""

    score: float
    reason: str = ""
    recommendation: str = ""
    found_urls: list[FoundUrl] = Field(default_factory=list)

    @field_validator("reason", "recommendation", mode="before")
    @classmethod
    def _none_as_empty_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("found_urls", mode="before")
    @classmethod
    def _none_as_no_urls(cls, value: Any) -> Any:
        return [] if value is None else value


class AnalysisResponse(BaseModel):
    """Analysis result returned by the remote service.

    Scores are kept exactly as received; each category has its own domain
    and the normalizer handles scaling for display.
    """

    final_risk_score: float
    final_risk_level: str = ""
    breakdown: dict[str, CategoryReport] = Field(default_factory=dict)

    @field_validator("final_risk_level", mode="before")
    @classmethod
    def _none_as_empty_level(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("breakdown", mode="before")
    @classmethod
    def _none_as_empty_breakdown(cls, value: Any) -> Any:
        return {} if value is None else value


class TierStyle(BaseModel):
    """Display classes attached to one risk tier."""

    text_class: str
    background_class: str
    bar_class: str


class ScoreBadge(BaseModel):
    """Classified score ready for display."""

    display_percent: int = Field(ge=0, le=100)
    tier: RiskTier
    style: TierStyle


class SummaryBlock(BaseModel):
    """Aggregate summary shown above the category breakdown."""

    level_label: str
    level_kind: RiskLevelKind
    level_class: str
    score: ScoreBadge


class RelatedUrl(BaseModel):
    """Related article with its similarity as a percentage."""

    url: str
    similarity_percent: int


class CategoryBlock(BaseModel):
    """Rendered breakdown entry."""

    key: str
    label: str
    score: ScoreBadge
    reason: str
    recommendation: str
    related_urls: list[RelatedUrl] | None = None


class AnalysisReport(BaseModel):
    """Display model for one analysis."""

    summary: SummaryBlock
    categories: list[CategoryBlock]


class SubmitAnalysisRequest(BaseModel):
    """Console request payload; blank fields are rejected by the route."""

    title: str = ""
    body: str = ""


class SessionView(BaseModel):
    """Snapshot of the operator session."""

    state: SessionStateName
    message: str | None = None
    report: AnalysisReport | None = None


class SubmitAnalysisResponse(SessionView):
    """Session snapshot after a submit attempt."""

    accepted: bool


class HealthResponse(BaseModel):
    """Health endpoint response."""

    status: Literal["ok"] = "ok"
    service: str
    version: str
    timestamp: datetime
