"""Compose the display model and its plain-text rendering."""

from __future__ import annotations

from .extractor import extract_summary
from .normalizer import (
    AGGRO_KEY,
    CROSSREF_KEY,
    LEVEL_CLASSES,
    MISMATCH_KEY,
    classify_aggregate,
    classify_score,
    display_percent,
    risk_level_kind,
)
from .schemas import (
    AnalysisReport,
    AnalysisResponse,
    CategoryBlock,
    CategoryReport,
    RelatedUrl,
    SummaryBlock,
)


CATEGORY_LABELS: dict[str, str] = {
    AGGRO_KEY: "제목 과장성",
    MISMATCH_KEY: "제목-본문 비일관성",
    CROSSREF_KEY: "내용 비신뢰성",
}

TIER_LABELS = {
    "low": "낮음",
    "medium": "보통",
    "high": "높음",
    "critical": "매우 높음",
}


def category_label(key: str) -> str:
    return CATEGORY_LABELS.get(key, key)


def _summary_block(response: AnalysisResponse) -> SummaryBlock:
    kind = risk_level_kind(response.final_risk_level)
    return SummaryBlock(
        level_label=response.final_risk_level,
        level_kind=kind,
        level_class=LEVEL_CLASSES[kind],
        score=classify_aggregate(response.final_risk_score).as_badge(),
    )


def _category_block(key: str, report: CategoryReport) -> CategoryBlock:
    related = [
        RelatedUrl(url=item.url, similarity_percent=display_percent(item.similarity))
        for item in report.found_urls
    ]
    return CategoryBlock(
        key=key,
        label=category_label(key),
        score=classify_score(key, report.score).as_badge(),
        reason=extract_summary(report.reason),
        recommendation=report.recommendation,
        related_urls=related or None,
    )


def build_report(response: AnalysisResponse) -> AnalysisReport:
    """Build the display model; categories keep the breakdown's order."""

    return AnalysisReport(
        summary=_summary_block(response),
        categories=[_category_block(key, report) for key, report in response.breakdown.items()],
    )


def render_text(report: AnalysisReport) -> str:
    """Render a report as plain text for terminals."""

    summary = report.summary
    level = summary.level_label or "-"
    lines = [
        f"종합 위험도: {level} ({summary.score.display_percent}%, {TIER_LABELS[summary.score.tier]})",
    ]
    for block in report.categories:
        lines.append("")
        lines.append(f"[{block.label}] {block.score.display_percent}% ({TIER_LABELS[block.score.tier]})")
        if block.reason:
            lines.append(f"  {block.reason}")
        if block.recommendation:
            lines.append(f"  권장 사항: {block.recommendation}")
        if block.related_urls is not None:
            lines.append("  관련 기사:")
            for item in block.related_urls:
                lines.append(f"    - {item.url} (유사도 {item.similarity_percent}%)")
    return "\n".join(lines) + "\n"
