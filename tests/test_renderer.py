"""Tests for display model composition and text rendering."""

from article_risk.renderer import build_report, category_label, render_text
from article_risk.schemas import AnalysisResponse


def _full_response() -> AnalysisResponse:
    return AnalysisResponse.model_validate(
        {
            "final_risk_score": 0.72,
            "final_risk_level": "위험",
            "breakdown": {
                "crossref_score": {
                    "score": 0.61,
                    "reason": "교차 검증 결과 불일치",
                    "recommendation": "출처를 확인하세요.",
                    "found_urls": [
                        {"url": "https://news.example/a", "similarity": 0.874},
                        {"url": "https://news.example/b", "similarity": 0.3},
                    ],
                },
                "aggro_score": {
                    "score": 0.75,
                    "reason": "[디버그 모드] 1. 요약문: 제목이 과장됨\n2. 상세: ...",
                    "recommendation": "자극적 표현을 줄이세요.",
                    "found_urls": [],
                },
                "mismatch_score": {
                    "score": 0.44,
                    "reason": "제목과 본문이 대체로 일치",
                    "recommendation": "",
                },
            },
        }
    )


def test_report_preserves_breakdown_order() -> None:
    report = build_report(_full_response())
    assert [block.key for block in report.categories] == [
        "crossref_score",
        "aggro_score",
        "mismatch_score",
    ]
    assert [block.label for block in report.categories] == [
        "내용 비신뢰성",
        "제목 과장성",
        "제목-본문 비일관성",
    ]


def test_category_blocks_are_classified_and_cleaned() -> None:
    report = build_report(_full_response())
    crossref, aggro, mismatch = report.categories

    assert aggro.score.display_percent == 75
    assert aggro.score.tier == "high"
    assert aggro.reason == "요약문: 제목이 과장됨"
    assert aggro.recommendation == "자극적 표현을 줄이세요."
    assert aggro.related_urls is None

    assert mismatch.score.tier == "low"
    assert mismatch.related_urls is None

    assert crossref.score.tier == "high"
    assert [(item.url, item.similarity_percent) for item in crossref.related_urls] == [
        ("https://news.example/a", 87),
        ("https://news.example/b", 30),
    ]


def test_summary_block_uses_level_label_and_aggregate_tier() -> None:
    summary = build_report(_full_response()).summary
    assert summary.level_label == "위험"
    assert summary.level_kind == "danger"
    assert summary.level_class.startswith("text-red")
    assert summary.score.display_percent == 72
    assert summary.score.tier == "high"


def test_empty_breakdown_renders_summary_only() -> None:
    response = AnalysisResponse.model_validate(
        {"final_risk_score": 0.2, "final_risk_level": "안전", "breakdown": {}}
    )
    report = build_report(response)
    assert report.categories == []
    assert report.summary.score.tier == "low"
    assert report.summary.level_kind == "safe"

    text = render_text(report)
    assert text == "종합 위험도: 안전 (20%, 낮음)\n"


def test_partial_response_degrades_gracefully() -> None:
    response = AnalysisResponse.model_validate(
        {
            "final_risk_score": 0.55,
            "breakdown": {"novelty_score": {"score": 0.5, "found_urls": None}},
        }
    )
    report = build_report(response)
    (block,) = report.categories
    assert block.label == "novelty_score"
    assert block.score.tier == "high"
    assert block.reason == ""
    assert block.related_urls is None
    assert report.summary.level_label == ""
    assert report.summary.level_kind == "safe"


def test_missing_breakdown_is_empty() -> None:
    response = AnalysisResponse.model_validate({"final_risk_score": 0.9, "final_risk_level": "경고"})
    report = build_report(response)
    assert report.categories == []
    assert report.summary.level_kind == "warning"


def test_render_text_sections_follow_order_and_omit_empty_urls() -> None:
    text = render_text(build_report(_full_response()))
    lines = text.splitlines()

    assert lines[0] == "종합 위험도: 위험 (72%, 높음)"
    headers = [line for line in lines if line.startswith("[")]
    assert headers == [
        "[내용 비신뢰성] 61% (높음)",
        "[제목 과장성] 75% (높음)",
        "[제목-본문 비일관성] 44% (낮음)",
    ]
    assert text.count("관련 기사:") == 1
    assert "    - https://news.example/a (유사도 87%)" in lines
    assert "  요약문: 제목이 과장됨" in lines


def test_category_label_falls_back_to_key() -> None:
    assert category_label("aggro_score") == "제목 과장성"
    assert category_label("unknown_metric") == "unknown_metric"
