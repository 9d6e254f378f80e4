"""Tests for reason cleanup and summary extraction."""

import pytest

from article_risk.extractor import extract_summary, strip_debug_markers


def test_debug_marker_and_numbered_summary() -> None:
    reason = "[디버그 모드] 1. 요약문: 제목이 과장됨\n2. 상세: ..."
    assert extract_summary(reason) == "요약문: 제목이 과장됨"


def test_summary_spans_lines_until_next_section() -> None:
    reason = "1. 요약문: 첫 줄\n둘째 줄\n3. 근거: 생략"
    assert extract_summary(reason) == "요약문: 첫 줄\n둘째 줄"


def test_summary_runs_to_end_without_later_sections() -> None:
    assert extract_summary("1. 요약문:   끝까지 이어지는 요약  ") == "요약문: 끝까지 이어지는 요약"


def test_inline_section_numbers_do_not_end_summary() -> None:
    reason = "1. 요약문: 수치 2.5배 증가\n2. 상세: 기타"
    assert extract_summary(reason) == "요약문: 수치 2.5배 증가"


def test_plain_reason_is_returned_unchanged() -> None:
    reason = "  본문과 제목이 대체로 일치합니다.\n추가 설명  "
    assert extract_summary(reason) == reason


def test_debug_markers_removed_anywhere() -> None:
    reason = "앞[디버그 모드]   중간 [디버그 모드]\n끝[디버그 모드]"
    cleaned = extract_summary(reason)
    assert "[디버그 모드]" not in cleaned
    assert cleaned == "앞중간 끝"


def test_nested_debug_marker_is_removed() -> None:
    assert strip_debug_markers("[디버[디버그 모드]그 모드]결과") == "결과"


def test_empty_and_missing_reason() -> None:
    assert extract_summary("") == ""
    assert extract_summary(None) == ""


@pytest.mark.parametrize(
    "reason",
    [
        "",
        "평범한 이유",
        "[디버그 모드] 1. 요약문: 제목이 과장됨\n2. 상세: ...",
        "1. 요약문: 1. 요약문: 겹친 요약\n2. 상세",
        "1. 요약문:\n3. 근거",
        "[디버그 모드][디버그 모드]1. [디버그 모드]요약문: 조각난 표시",
        "요약문: 이미 추출됨",
    ],
)
def test_extraction_is_idempotent(reason: str) -> None:
    once = extract_summary(reason)
    assert extract_summary(once) == once
    assert "[디버그 모드]" not in once
