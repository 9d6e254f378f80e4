"""Reason text cleanup and summary extraction.

Reasons from the analysis service may carry ``[디버그 모드]`` annotations
and a numbered layout such as ``1. 요약문: ... 2. 상세: ... 3. ...``. Only the
section-1 summary is shown; text without that layout is shown as-is once
the annotations are gone.
"""

import re


DEBUG_MARKER = "[디버그 모드]"
SUMMARY_MARKER = "1. 요약문:"
SUMMARY_PREFIX = "요약문: "

# A summary ends where a line opens section 2 or 3.
SECTION_BOUNDARY = r"\n(?:2|3)\."

_DEBUG_MARKER_RE = re.compile(re.escape(DEBUG_MARKER) + r"\s*")
_SUMMARY_RE = re.compile(
    re.escape(SUMMARY_MARKER) + r"(.*?)(?=" + SECTION_BOUNDARY + r"|\Z)",
    re.DOTALL,
)


def strip_debug_markers(text: str) -> str:
    """Remove every debug marker and the whitespace following it."""

    cleaned = text
    while True:
        stripped = _DEBUG_MARKER_RE.sub("", cleaned)
        if stripped == cleaned:
            return cleaned
        cleaned = stripped


def _extract_once(text: str) -> str:
    cleaned = strip_debug_markers(text)
    match = _SUMMARY_RE.search(cleaned)
    if match is None:
        return cleaned
    return SUMMARY_PREFIX + match.group(1).strip()


def extract_summary(reason: str | None) -> str:
    """Return the display text for a category reason.

    Repeated until stable so that ``extract_summary`` is idempotent even when
    a summary itself embeds a section-1 marker. Every pass that changes the
    text shortens it, so the loop ends.
    """

    text = reason or ""
    while True:
        extracted = _extract_once(text)
        if extracted == text:
            return text
        text = extracted
