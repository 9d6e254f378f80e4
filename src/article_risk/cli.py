"""Command line entrypoint: submit one article and print the risk report."""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
import sys

from .client import AnalysisServiceClient
from .config import get_settings
from .observability import configure_logging
from .renderer import build_report, render_text
from .session import AnalysisSession, Failed, Succeeded, Transport, can_submit

EXIT_ANALYSIS_FAILED = 1
EXIT_INVALID_INPUT = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Analyze an article title and body for risk")
    parser.add_argument("--title", required=True)
    body = parser.add_mutually_exclusive_group(required=True)
    body.add_argument("--body")
    body.add_argument("--body-file", type=Path, help="Read the article body from a UTF-8 file")
    parser.add_argument("--base-url", default=settings.analysis_base_url)
    parser.add_argument("--timeout", type=float, default=settings.analysis_timeout_seconds)
    parser.add_argument("--json", action="store_true", help="Print the display model as JSON")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def _read_body(args: argparse.Namespace) -> str:
    if args.body is not None:
        return args.body
    return args.body_file.read_text(encoding="utf-8")


def run(args: argparse.Namespace, transport: Transport | None = None) -> int:
    try:
        body = _read_body(args)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"본문 파일을 읽을 수 없습니다: {args.body_file} ({exc})", file=sys.stderr)
        return EXIT_INVALID_INPUT
    if not can_submit(args.title, body):
        print("제목과 본문을 모두 입력하세요.", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if transport is None:
        transport = AnalysisServiceClient(base_url=args.base_url, timeout_seconds=args.timeout).analyze
    session = AnalysisSession(transport)
    asyncio.run(session.submit(args.title, body))

    state = session.state
    if isinstance(state, Failed):
        print(state.message, file=sys.stderr)
        return EXIT_ANALYSIS_FAILED
    if not isinstance(state, Succeeded):  # pragma: no cover
        raise RuntimeError(f"unexpected session state: {state.name}")

    report = build_report(state.response)
    if args.json:
        print(json.dumps(report.model_dump(), ensure_ascii=False, indent=2))
    else:
        sys.stdout.write(render_text(report))
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level)
    code = run(args)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
