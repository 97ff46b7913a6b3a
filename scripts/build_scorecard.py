"""LOCAL CLI that builds a scorecard from an assessment export and prints it as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT.parent / "src"))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a ranked scorecard from an assessment CSV export.",
    )
    parser.add_argument(
        "report_path",
        type=Path,
        help="Path to the exported assessment report.",
    )
    parser.add_argument(
        "--layout",
        default=None,
        help="Export layout version (defaults to WAFSCORE_REPORT_LAYOUT or v1).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log pipeline progress to stderr.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from wafscore.domain import reason_codes
    from wafscore.domain.errors import ScorecardError
    from wafscore.services.report_layout import get_configured_layout, get_layout
    from wafscore.services.scorecard_ingest import ingest_report_file

    try:
        layout = get_layout(args.layout) if args.layout else get_configured_layout()
    except ValueError as exc:
        error = {
            "status": "error",
            "reason": reason_codes.INVALID_INPUT,
            "detail": str(exc),
        }
        sys.stderr.write(json.dumps(error, ensure_ascii=False) + "\n")
        return 2

    try:
        response = ingest_report_file(args.report_path, layout=layout)
    except ScorecardError as exc:
        error = {"status": "error", "reason": exc.reason, "detail": str(exc)}
        sys.stderr.write(json.dumps(error, ensure_ascii=False) + "\n")
        return 1

    sys.stdout.write(json.dumps(response, ensure_ascii=False, indent=2))
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
