"""Smoke test for the local scorecard CLI."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

from wafscore.domain import reason_codes

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _run(tmp_path: Path, *args: str) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ, WAFSCORE_AUDIT_DIR=str(tmp_path / "cli-audit"))
    return subprocess.run(
        [sys.executable, "scripts/build_scorecard.py", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        env=env,
    )


def test_cli_prints_ranked_scorecard(report_file: Path, tmp_path: Path) -> None:
    result = _run(tmp_path, str(report_file))

    assert result.returncode == 0, result.stderr
    data = json.loads(result.stdout)
    assert data["summary"]["overall_score"] == 72
    assert [area["design_area"] for area in data["areas"]] == [
        "Resiliency",
        "Governance",
        "Identity",
    ]
    assert (tmp_path / "cli-audit" / "audit.jsonl").exists()


def test_cli_reports_malformed_input(tmp_path: Path) -> None:
    report = tmp_path / "broken.csv"
    report.write_text("Assessment,Nothing useful\n", encoding="utf-8")

    result = _run(tmp_path, str(report))

    assert result.returncode == 1
    assert result.stdout == ""
    error = json.loads(result.stderr.strip().splitlines()[-1])
    assert error["reason"] == reason_codes.MALFORMED_REPORT


def test_cli_rejects_unknown_layout(report_file: Path, tmp_path: Path) -> None:
    result = _run(tmp_path, str(report_file), "--layout", "v0")

    assert result.returncode == 2
    assert reason_codes.INVALID_INPUT in result.stderr
