"""Layout registry selection."""

from __future__ import annotations

from dataclasses import replace

import pytest

from wafscore.services.report_layout import (
    DEFAULT_LAYOUT,
    LAYOUT_V1,
    get_configured_layout,
    get_layout,
)


def test_v1_layout_constants() -> None:
    assert LAYOUT_V1.summary_line_index == 3
    assert LAYOUT_V1.score_end_offset == 7
    assert LAYOUT_V1.findings_header == (
        "Category,Link-Text,Link,Priority,ReportingCategory,"
        "ReportingSubcategory,Weight,Context,CompleteY/N,Note"
    )


def test_configured_layout_defaults_to_v1(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WAFSCORE_REPORT_LAYOUT", raising=False)
    assert get_configured_layout() is DEFAULT_LAYOUT


def test_configured_layout_reads_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAFSCORE_REPORT_LAYOUT", " V1 ")
    assert get_configured_layout() is LAYOUT_V1


def test_unknown_layout_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValueError):
        get_layout("v0")

    monkeypatch.setenv("WAFSCORE_REPORT_LAYOUT", "legacy")
    with pytest.raises(ValueError):
        get_configured_layout()


@pytest.mark.parametrize("offset", [0, -2])
def test_score_table_must_end_above_findings_header(offset: int) -> None:
    with pytest.raises(ValueError, match="score table"):
        replace(LAYOUT_V1, version="v1-test", score_end_offset=offset)
