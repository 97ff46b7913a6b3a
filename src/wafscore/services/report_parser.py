"""Parsers for the score table, findings table and overall summary line.

Each parser works on lines already isolated by
:func:`wafscore.services.section_locator.locate_sections` and fails loudly:
a field that cannot be coerced raises :class:`FieldParseError` carrying the
line number, field name and raw value instead of being skipped.
"""

from __future__ import annotations

import csv
import logging
from typing import Sequence

from ..domain.errors import FieldParseError, MalformedReportError
from ..domain.models import FindingRecord, OverallSummary, RawLine, ScoreRecord
from .report_layout import DEFAULT_LAYOUT, ReportLayout

_LOG = logging.getLogger(__name__)

_QUOTE_CHARS = "'\""
_SCORE_SUFFIX = "/100"


def split_fields(line: RawLine) -> list[str]:
    """Split one CSV line; quoted fields may contain commas."""

    try:
        return next(csv.reader([line.text]), [])
    except csv.Error as exc:
        raise FieldParseError(
            "Line is not valid CSV", line_number=line.line_number
        ) from exc


def _coerce_int(raw: str, *, line_number: int, field: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise FieldParseError(
            "Expected an integer", line_number=line_number, field=field, raw_value=raw
        ) from exc


def _check_score_range(score: int, *, line_number: int, field: str) -> int:
    if not 0 <= score <= 100:
        raise FieldParseError(
            "Score outside 0-100",
            line_number=line_number,
            field=field,
            raw_value=str(score),
        )
    return score


def parse_score_value(raw: str, *, line_number: int = 0, field: str = "Score") -> int:
    """Convert ``'72/100'`` style text to ``72``."""

    value = raw.strip().strip(_QUOTE_CHARS).strip()
    if value.endswith(_SCORE_SUFFIX):
        value = value[: -len(_SCORE_SUFFIX)].strip()
    score = _coerce_int(value, line_number=line_number, field=field)
    return _check_score_range(score, line_number=line_number, field=field)


class ScoreTableParser:
    """Parse positional ``category,rating,'score/100'`` rows."""

    FIELD_NAMES = ("Category", "Criticality", "Score")

    def parse(self, lines: Sequence[RawLine]) -> tuple[ScoreRecord, ...]:
        records: list[ScoreRecord] = []
        for line in lines:
            if not line.text.strip():
                continue
            fields = split_fields(line)
            if len(fields) < len(self.FIELD_NAMES):
                raise FieldParseError(
                    f"Score row needs {len(self.FIELD_NAMES)} fields, "
                    f"found {len(fields)}",
                    line_number=line.line_number,
                    raw_value=line.text,
                )
            category, rating, raw_score = fields[:3]
            records.append(
                ScoreRecord(
                    category=category.strip(),
                    rating=rating.strip(),
                    score=parse_score_value(raw_score, line_number=line.line_number),
                    line_number=line.line_number,
                )
            )
        _LOG.debug("Parsed %d score records", len(records))
        return tuple(records)


class FindingsTableParser:
    """Parse the findings table whose first line is its header row."""

    def __init__(self, layout: ReportLayout = DEFAULT_LAYOUT) -> None:
        self._columns = layout.findings_columns

    def parse(self, lines: Sequence[RawLine]) -> tuple[FindingRecord, ...]:
        if not lines:
            raise MalformedReportError("Findings range is empty.")
        header, *rows = lines
        columns = [name.strip() for name in split_fields(header)]
        if tuple(columns) != self._columns:
            raise MalformedReportError(
                f"Unexpected findings header on line {header.line_number}."
            )

        records: list[FindingRecord] = []
        for line in rows:
            if not line.text.strip():
                continue
            fields = split_fields(line)
            if len(fields) != len(columns):
                raise FieldParseError(
                    f"Finding row needs {len(columns)} fields, found {len(fields)}",
                    line_number=line.line_number,
                    raw_value=line.text,
                )
            records.append(self._record(dict(zip(columns, fields)), line.line_number))
        _LOG.debug("Parsed %d finding records", len(records))
        return tuple(records)

    @staticmethod
    def _record(row: dict[str, str], line_number: int) -> FindingRecord:
        return FindingRecord(
            category=row["Category"].strip(),
            link_text=row["Link-Text"].strip(),
            link=row["Link"].strip(),
            priority=row["Priority"].strip(),
            reporting_category=row["ReportingCategory"].strip(),
            reporting_subcategory=row["ReportingSubcategory"].strip(),
            weight=_coerce_int(
                row["Weight"].strip(), line_number=line_number, field="Weight"
            ),
            context=row["Context"].strip(),
            complete=row["CompleteY/N"].strip(),
            note=row["Note"].strip(),
            line_number=line_number,
        )


class OverallSummaryExtractor:
    """Read the overall rating and score from the fixed summary line."""

    def __init__(self, layout: ReportLayout = DEFAULT_LAYOUT) -> None:
        self._layout = layout

    def extract(self, lines: Sequence[RawLine]) -> OverallSummary:
        index = self._layout.summary_line_index
        if index >= len(lines):
            raise MalformedReportError(
                f"Report has {len(lines)} lines; summary expected on line {index + 1}."
            )
        return self.parse_line(lines[index])

    def parse_line(self, line: RawLine) -> OverallSummary:
        fields = split_fields(line)
        if len(fields) < self._layout.summary_min_fields:
            raise FieldParseError(
                f"Summary line needs {self._layout.summary_min_fields} fields, "
                f"found {len(fields)}",
                line_number=line.line_number,
                raw_value=line.text,
            )
        rating = fields[1].strip()
        raw_score = fields[2].strip().strip(_QUOTE_CHARS).split("/", 1)[0].strip()
        score = _coerce_int(
            raw_score, line_number=line.line_number, field="OverallScore"
        )
        _check_score_range(score, line_number=line.line_number, field="OverallScore")
        return OverallSummary(score=score, rating=rating)
