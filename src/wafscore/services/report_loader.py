"""Read an assessment export into raw lines without interpreting them."""

from __future__ import annotations

import logging
from pathlib import Path

from ..domain.errors import MalformedReportError, ReportTooLargeError
from ..domain.models import RawLine
from .scorecard_limits import IngestLimitConfig

_LOG = logging.getLogger(__name__)


def decode_report(payload: bytes, limits: IngestLimitConfig | None = None) -> str:
    """
    Decode report bytes after enforcing the size bound.

    A UTF-8 byte order mark is dropped; anything that is not UTF-8 is rejected.
    """

    limits = limits or IngestLimitConfig.from_env()
    if len(payload) > limits.max_report_bytes:
        raise ReportTooLargeError(
            f"Report is {len(payload)} bytes; the limit is {limits.max_report_bytes}."
        )
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MalformedReportError("Report is not valid UTF-8.") from exc


def lines_from_text(text: str) -> tuple[RawLine, ...]:
    """Split report text into ordered :class:`RawLine` values."""

    return tuple(
        RawLine(text=line, index=index)
        for index, line in enumerate(text.splitlines())
    )


def read_report(path: Path) -> bytes:
    payload = path.read_bytes()
    _LOG.debug("Read %d bytes from %s", len(payload), path)
    return payload


def load_report_lines(
    payload: bytes, limits: IngestLimitConfig | None = None
) -> tuple[RawLine, ...]:
    """Decode ``payload`` within the size bound and return its lines."""

    lines = lines_from_text(decode_report(payload, limits))
    _LOG.debug("Loaded %d lines (%d bytes) from report", len(lines), len(payload))
    return lines
