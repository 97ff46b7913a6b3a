"""Error taxonomy raised by the scorecard pipeline."""

from __future__ import annotations

from . import reason_codes


class ScorecardError(ValueError):
    """Base class for every failure that aborts a scorecard build."""

    reason = reason_codes.INVALID_INPUT


class MalformedReportError(ScorecardError):
    """Raised when a sentinel or header is missing or section bounds disagree."""

    reason = reason_codes.MALFORMED_REPORT


class ReportTooLargeError(ScorecardError):
    """Raised when a report exceeds the configured size bound."""

    reason = reason_codes.REPORT_TOO_LARGE


class FieldParseError(ScorecardError):
    """Raised when a field cannot be coerced or a line lacks fields."""

    reason = reason_codes.FIELD_PARSE_FAILED

    def __init__(
        self,
        message: str,
        *,
        line_number: int | None = None,
        field: str | None = None,
        raw_value: str | None = None,
    ) -> None:
        self.line_number = line_number
        self.field = field
        self.raw_value = raw_value
        details = []
        if line_number is not None:
            details.append(f"line {line_number}")
        if field is not None:
            details.append(f"field {field!r}")
        if raw_value is not None:
            details.append(f"value {raw_value!r}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class CorrelationError(ScorecardError):
    """Raised when a design area matches zero or several score records."""

    reason = reason_codes.CORRELATION_FAILED

    def __init__(self, design_area: str, matches: int) -> None:
        self.design_area = design_area
        self.matches = matches
        if matches == 0:
            message = f"No score record matches design area {design_area!r}."
        else:
            message = (
                f"{matches} score records match design area {design_area!r}; "
                "expected exactly one."
            )
        super().__init__(message)
