"""Reason codes used for error responses and audit events."""

from __future__ import annotations

INVALID_INPUT = "invalid_input"
"""Request failed schema validation or named an unknown layout."""

REPORT_TOO_LARGE = "report_too_large"
"""Report rejected because it exceeded the configured size bound."""

MALFORMED_REPORT = "malformed_report"
"""A sentinel or header was missing, or section bounds were inconsistent."""

FIELD_PARSE_FAILED = "field_parse_failed"
"""A numeric field did not parse or a fixed line had too few fields."""

CORRELATION_FAILED = "correlation_failed"
"""A design area matched zero or several score rows."""

RESPONSE_VALIDATION_FAILED = "response_validation_failed"
"""The service produced output that violated the response schema."""
