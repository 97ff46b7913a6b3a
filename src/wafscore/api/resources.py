"""Resource registry exposing scorecard builds to callers such as the renderer."""

from __future__ import annotations

import sys
from typing import Any, Mapping

from ..domain import reason_codes
from ..domain.errors import ScorecardError
from ..services.report_layout import get_configured_layout, get_layout
from ..services.scorecard_ingest import ingest_report_text
from . import schema_registry
from .schema_registry import SchemaValidationError

INPUT_SCHEMA = "scorecard_build_input_v0.1"
RESPONSE_SCHEMA = "scorecard_response_v0.1"


def error_payload(reason: str, detail: str) -> dict[str, str]:
    """Return an error payload with a stable reason code."""

    return {"status": "error", "reason": reason, "detail": detail}


class HealthResource:
    """Simple wellbeing resource."""

    __slots__ = ()

    def get_status(self) -> Mapping[str, str]:
        return {"status": "ok", "detail": "wafscore resources ready"}

    def __call__(self) -> Mapping[str, str]:
        return self.get_status()


class ScorecardBuildResource:
    """Validate a build request, run the pipeline and validate the response."""

    __slots__ = ()

    def __call__(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        return self.build(request)

    def get_status(self) -> Mapping[str, str]:
        return {"status": "ok", "detail": "scorecard build resource ready"}

    def build(self, request: Mapping[str, Any]) -> Mapping[str, Any]:
        try:
            schema_registry.validate(INPUT_SCHEMA, request)
        except SchemaValidationError:
            return error_payload(
                reason_codes.INVALID_INPUT, "Request failed validation."
            )

        meta = request.get("meta") or {}
        layout_name = meta.get("layout")
        try:
            if layout_name:
                layout = get_layout(layout_name)
            else:
                layout = get_configured_layout()
        except ValueError:
            return error_payload(
                reason_codes.INVALID_INPUT, "Requested layout is not supported."
            )

        try:
            response = ingest_report_text(request["payload"], layout=layout)
        except ScorecardError as exc:
            return error_payload(exc.reason, str(exc))

        try:
            schema_registry.validate(RESPONSE_SCHEMA, response)
        except SchemaValidationError:
            return error_payload(
                reason_codes.RESPONSE_VALIDATION_FAILED,
                "Service output did not meet the response contract.",
            )

        return response


RESOURCE_REGISTRY = {
    "health": HealthResource(),
    "scorecard/build": ScorecardBuildResource(),
}
"""Registry of callable resources."""


def main() -> None:
    """List available resources and their status."""

    sys.stdout.write("wafscore resources:\n\n")
    for name, resource in RESOURCE_REGISTRY.items():
        sys.stdout.write(f"- {name}: {resource.get_status()}\n")


if __name__ == "__main__":
    main()
