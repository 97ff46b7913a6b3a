"""Contract tests for the scorecard resource registry."""

from __future__ import annotations

from typing import Callable

import pytest

from wafscore.api import resources, schema_registry
from wafscore.domain import reason_codes
from wafscore.services.scorecard_audit import REJECTED_EVENT, get_audit_events

RESOURCE_NAME = "scorecard/build"


def test_registry_exposes_health_resource() -> None:
    health = resources.RESOURCE_REGISTRY["health"]
    response = health()

    assert response["status"] == "ok"
    assert "wafscore" in response["detail"]


def test_build_returns_validated_scorecard(make_report: Callable[..., str]) -> None:
    resource = resources.RESOURCE_REGISTRY[RESOURCE_NAME]
    response = resource(
        {
            "format": "assessment_csv",
            "payload": make_report(),
            "meta": {"layout": "v1"},
        }
    )

    schema_registry.validate(resources.RESPONSE_SCHEMA, response)
    assert [area["design_area"] for area in response["areas"]] == [
        "Resiliency",
        "Governance",
        "Identity",
    ]


@pytest.mark.parametrize(
    "request_body",
    [
        {"format": "assessment_csv"},
        {"format": "pdf", "payload": "x"},
        {"format": "assessment_csv", "payload": ""},
        {"format": "assessment_csv", "payload": "x", "extra": True},
    ],
)
def test_invalid_requests_are_rejected(request_body: dict[str, object]) -> None:
    response = resources.RESOURCE_REGISTRY[RESOURCE_NAME](request_body)

    assert response["status"] == "error"
    assert response["reason"] == reason_codes.INVALID_INPUT


def test_unknown_layout_is_invalid_input(make_report: Callable[..., str]) -> None:
    response = resources.RESOURCE_REGISTRY[RESOURCE_NAME](
        {
            "format": "assessment_csv",
            "payload": make_report(),
            "meta": {"layout": "v9"},
        }
    )

    assert response["reason"] == reason_codes.INVALID_INPUT
    assert "layout" in response["detail"]


@pytest.mark.parametrize(
    ("overrides", "reason"),
    [
        ({"footer": None}, reason_codes.MALFORMED_REPORT),
        ({"summary_line": ",Moderate"}, reason_codes.FIELD_PARSE_FAILED),
        (
            {"findings": [("Performance - Scaling", "Autoscale", 4, "Low")]},
            reason_codes.CORRELATION_FAILED,
        ),
    ],
)
def test_pipeline_errors_map_to_reason_codes(
    make_report: Callable[..., str], overrides: dict[str, object], reason: str
) -> None:
    response = resources.RESOURCE_REGISTRY[RESOURCE_NAME](
        {"format": "assessment_csv", "payload": make_report(**overrides)}
    )

    assert response["status"] == "error"
    assert response["reason"] == reason


def test_oversized_report_is_rejected(
    make_report: Callable[..., str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("WAFSCORE_MAX_REPORT_BYTES", "64")
    response = resources.RESOURCE_REGISTRY[RESOURCE_NAME](
        {"format": "assessment_csv", "payload": make_report()}
    )

    assert response["reason"] == reason_codes.REPORT_TOO_LARGE


def test_lone_surrogate_payload_is_malformed() -> None:
    response = resources.RESOURCE_REGISTRY[RESOURCE_NAME](
        {"format": "assessment_csv", "payload": "bad \ud800 text"}
    )

    assert response["status"] == "error"
    assert response["reason"] == reason_codes.MALFORMED_REPORT
    (event,) = get_audit_events()
    assert event["event"] == REJECTED_EVENT
    assert event["reason"] == reason_codes.MALFORMED_REPORT
