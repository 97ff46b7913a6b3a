"""Audit events emitted for every scorecard build attempt."""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import dataclass
from typing import Mapping, MutableSequence, Protocol

from .scorecard_limits import AuditConfig

_LOG = logging.getLogger(__name__)

MAX_RECORDED_EVENTS = 1000
"""Events kept in memory; older ones are dropped first."""

_EVENTS: deque[dict[str, object]] = deque(maxlen=MAX_RECORDED_EVENTS)

BUILT_EVENT = "SCORECARD_BUILT"
REJECTED_EVENT = "SCORECARD_REJECTED"


class AuditSink(Protocol):
    def emit(self, entry: dict[str, object]) -> None:  # pragma: no cover - trivial
        ...


@dataclass
class InMemoryAuditSink:
    """Sink that keeps events in a list for inspection."""

    events: MutableSequence[dict[str, object]]

    def emit(self, entry: dict[str, object]) -> None:
        self.events.append(dict(entry))


class ProductionAuditSink:
    """
    Sink that appends one JSON object per line to the audit log.

    The log is renamed to ``audit.jsonl.1`` once it reaches ``max_bytes``.
    Write failures are logged; a build never fails because of its audit trail.
    """

    __slots__ = ("_config",)

    def __init__(self, config: AuditConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> AuditConfig:
        return self._config or AuditConfig.from_env()

    def emit(self, entry: dict[str, object]) -> None:
        config = self.config
        line = json.dumps(entry, ensure_ascii=False, sort_keys=True)
        try:
            config.audit_file.parent.mkdir(parents=True, exist_ok=True)
            _rotate_if_needed(config)
            with config.audit_file.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            _LOG.warning(
                "Unable to write audit event to %s: %s", config.audit_file, exc
            )


def _rotate_if_needed(config: AuditConfig) -> None:
    path = config.audit_file
    if config.max_bytes is None or not path.exists():
        return
    if path.stat().st_size >= config.max_bytes:
        path.replace(path.with_name(path.name + ".1"))


_IN_MEMORY_SINK = InMemoryAuditSink(events=_EVENTS)
_DEFAULT_PRODUCTION_SINK: AuditSink = ProductionAuditSink()
_PRODUCTION_SINK: AuditSink | None = _DEFAULT_PRODUCTION_SINK


def set_production_audit_sink(sink: AuditSink | None) -> None:
    """Override the production audit sink (None disables it)."""

    global _PRODUCTION_SINK
    _PRODUCTION_SINK = sink


def reset_production_audit_sink() -> None:
    set_production_audit_sink(_DEFAULT_PRODUCTION_SINK)


def _emit(entry: dict[str, object]) -> None:
    _IN_MEMORY_SINK.emit(entry)
    if _PRODUCTION_SINK is not None:
        _PRODUCTION_SINK.emit(entry)


def record_build_event(
    report_sha256: str,
    layout_version: str,
    counts: Mapping[str, int],
) -> None:
    """Record a successful build without any report content."""

    _emit(
        {
            "event": BUILT_EVENT,
            "report_sha256": report_sha256,
            "layout_version": layout_version,
            "counts": dict(counts),
        }
    )


def record_rejection_event(
    report_sha256: str,
    layout_version: str,
    reason: str,
) -> None:
    """Record a failed build and the reason code it failed with."""

    _emit(
        {
            "event": REJECTED_EVENT,
            "report_sha256": report_sha256,
            "layout_version": layout_version,
            "reason": reason,
        }
    )


def get_audit_events() -> list[dict[str, object]]:
    """Return a snapshot of recorded events."""

    return list(_EVENTS)


def clear_audit_events() -> None:
    _EVENTS.clear()
