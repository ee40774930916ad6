"""Structured audit lines for export runs.

Audit output is off unless WPEXPORT_DEBUG_AUDIT is set. Fields bound with
bound_audit_fields() (for instance the export id) are added to every line
emitted inside the block, so the lines of one export can be grepped together.
"""

from __future__ import annotations

import json
import logging
import os
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Iterator, Mapping, Optional


AUDIT_ENV = "WPEXPORT_DEBUG_AUDIT"

_BOUND_FIELDS: ContextVar[Mapping[str, object]] = ContextVar("wpexport_audit_fields", default={})


def audit_enabled() -> bool:
    raw = str(os.environ.get(AUDIT_ENV, "")).strip().lower()
    return raw in {"1", "true", "yes", "on"}


def _jsonable(value):
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


@contextmanager
def bound_audit_fields(**fields) -> Iterator[Dict[str, object]]:
    merged = dict(_BOUND_FIELDS.get())
    merged.update(fields)
    token = _BOUND_FIELDS.set(merged)
    try:
        yield merged
    finally:
        _BOUND_FIELDS.reset(token)


def emit_audit(event: str, *, logger: Optional[logging.Logger] = None, **fields) -> None:
    if not audit_enabled():
        return
    log = logger or logging.getLogger("wpexport.audit")
    payload: Dict[str, object] = {"event": str(event or "unknown"), "ts": round(time.time(), 3)}
    for k, v in {**_BOUND_FIELDS.get(), **fields}.items():
        payload[str(k)] = _jsonable(v)
    log.info("AUDIT %s", json.dumps(payload, ensure_ascii=False, sort_keys=True))


@contextmanager
def audit_span(event: str, *, logger: Optional[logging.Logger] = None, **fields) -> Iterator[None]:
    """Emit <event>:start and <event>:end (with status and elapsed_ms) around a block."""
    if not audit_enabled():
        yield
        return

    t0 = time.perf_counter()
    emit_audit(f"{event}:start", logger=logger, **fields)
    status, error_text = "ok", ""
    try:
        yield
    except Exception as exc:
        status, error_text = "error", f"{type(exc).__name__}: {exc}"
        raise
    finally:
        emit_audit(
            f"{event}:end",
            logger=logger,
            status=status,
            elapsed_ms=round((time.perf_counter() - t0) * 1000.0, 3),
            error=error_text,
            **fields,
        )
