from __future__ import annotations

import logging

import pytest

from wpexport.core.audit import audit_span, bound_audit_fields, emit_audit


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


def _logger(name: str):
    log = logging.getLogger(name)
    log.setLevel(logging.INFO)
    log.handlers = []
    log.propagate = False
    h = _ListHandler()
    log.addHandler(h)
    return log, h


def test_emit_audit_is_noop_when_disabled(monkeypatch):
    monkeypatch.delenv("WPEXPORT_DEBUG_AUDIT", raising=False)
    log, h = _logger("wpexport.test.audit.disabled")
    emit_audit("UNIT_EVENT_DISABLED", logger=log, value=1)
    assert h.messages == []


def test_emit_audit_emits_when_enabled(monkeypatch):
    monkeypatch.setenv("WPEXPORT_DEBUG_AUDIT", "1")
    log, h = _logger("wpexport.test.audit.enabled")
    emit_audit("UNIT_EVENT_ENABLED", logger=log, value=7, path=object())
    assert any("UNIT_EVENT_ENABLED" in m for m in h.messages)


def test_audit_span_emits_start_end(monkeypatch):
    monkeypatch.setenv("WPEXPORT_DEBUG_AUDIT", "1")
    log, h = _logger("wpexport.test.audit.span")
    with audit_span("SPAN_CASE", logger=log):
        pass
    text = "\n".join(h.messages)
    assert "SPAN_CASE:start" in text
    assert "SPAN_CASE:end" in text


def test_audit_span_reports_error_and_reraises(monkeypatch):
    monkeypatch.setenv("WPEXPORT_DEBUG_AUDIT", "1")
    log, h = _logger("wpexport.test.audit.span_error")
    with pytest.raises(ValueError):
        with audit_span("SPAN_FAIL", logger=log):
            raise ValueError("boom")
    end = [m for m in h.messages if "SPAN_FAIL:end" in m]
    assert end and '"status": "error"' in end[0]


def test_bound_fields_are_added_inside_block_only(monkeypatch):
    monkeypatch.setenv("WPEXPORT_DEBUG_AUDIT", "1")
    log, h = _logger("wpexport.test.audit.bound")
    with bound_audit_fields(export_id="abc123"):
        emit_audit("INSIDE", logger=log)
    emit_audit("OUTSIDE", logger=log)
    inside = [m for m in h.messages if "INSIDE" in m][0]
    outside = [m for m in h.messages if "OUTSIDE" in m][0]
    assert '"export_id": "abc123"' in inside
    assert "export_id" not in outside
