"""Tests for arskit.diagnostics."""

import logging

import pytest

from arskit.diagnostics import NumericalDiagnostics
from arskit.exceptions import NumericalInstabilityWarning


def _clamp(diagnostics):
    diagnostics.record_clamp(
        slope=2.0, intercept=0.0, quantities={"exponent": 40.0}, threshold=25.0
    )


def test_first_event_warns_and_logs(caplog):
    """Tests that the first clamp is reported through warnings and logging."""
    diagnostics = NumericalDiagnostics()
    with caplog.at_level(logging.WARNING, logger="arskit"):
        with pytest.warns(NumericalInstabilityWarning, match="exponent=40"):
            _clamp(diagnostics)
    assert diagnostics.n_clamped == 1
    assert any("clamped" in r.getMessage() for r in caplog.records)


def test_later_events_only_count(recwarn):
    """Tests that events past max_reports are counted silently."""
    diagnostics = NumericalDiagnostics(max_reports=2)
    for _ in range(5):
        _clamp(diagnostics)
    assert len([w for w in recwarn if w.category is NumericalInstabilityWarning]) == 2
    assert diagnostics.n_clamped == 5
    assert diagnostics.last_event["threshold"] == 25.0


def test_reset_and_summary(recwarn):
    """Tests that reset clears the counters reported by summary."""
    diagnostics = NumericalDiagnostics()
    _clamp(diagnostics)
    assert diagnostics.summary()["n_clamped"] == 1
    diagnostics.reset()
    assert diagnostics.summary() == {"n_clamped": 0, "last_event": None}
