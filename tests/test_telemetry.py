"""Tests for the in-memory trace."""
import pytest
from calc_engine.config import TRACE_LIMIT
from calc_engine.observability.telemetry import (
    EvaluationRecord,
    KeystrokeRecord,
    clear_trace,
    format_trace_summary,
    get_evaluations,
    get_keystrokes,
    get_trace,
    get_trace_dicts,
    log_evaluation,
    log_keystroke,
)


def test_empty_trace_summary():
    """Test the summary with nothing recorded."""
    assert get_trace() == []
    assert format_trace_summary() == "No trace data"


def test_log_keystroke():
    """Test that keystrokes are recorded with before and after text."""
    log_keystroke("5", "0", "5")
    log_keystroke(".", "1.5", "1.5")

    keystrokes = get_keystrokes()
    assert len(keystrokes) == 2
    assert isinstance(keystrokes[0], KeystrokeRecord)
    assert keystrokes[0].rejected is False
    assert keystrokes[1].rejected is True
    assert get_evaluations() == []


def test_log_evaluation():
    """Test that evaluations are recorded with their outcome."""
    log_evaluation("2+3", "5", None, 0.12)
    log_evaluation("5/0", "Error", "DivisionByZeroError: division by zero", 0.05)

    evaluations = get_evaluations()
    assert len(evaluations) == 2
    assert isinstance(evaluations[1], EvaluationRecord)
    assert evaluations[0].result == "5"
    assert evaluations[1].error.startswith("DivisionByZeroError")


def test_trace_dicts():
    """Test serialization of records."""
    log_keystroke("+", "2", "2+")
    log_evaluation("2+2", "4", None, 0.1)

    dicts = get_trace_dicts()
    assert dicts[0]["type"] == "keystroke"
    assert dicts[0]["after"] == "2+"
    assert dicts[1]["type"] == "evaluation"
    assert dicts[1]["result"] == "4"
    assert "timestamp" in dicts[1]
    assert "record_type" not in dicts[1]


def test_format_trace_summary():
    """Test the human-readable summary."""
    log_keystroke("9", "0", "9")
    log_keystroke(".", "9.", "9.")
    log_evaluation("9", "9", None, 0.1)

    summary = format_trace_summary()
    assert "=== Calculator Trace ===" in summary
    assert "KEY 9: 9" in summary
    assert "(rejected)" in summary
    assert "EVAL 9 → 9" in summary


def test_trace_is_capped():
    """Test that the oldest records are dropped past the limit."""
    for i in range(TRACE_LIMIT + 5):
        log_keystroke(str(i % 10), "0", str(i))
    trace = get_trace()
    assert len(trace) == TRACE_LIMIT
    assert trace[0].after == "5"


def test_clear_trace():
    """Test clearing the trace."""
    log_keystroke("1", "0", "1")
    clear_trace()
    assert get_trace() == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
