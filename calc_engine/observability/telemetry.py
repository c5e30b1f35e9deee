"""Observability and telemetry for the calculator engine."""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional
from datetime import datetime
from enum import Enum

from calc_engine.config import TRACE_LIMIT

logger = logging.getLogger(__name__)


class RecordType(str, Enum):
    """Types of trace records."""
    KEYSTROKE = "keystroke"
    EVALUATION = "evaluation"


@dataclass
class TraceRecord:
    """Base class for trace records."""
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for serialization."""
        record_type = getattr(self, 'record_type', None)
        return {
            "timestamp": self.timestamp.isoformat(),
            "type": record_type.value if record_type else "unknown",
            **{k: v for k, v in self.__dict__.items() if k not in ("timestamp", "record_type")}
        }


@dataclass
class KeystrokeRecord(TraceRecord):
    """Record for one edit token applied to the expression."""
    token: str
    before: str
    after: str
    record_type: RecordType = field(default=RecordType.KEYSTROKE, init=False)

    @property
    def rejected(self) -> bool:
        return self.before == self.after


@dataclass
class EvaluationRecord(TraceRecord):
    """Record for one evaluation of the expression."""
    expression: str
    result: str
    error: Optional[str] = None
    duration_ms: float = 0.0
    record_type: RecordType = field(default=RecordType.EVALUATION, init=False)


# In-memory trace storage, oldest records dropped first
_trace_log: Deque[TraceRecord] = deque(maxlen=TRACE_LIMIT)


def log_keystroke(token: str, before: str, after: str):
    """Log an edit token and the expression change it caused."""
    record = KeystrokeRecord(
        timestamp=datetime.now(),
        token=token,
        before=before,
        after=after
    )
    _trace_log.append(record)
    if record.rejected:
        logger.debug(f"⌨️  {token!r} left '{before}' unchanged")
    else:
        logger.debug(f"⌨️  {token!r}: '{before}' → '{after}'")


def log_evaluation(expression: str, result: str, error: Optional[str], duration_ms: float):
    """Log an evaluation with timing."""
    record = EvaluationRecord(
        timestamp=datetime.now(),
        expression=expression,
        result=result,
        error=error,
        duration_ms=duration_ms
    )
    _trace_log.append(record)
    if error:
        logger.info(f"❌ {expression} → {error} ({duration_ms:.2f}ms)")
    else:
        logger.info(f"✅ {expression} = {result} ({duration_ms:.2f}ms)")


def get_trace() -> List[TraceRecord]:
    """Get the full trace log."""
    return list(_trace_log)


def get_trace_dicts() -> List[Dict[str, Any]]:
    """Get trace log as list of dictionaries."""
    return [record.to_dict() for record in _trace_log]


def get_keystrokes() -> List[KeystrokeRecord]:
    """Get all keystroke records."""
    return [r for r in _trace_log if isinstance(r, KeystrokeRecord)]


def get_evaluations() -> List[EvaluationRecord]:
    """Get all evaluation records."""
    return [r for r in _trace_log if isinstance(r, EvaluationRecord)]


def clear_trace():
    """Clear the trace log."""
    _trace_log.clear()


def format_trace_summary() -> str:
    """Format a human-readable trace summary."""
    if not _trace_log:
        return "No trace data"

    lines = ["\n=== Calculator Trace ==="]
    for record in _trace_log:
        timestamp = record.timestamp.strftime("%H:%M:%S")
        if isinstance(record, KeystrokeRecord):
            marker = " (rejected)" if record.rejected else ""
            lines.append(
                f"[{timestamp}] KEY {record.token}: {record.after}{marker}")
        elif isinstance(record, EvaluationRecord):
            outcome = record.error or record.result
            lines.append(
                f"[{timestamp}] EVAL {record.expression} → {outcome}")

    return "\n".join(lines)
