from enum import Enum
import logging
import time
from calc_engine.config import ERROR_MARKER, SHOW_ERROR_DETAIL
from calc_engine.engine.machine import apply_token
from calc_engine.engine.state import EngineState
from calc_engine.engine.tokens import TokenKind
from calc_engine.graph.state import KeypressState
from calc_engine.parser.evaluator import EvalResult, evaluate
from calc_engine.observability.telemetry import log_keystroke, log_evaluation

logger = logging.getLogger(__name__)


class NodeName(str, Enum):
    APPLY = "apply"
    EVALUATE = "evaluate"


def error_display(result: EvalResult) -> str:
    """Text shown in place of a result after a failed evaluation."""
    if SHOW_ERROR_DETAIL:
        return f"{ERROR_MARKER}: {result.error}"
    return ERROR_MARKER


def apply_node(state: KeypressState) -> KeypressState:
    """Run the edit machine for the pending token."""
    token = state["token"]
    before = state["expression"]
    engine_state = apply_token(
        EngineState(expression=before, display=state["display"]), token)

    if token.kind != TokenKind.EVALUATE:
        log_keystroke(str(token), before, engine_state["expression"])

    state["expression"] = engine_state["expression"]
    state["display"] = engine_state["display"]
    state["result"] = None
    return state


def route_after_apply(state: KeypressState) -> str:
    """Send EVALUATE tokens on to the evaluator, finish everything else."""
    if state["token"].kind == TokenKind.EVALUATE:
        return NodeName.EVALUATE.value
    return "end"


def evaluate_keypress_node(state: KeypressState) -> KeypressState:
    """Evaluate the expression; the expression itself is kept either way."""
    expression = state["expression"]
    start = time.perf_counter()
    result = evaluate(expression)
    duration_ms = (time.perf_counter() - start) * 1000

    if result.ok:
        state["display"] = result.text
    else:
        logger.warning(f"Keeping '{expression}' after failed evaluation: {result.error}")
        state["display"] = error_display(result)

    log_evaluation(
        expression,
        state["display"],
        None if result.ok else f"{type(result.error).__name__}: {result.error}",
        duration_ms)
    state["result"] = result
    return state
