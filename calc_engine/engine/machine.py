"""Incremental edit rules that turn keystrokes into expression text."""
import logging
from typing import Callable, Dict

from calc_engine.engine.state import EngineState, INITIAL_EXPRESSION
from calc_engine.engine.tokens import EditToken, TokenKind

logger = logging.getLogger(__name__)

# A new numeric segment starts after any of these
SEGMENT_MARKERS = ("+", "-", "*", "/", "(", ")", "^", "%", "sqrt(")


def current_segment(expression: str) -> str:
    """
    Return the number currently being typed at the end of `expression`.

    The segment starts one character past the right-most occurrence of any
    marker in SEGMENT_MARKERS, or is the whole expression if none occurs.
    """
    last_index = max(expression.rfind(marker) for marker in SEGMENT_MARKERS)
    if last_index == -1:
        return expression
    return expression[last_index + 1:]


def _replace_initial(expression: str, text: str) -> str:
    if expression == INITIAL_EXPRESSION:
        return text
    return expression + text


def _on_clear(state: EngineState, token: EditToken) -> str:
    return INITIAL_EXPRESSION


def _on_replace_or_append(state: EngineState, token: EditToken) -> str:
    return _replace_initial(state["expression"], token.text)


def _on_paren(state: EngineState, token: EditToken) -> str:
    return state["expression"] + token.text


def _on_dot(state: EngineState, token: EditToken) -> str:
    expression = state["expression"]
    if expression == INITIAL_EXPRESSION or state["display"] == INITIAL_EXPRESSION:
        return "0."
    if "." in current_segment(expression):
        logger.debug(f"Rejected duplicate decimal point in '{expression}'")
        return expression
    return expression + "."


def _on_square(state: EngineState, token: EditToken) -> str:
    expression = state["expression"]
    if expression == INITIAL_EXPRESSION:
        logger.debug("Rejected square with no operand")
        return expression
    return expression + token.text


_HANDLERS: Dict[TokenKind, Callable[[EngineState, EditToken], str]] = {
    TokenKind.CLEAR: _on_clear,
    TokenKind.DIGIT: _on_replace_or_append,
    TokenKind.OPERATOR: _on_replace_or_append,
    TokenKind.ROOT: _on_replace_or_append,
    TokenKind.PI: _on_replace_or_append,
    TokenKind.OPEN_PAREN: _on_paren,
    TokenKind.CLOSE_PAREN: _on_paren,
    TokenKind.DOT: _on_dot,
    TokenKind.SQUARE: _on_square,
}


def apply_token(state: EngineState, token: EditToken) -> EngineState:
    """
    Apply one edit token and return the next state.

    The input state is never modified. EVALUATE leaves the state untouched;
    evaluating the expression is the caller's job.

    Args:
        state: Current engine state
        token: Keystroke to apply

    Returns:
        New EngineState with display mirroring the expression
    """
    if token.kind == TokenKind.EVALUATE:
        return EngineState(expression=state["expression"], display=state["display"])

    expression = _HANDLERS[token.kind](state, token)
    return EngineState(expression=expression, display=expression)
