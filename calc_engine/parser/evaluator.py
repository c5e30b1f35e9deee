"""Evaluate expression trees and render results."""
import logging
import math
import operator
from dataclasses import dataclass
from typing import Optional

import numpy as np

from calc_engine.parser.errors import (
    CalculationError,
    DivisionByZeroError,
    DomainError,
    ResultOverflowError,
)
from calc_engine.parser.nodes import BinaryOp, Literal, Negate, Node, Power, UnaryFunc
from calc_engine.parser.parser import parse

logger = logging.getLogger(__name__)

_BIN_OPS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": math.fmod,
}

_ZERO_DIVISOR_OPS = ("/", "%")


def _finite(value: float) -> float:
    if not math.isfinite(value):
        raise ResultOverflowError(f"result is not finite ({value})")
    return value


def _apply_binary(op: str, left: float, right: float) -> float:
    if op in _ZERO_DIVISOR_OPS and right == 0:
        raise DivisionByZeroError("division by zero")
    return _finite(_BIN_OPS[op](left, right))


def _power(base: float, exponent: int) -> float:
    if exponent == 2:
        return _finite(base * base)
    if base == 0:
        if exponent < 0:
            raise DivisionByZeroError("zero raised to a negative power")
        return 1.0 if exponent == 0 else 0.0
    if abs(base) == 1:
        return -1.0 if base < 0 and exponent % 2 else 1.0
    try:
        return _finite(base ** exponent)
    except OverflowError as e:
        # Exponent too large for a float: the magnitude either vanishes or blows up
        if (abs(base) < 1) == (exponent > 0):
            return 0.0
        raise ResultOverflowError(f"power overflow: {e}") from e


def _evaluate_binary(node: BinaryOp) -> float:
    # Walk the left spine iteratively; long chains like 1+1+...+1 are deep on the left
    spine = []
    while isinstance(node, BinaryOp):
        spine.append(node)
        node = node.left
    value = evaluate_node(node)
    for op_node in reversed(spine):
        value = _apply_binary(op_node.op, value, evaluate_node(op_node.right))
    return value


def evaluate_node(node: Node) -> float:
    if isinstance(node, Literal):
        return _finite(float(node.value))

    if isinstance(node, BinaryOp):
        if node.op not in _BIN_OPS:
            raise ValueError(f"Unsupported operator: {node.op}")
        return _evaluate_binary(node)

    if isinstance(node, Negate):
        return -evaluate_node(node.operand)

    if isinstance(node, UnaryFunc):
        if node.name != "sqrt":
            raise ValueError(f"Unsupported function: {node.name}")
        value = evaluate_node(node.operand)
        if value < 0:
            raise DomainError(f"cannot take square root of negative number ({format_result(value)})")
        return math.sqrt(value)

    if isinstance(node, Power):
        return _power(evaluate_node(node.base), node.exponent)

    raise ValueError(f"Unsupported expression: {type(node).__name__}")


def format_result(value: float) -> str:
    """
    Render a float as the shortest positional decimal that round-trips.

    Examples:
        >>> format_result(2.0)
        '2'
        >>> format_result(2.5)
        '2.5'
    """
    # -0.0 + 0.0 is 0.0
    return np.format_float_positional(value + 0.0, trim="-")


def calculate(text: str) -> float:
    """Parse and evaluate `text`, raising a CalculationError on failure."""
    return evaluate_node(parse(text))


@dataclass(frozen=True)
class EvalResult:
    """Outcome of one evaluation: a finite value or a typed error."""
    value: Optional[float] = None
    error: Optional[CalculationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        if self.error is not None:
            return f"Error: {self.error}"
        return format_result(self.value)


def evaluate(text: str) -> EvalResult:
    """
    Evaluate expression text without raising.

    Args:
        text: Expression text as built by the edit machine

    Returns:
        EvalResult holding either the value or the CalculationError
    """
    try:
        value = calculate(text)
    except CalculationError as e:
        logger.info(f"Evaluation of '{text}' failed: {type(e).__name__}: {e}")
        return EvalResult(error=e)
    logger.debug(f"Evaluated '{text}' = {value}")
    return EvalResult(value=value)
