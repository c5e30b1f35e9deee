"""Expression tree produced by the parser."""
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class UnaryFunc:
    name: str
    operand: "Node"


@dataclass(frozen=True)
class Power:
    base: "Node"
    exponent: int


@dataclass(frozen=True)
class Negate:
    operand: "Node"


Node = Union[Literal, BinaryOp, UnaryFunc, Power, Negate]
