"""Edit tokens emitted by a keypad or keyboard adapter."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenKind(str, Enum):
    DIGIT = "digit"
    DOT = "dot"
    OPERATOR = "operator"
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"
    SQUARE = "square"
    ROOT = "root"
    PI = "pi"
    CLEAR = "clear"
    EVALUATE = "evaluate"


DIGITS = tuple("0123456789")
OPERATORS = ("+", "-", "*", "/", "%")

# Text appended to the expression for tokens that carry no value
_FIXED_TEXT = {
    TokenKind.DOT: ".",
    TokenKind.OPEN_PAREN: "(",
    TokenKind.CLOSE_PAREN: ")",
    TokenKind.SQUARE: "^2",
    TokenKind.ROOT: "sqrt(",
    TokenKind.PI: "π",
}


@dataclass(frozen=True)
class EditToken:
    """One logical keystroke.

    Only DIGIT and OPERATOR carry a value; use the classmethod constructors
    rather than building instances by hand.
    """
    kind: TokenKind
    value: Optional[str] = None

    def __post_init__(self):
        if self.kind == TokenKind.DIGIT:
            if self.value not in DIGITS:
                raise ValueError(f"Digit token needs a single 0-9 character, got {self.value!r}")
        elif self.kind == TokenKind.OPERATOR:
            if self.value not in OPERATORS:
                raise ValueError(f"Unknown operator {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.value} token takes no value")

    @property
    def text(self) -> str:
        """Expression text this token contributes, empty for control tokens."""
        if self.value is not None:
            return self.value
        return _FIXED_TEXT.get(self.kind, "")

    @classmethod
    def digit(cls, d) -> "EditToken":
        return cls(TokenKind.DIGIT, str(d))

    @classmethod
    def operator(cls, op: str) -> "EditToken":
        return cls(TokenKind.OPERATOR, op)

    @classmethod
    def dot(cls) -> "EditToken":
        return cls(TokenKind.DOT)

    @classmethod
    def open_paren(cls) -> "EditToken":
        return cls(TokenKind.OPEN_PAREN)

    @classmethod
    def close_paren(cls) -> "EditToken":
        return cls(TokenKind.CLOSE_PAREN)

    @classmethod
    def square(cls) -> "EditToken":
        return cls(TokenKind.SQUARE)

    @classmethod
    def root(cls) -> "EditToken":
        return cls(TokenKind.ROOT)

    @classmethod
    def pi(cls) -> "EditToken":
        return cls(TokenKind.PI)

    @classmethod
    def clear(cls) -> "EditToken":
        return cls(TokenKind.CLEAR)

    @classmethod
    def evaluate(cls) -> "EditToken":
        return cls(TokenKind.EVALUATE)

    def __str__(self):
        return self.text or self.kind.value
