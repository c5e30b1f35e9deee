"""Split expression text into tokens."""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from calc_engine.parser.errors import ExpressionSyntaxError


class LexKind(str, Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    LPAREN = "lparen"
    RPAREN = "rparen"
    FUNCTION = "function"
    CONSTANT = "constant"
    POWER = "power"
    ROOT = "root"
    COMMA = "comma"
    SQUARE = "square"
    END = "end"


@dataclass(frozen=True)
class Token:
    kind: LexKind
    text: str
    position: int
    value: Optional[float] = None


# Named functions and their argument counts; a name is only a token together
# with its opening parenthesis, e.g. "mod("
FUNCTIONS = {
    "sqrt": 1,
    "pow2": 1,
    "mod": 2,
    "PI": 0,
}

_SINGLE_CHARS = {
    "+": LexKind.OPERATOR,
    "-": LexKind.OPERATOR,
    "*": LexKind.OPERATOR,
    "/": LexKind.OPERATOR,
    "%": LexKind.OPERATOR,
    "(": LexKind.LPAREN,
    ")": LexKind.RPAREN,
    ",": LexKind.COMMA,
    "^": LexKind.POWER,
    "π": LexKind.CONSTANT,
    "√": LexKind.ROOT,
    "²": LexKind.SQUARE,
}

_NUMBER_CHARS = "0123456789."


def _scan_number(text: str, start: int) -> Token:
    end = start
    while end < len(text) and text[end] in _NUMBER_CHARS:
        end += 1
    literal = text[start:end]
    if literal.count(".") > 1:
        raise ExpressionSyntaxError(f"malformed number '{literal}'", start)
    if literal == ".":
        raise ExpressionSyntaxError("decimal point without digits", start)
    return Token(LexKind.NUMBER, literal, start, float(literal))


def _scan_function(text: str, start: int) -> Token:
    end = start
    while end < len(text) and (text[end].isascii() and text[end].isalnum()):
        end += 1
    name = text[start:end]
    if name not in FUNCTIONS:
        raise ExpressionSyntaxError(f"unknown function '{name}'", start)
    if not text.startswith("(", end):
        raise ExpressionSyntaxError(f"expected '(' after '{name}'", end)
    return Token(LexKind.FUNCTION, name + "(", start)


def tokenize(text: str) -> List[Token]:
    """
    Tokenize an expression left to right.

    Spaces are skipped. The returned list always ends with an END token
    positioned at len(text).

    Raises:
        ExpressionSyntaxError: on a character no token starts with, or an
            unknown function name
    """
    tokens: List[Token] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == " ":
            i += 1
        elif char in _NUMBER_CHARS:
            token = _scan_number(text, i)
            tokens.append(token)
            i += len(token.text)
        elif char.isascii() and char.isalpha():
            token = _scan_function(text, i)
            tokens.append(token)
            i += len(token.text)
        elif char in _SINGLE_CHARS:
            tokens.append(Token(_SINGLE_CHARS[char], char, i))
            i += 1
        else:
            raise ExpressionSyntaxError(f"unexpected character '{char}'", i)
    tokens.append(Token(LexKind.END, "", len(text)))
    return tokens
