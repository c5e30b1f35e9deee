"""Map raw keyboard keys and keypad button labels to edit tokens."""
import logging
from typing import Optional

from calc_engine.engine.tokens import EditToken, DIGITS, OPERATORS

logger = logging.getLogger(__name__)

# Keypad layout, row by row
BUTTON_LAYOUT = [
    ["C", "(", ")", "/"],
    ["7", "8", "9", "*"],
    ["4", "5", "6", "-"],
    ["1", "2", "3", "+"],
    ["0", ".", "%", "="],
    ["x²", "√", "π"],
]

_NAMED_KEYS = {
    "Enter": EditToken.evaluate(),
    "=": EditToken.evaluate(),
    "Backspace": EditToken.clear(),
    "Delete": EditToken.clear(),
    "Escape": EditToken.clear(),
    "C": EditToken.clear(),
    "c": EditToken.clear(),
    ".": EditToken.dot(),
    "(": EditToken.open_paren(),
    ")": EditToken.close_paren(),
    "x²": EditToken.square(),
    "²": EditToken.square(),
    "^": EditToken.square(),
    "√": EditToken.root(),
    "r": EditToken.root(),
    "π": EditToken.pi(),
    "p": EditToken.pi(),
}


def token_for_key(key: str) -> Optional[EditToken]:
    """
    Translate a key name or button label into an EditToken.

    Args:
        key: Single character, keypad label, or DOM-style key name

    Returns:
        The matching EditToken, or None for keys the calculator ignores
    """
    if key in DIGITS:
        return EditToken.digit(key)
    if key in OPERATORS:
        return EditToken.operator(key)
    token = _NAMED_KEYS.get(key)
    if token is None:
        logger.debug(f"Ignored unknown key: {key!r}")
    return token
