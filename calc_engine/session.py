"""Calculator session: owns the engine state between keypresses."""
import logging
from typing import Optional

from calc_engine.engine.keymap import token_for_key
from calc_engine.engine.state import EngineState, build_initial_state
from calc_engine.engine.tokens import EditToken
from calc_engine.graph.build_graph import build_graph
from calc_engine.graph.state import build_keypress_state
from calc_engine.parser.evaluator import EvalResult

logger = logging.getLogger(__name__)


class Calculator:
    """
    One calculator, fed one keypress at a time.

    Keypresses are processed synchronously; a session must not be shared
    between threads.
    """

    def __init__(self, graph=None):
        self._graph = graph if graph is not None else build_graph()
        self.reset()

    def reset(self):
        self._state: EngineState = build_initial_state()
        self._last_result: Optional[EvalResult] = None

    @property
    def state(self) -> EngineState:
        return EngineState(**self._state)

    @property
    def expression(self) -> str:
        return self._state["expression"]

    @property
    def display(self) -> str:
        return self._state["display"]

    @property
    def last_result(self) -> Optional[EvalResult]:
        """Result of the most recent evaluation, if any."""
        return self._last_result

    def press(self, token: EditToken) -> EngineState:
        result = self._graph.invoke(build_keypress_state(self._state, token))
        self._state = EngineState(
            expression=result["expression"], display=result["display"])
        if result.get("result") is not None:
            self._last_result = result["result"]
        return self.state

    def press_key(self, key: str) -> bool:
        """Press a raw key; returns False if the key maps to no token."""
        token = token_for_key(key)
        if token is None:
            return False
        self.press(token)
        return True

    def type_keys(self, keys: str) -> EngineState:
        """Press every character of `keys` in order, skipping unknown ones."""
        for key in keys:
            if not self.press_key(key):
                logger.debug(f"Skipped key {key!r}")
        return self.state
