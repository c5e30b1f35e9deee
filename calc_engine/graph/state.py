from typing import TypedDict, Optional

from calc_engine.engine.state import EngineState
from calc_engine.engine.tokens import EditToken
from calc_engine.parser.evaluator import EvalResult


class KeypressState(TypedDict):
    expression: str
    display: str
    token: EditToken
    result: Optional[EvalResult]


def build_keypress_state(engine_state: EngineState, token: EditToken) -> KeypressState:
    state = KeypressState(
        expression=engine_state["expression"],
        display=engine_state["display"],
        token=token,
        result=None)
    return state
