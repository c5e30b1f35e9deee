from typing import TypedDict


INITIAL_EXPRESSION = "0"


class EngineState(TypedDict):
    expression: str
    display: str


def build_initial_state() -> EngineState:
    state = EngineState(
        expression=INITIAL_EXPRESSION,
        display=INITIAL_EXPRESSION)
    return state
