"""Typed calculation errors."""


class CalculationError(ValueError):
    """Base class for everything evaluation can fail with."""


class ExpressionSyntaxError(CalculationError):
    """Malformed or unbalanced expression text."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at position {position}")
        self.position = position


class DivisionByZeroError(CalculationError):
    pass


class DomainError(CalculationError):
    pass


class ResultOverflowError(CalculationError):
    pass
