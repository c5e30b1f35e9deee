"""Tests for expression evaluation and result formatting."""
import math
import pytest
from calc_engine.parser.errors import (
    CalculationError,
    DivisionByZeroError,
    DomainError,
    ExpressionSyntaxError,
    ResultOverflowError,
)
from calc_engine.parser.evaluator import calculate, evaluate, evaluate_node, format_result
from calc_engine.parser.nodes import Literal, Power


def test_calculate_basic_operations():
    """Test basic arithmetic operations."""
    assert calculate("1+1") == 2
    assert calculate("5-2") == 3
    assert calculate("3*4") == 12
    assert calculate("10/2") == 5
    assert calculate("7%3") == 1
    assert calculate("1.5+2.5") == 4


def test_calculate_order_of_operations():
    """Test correct order of operations."""
    assert calculate("2+3*4") == 14
    assert calculate("(2+3)*4") == 20
    assert calculate("10-4/2") == 8
    assert calculate("10/2*5") == 25
    assert calculate("10-2+3") == 11
    assert calculate("((1+1)*2+1)*2") == 10


def test_calculate_remainder_sign_follows_dividend():
    """Test that % is the floating-point remainder."""
    assert calculate("-5%2") == -1
    assert calculate("5%-2") == 1
    assert calculate("7.5%2") == 1.5


def test_calculate_unary_sign():
    """Test unary minus and plus."""
    assert calculate("-5") == -5
    assert calculate("-5+10") == 5
    assert calculate("10+-2") == 8
    assert calculate("10*-2") == -20
    assert calculate("-(2+3)") == -5
    assert calculate("--4") == 4
    assert calculate("-sqrt(4)+1") == -1


def test_calculate_sqrt():
    """Test sqrt calls and the root glyph."""
    assert calculate("sqrt(9)") == 3
    assert calculate("sqrt(6.25)") == 2.5
    assert calculate("sqrt(0)") == 0
    assert calculate("√9") == 3
    assert calculate("√(1+3)") == 2
    assert calculate("1+√16") == 5
    assert calculate("sqrt(sqrt(81))") == 3


def test_calculate_pi():
    """Test the pi constant."""
    assert calculate("π") == math.pi
    assert calculate("2*π") == 2 * math.pi
    assert calculate("π/2") == math.pi / 2


def test_calculate_power():
    """Test squares and other integer exponents."""
    assert calculate("4^2") == 16
    assert calculate("3²") == 9
    assert calculate("1.5^2") == 2.25
    assert calculate("(-2)^2") == 4
    assert calculate("-3^2") == -9
    assert calculate("2^10") == 1024
    assert calculate("1+4^2") == 17
    assert calculate("sqrt(3^2+7)") == 4


def test_power_node_with_any_integer_exponent():
    """Test exponents the parser never produces."""
    assert evaluate_node(Power(Literal(2.0), 3)) == 8
    assert evaluate_node(Power(Literal(2.0), -1)) == 0.5
    assert evaluate_node(Power(Literal(5.0), 0)) == 1
    with pytest.raises(DivisionByZeroError):
        evaluate_node(Power(Literal(0.0), -1))


def test_power_with_huge_exponents():
    """Test exponents too large for a float when the result is still finite."""
    huge = "1" * 400
    assert calculate("1^" + huge) == 1
    assert calculate("(-1)^" + huge) == -1
    assert calculate("0.5^" + huge) == 0
    assert calculate("0^" + huge) == 0
    assert calculate("2^0" + "0" * 4999 + "3") == 8
    with pytest.raises(ResultOverflowError):
        calculate("2^" + huge)


def test_oversized_exponent_is_a_syntax_error():
    """Test that exponent literals past the digit limit fail cleanly."""
    result = evaluate("2^" + "1" * 5000)
    assert isinstance(result.error, ExpressionSyntaxError)
    assert result.error.position == 2
    assert "exponent too large" in str(result.error)


def test_named_functions():
    """Test PI(), pow2() and mod()."""
    assert calculate("PI()") == math.pi
    assert calculate("2*PI()") == 2 * math.pi
    assert calculate("PI()/2") == math.pi / 2
    assert calculate("pow2(3)") == 9
    assert calculate("pow2(-2)") == 4
    assert calculate("pow2(1.5)") == 2.25
    assert calculate("1+pow2(4)") == 17
    assert calculate("mod(5,2)") == 1
    assert calculate("mod(-5,2)") == -1
    assert calculate("mod(5,-2)") == 1
    assert calculate("mod(7.5, 2.2)") == math.fmod(7.5, 2.2)
    assert calculate("mod(6,3)") == 0


def test_named_functions_combined():
    """Test named functions nested inside larger expressions."""
    assert calculate("sqrt(pow2(3)+7)") == 4
    assert format_result(calculate("(sqrt(9)+pow2(2))/mod(7,4)")) == "2.3333333333333335"
    assert format_result(calculate("100/pow2(sqrt(4)+sqrt(1))")) == "11.11111111111111"
    assert calculate("-PI()+(10/2)*3") == -math.pi + 15


def test_named_function_errors():
    """Test failures inside and around named functions."""
    with pytest.raises(DivisionByZeroError):
        calculate("mod(5,0)")
    with pytest.raises(DivisionByZeroError):
        calculate("PI()/0")
    for text in ["unknown(1)", "sqrt()", "sqrt(1,2)", "mod(1)", "PI(1)", "PI"]:
        with pytest.raises(ExpressionSyntaxError):
            calculate(text)


def test_division_by_zero():
    """Test that / and % by zero fail."""
    with pytest.raises(DivisionByZeroError):
        calculate("5/0")
    with pytest.raises(DivisionByZeroError):
        calculate("5%0")
    with pytest.raises(DivisionByZeroError):
        calculate("10/(2-2)")
    with pytest.raises(DivisionByZeroError):
        calculate("sqrt(10/0)")
    with pytest.raises(DivisionByZeroError):
        calculate("π/0.0")


def test_sqrt_of_negative():
    """Test that sqrt of a negative number is a domain error."""
    with pytest.raises(DomainError, match="negative number \\(-1\\)"):
        calculate("sqrt(-1)")
    with pytest.raises(DomainError):
        calculate("√-1")
    with pytest.raises(DomainError):
        calculate("sqrt(2-3)")


def test_overflow():
    """Test that non-finite results fail."""
    with pytest.raises(ResultOverflowError):
        calculate("1" + "0" * 200 + "^2")
    with pytest.raises(ResultOverflowError):
        calculate("10^400")
    with pytest.raises(ResultOverflowError):
        calculate("9" * 400)


def test_errors_share_a_base_class():
    """Test that callers can catch every failure at once."""
    for text in ["*3", "5/0", "sqrt(-4)", "10^400"]:
        with pytest.raises(CalculationError):
            calculate(text)
    assert issubclass(CalculationError, ValueError)


def test_long_chains_evaluate():
    """Test that long operator chains do not hit the recursion limit."""
    assert calculate("+".join(["1"] * 5000)) == 5000


def test_evaluate_returns_value():
    """Test the non-raising entry point on success."""
    result = evaluate("2+3")
    assert result.ok
    assert result.value == 5
    assert result.error is None
    assert result.text == "5"


def test_evaluate_returns_error():
    """Test the non-raising entry point on failure."""
    result = evaluate("*3")
    assert not result.ok
    assert result.value is None
    assert isinstance(result.error, ExpressionSyntaxError)
    assert result.error.position == 0

    result = evaluate("5/0")
    assert isinstance(result.error, DivisionByZeroError)
    assert result.text == "Error: division by zero"


def test_evaluate_never_raises():
    """Test a handful of hostile inputs."""
    for text in ["", " ", "(", ")", "((", "1..2", "sqrt(", "^2", "π π", "abc", "(" * 500,
                 "2^" + "1" * 5000, "1,2", "mod(1,"]:
        result = evaluate(text)
        assert isinstance(result.error, ExpressionSyntaxError)


def test_evaluate_is_deterministic():
    """Test that evaluation is referentially transparent."""
    for text in ["1/3", "2*(3+4)/7", "(1.1+2.2)*3.3"]:
        assert evaluate(text).value == evaluate(text).value
        assert calculate(text) == calculate(text + "+0")
        assert calculate(text) == calculate("--(" + text + ")")


def test_format_result():
    """Test shortest positional rendering."""
    assert format_result(2.0) == "2"
    assert format_result(2.5) == "2.5"
    assert format_result(-0.0) == "0"
    assert format_result(-7.0) == "-7"
    assert format_result(0.1 + 0.2) == "0.30000000000000004"
    assert format_result(100 / 9) == "11.11111111111111"
    assert format_result(calculate("999999999*999999999")) == "999999998000000000"
    assert format_result(1e-7) == "0.0000001"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
