"""CLI interface for the calculator."""
import sys
from calc_engine.config import LOG_LEVEL
from calc_engine.engine.keymap import BUTTON_LAYOUT
from calc_engine.session import Calculator
from calc_engine.observability.telemetry import format_trace_summary, clear_trace
from calc_engine.observability.logging_config import configure_logging

configure_logging(LOG_LEVEL)


def _print_keypad():
    for row in BUTTON_LAYOUT:
        print("  " + " ".join(f"{label:>3}" for label in row))


def run_keys(keys: str) -> Calculator:
    """Replay a key sequence on a fresh calculator."""
    calculator = Calculator()
    calculator.type_keys(keys)
    return calculator


def interactive():
    calculator = Calculator()
    print("Keys (type them, Enter alone evaluates, 'q' quits):")
    _print_keypad()
    while True:
        try:
            line = input(f"[{calculator.display}] ")
        except EOFError:
            break
        if line.lower() == "q":
            break
        if not line:
            calculator.press_key("Enter")
        else:
            calculator.type_keys(line)
        print(calculator.display)


def main():
    if len(sys.argv) < 2:
        interactive()
        return

    keys = "".join(sys.argv[1:])
    clear_trace()  # Clear trace for fresh run

    calculator = run_keys(keys)

    # Print trace summary
    print(format_trace_summary())

    # Print results
    print(f"\n{'='*60}")
    print(f"Expression: {calculator.expression}")
    print(f"Display: {calculator.display}")
    print(f"{'='*60}")


if __name__ == "__main__":
    main()
