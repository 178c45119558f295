"""Text rendering of the calculator state."""
from typing import List, Union

from calculator_client.client.state import CalculatorState, DisplayKind
from calculator_client.common.operators import get_operator_symbol


CALCULATING_TEXT: str = "Calculating..."
PLACEHOLDER_TEXT: str = "Enter values and press calculate"
EMPTY_OPERAND: str = "_"
# Floats beyond this magnitude keep their exponent notation
MAX_PLAIN_INTEGRAL: float = 1e16


def format_result(value: Union[int, float]) -> str:
    """
    Format a numeric result for display.

    Integral floats drop their fractional part (``8.0`` shows as ``8``) as long as they
    stay below ``MAX_PLAIN_INTEGRAL``; larger ones keep Python's notation (``1e+21``).

    :param value: Result returned by the service

    :return: Display text
    :rtype: str
    """
    if isinstance(value, float) and value.is_integer() and abs(value) < MAX_PLAIN_INTEGRAL:
        return str(int(value))
    return str(value)


def render_display(state: CalculatorState) -> str:
    """
    Render the display line: calculating, then error, then result, then placeholder.

    :param CalculatorState state: State to render

    :return: Display text
    :rtype: str
    """
    kind = state.display_kind
    if kind is DisplayKind.CALCULATING:
        return CALCULATING_TEXT
    if kind is DisplayKind.ERROR:
        return str(state.error)
    if kind is DisplayKind.RESULT:
        return format_result(state.result)
    return PLACEHOLDER_TEXT


def render_expression(state: CalculatorState) -> str:
    """Render the current inputs as ``a <symbol> b``."""
    a = state.a or EMPTY_OPERAND
    b = state.b or EMPTY_OPERAND
    return f"{a} {get_operator_symbol(state.operator)} {b}"


def render(state: CalculatorState) -> str:
    """
    Render the full calculator panel.

    :param CalculatorState state: State to render

    :return: Multi-line panel
    :rtype: str
    """
    display = render_display(state)
    width = max(len(display), len(render_expression(state)), 24)
    lines: List[str] = [
        "+" + "-" * (width + 2) + "+",
        f"| {render_expression(state):<{width}} |",
        f"| {display:>{width}} |",
        "+" + "-" * (width + 2) + "+",
    ]
    return "\n".join(lines)
