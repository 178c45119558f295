"""Operators supported by the calculation service and their display symbols."""
from enum import Enum
from typing import Dict, Union


class Operator(str, Enum):
    """Closed set of operator codes understood by the ``/calculate`` endpoint."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    EXP = "exp"
    MOD = "mod"
    MAX = "max"
    MIN = "min"
    AVG = "avg"
    ABSDIFF = "absdiff"

    @property
    def symbol(self) -> str:
        """Display symbol of the operator."""
        return OPERATOR_SYMBOLS[self]


DEFAULT_OPERATOR: Operator = Operator.ADD

OPERATOR_SYMBOLS: Dict[Operator, str] = {
    Operator.ADD: "+",
    Operator.SUB: "-",
    Operator.MUL: "×",
    Operator.DIV: "÷",
    Operator.EXP: "^",
    Operator.MOD: "%",
    Operator.MAX: "max",
    Operator.MIN: "min",
    Operator.AVG: "avg",
    Operator.ABSDIFF: "|a-b|",
}


def get_operator_symbol(code: Union[Operator, str]) -> str:
    """
    Return the display symbol for an operator code.

    Unknown codes are returned unchanged.

    :param code: Operator or raw operator code

    :return: Display symbol
    :rtype: str
    """
    try:
        return Operator(code).symbol
    except ValueError:
        return str(code)
