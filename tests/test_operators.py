"""Test Operator and get_operator_symbol."""
import pytest

from calculator_client.common.operators import DEFAULT_OPERATOR, Operator, get_operator_symbol


@pytest.mark.parametrize("code,symbol", [
    ("add", "+"),
    ("sub", "-"),
    ("mul", "×"),
    ("div", "÷"),
    ("exp", "^"),
    ("mod", "%"),
    ("max", "max"),
    ("min", "min"),
    ("avg", "avg"),
    ("absdiff", "|a-b|"),
])
def test_symbol_for_known_codes(code: str, symbol: str) -> None:
    """Every operator code maps to its fixed display symbol."""
    assert get_operator_symbol(code) == symbol
    assert Operator(code).symbol == symbol


@pytest.mark.parametrize("code", ["pow", "", "ADD", "sqrt"])
def test_unknown_code_returned_unchanged(code: str) -> None:
    """Unknown codes are displayed as they are."""
    assert get_operator_symbol(code) == code


def test_operator_set_is_closed() -> None:
    """Exactly the ten service operators exist and invalid codes are rejected."""
    assert len(Operator) == 10
    with pytest.raises(ValueError):
        Operator("pow")


def test_default_operator_is_add() -> None:
    """The calculator starts on addition."""
    assert DEFAULT_OPERATOR is Operator.ADD
