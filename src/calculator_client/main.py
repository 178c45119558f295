"""
Command-line front-end for the calculation service.

Two modes:
- one-shot: ``calculator-client div 10 3`` dispatches once and prints the panel
- interactive: ``calculator-client --interactive`` edits the inputs line by line,
  the way a user would fill the form fields and press the buttons

The base URL comes from ``--base-url`` or, when omitted, from ``CALCULATOR_API_URL``
(a ``.env`` file is honoured).
"""

import argparse
import sys
from typing import Callable, Dict, List, Optional, TextIO

from pydantic import BaseModel, Field, ValidationError, model_validator

from calculator_client.client.calculator import Calculator
from calculator_client.client.renderer import render
from calculator_client.client.state import DisplayKind
from calculator_client.common.config import ClientSettings
from calculator_client.common.operators import OPERATOR_SYMBOLS, Operator


HELP_TEXT: str = "\n".join(
    [
        "Commands:",
        "  a <value>   set the first operand (everything after the first space, kept as typed)",
        "  b <value>   set the second operand (same)",
        "  op <code>   select the operator (" + ", ".join(op.value for op in Operator) + ")",
        "  calc        send the calculation",
        "  clear       reset every field",
        "  show        print the calculator",
        "  help        print this help",
        "  quit        leave",
    ]
)


class CliArgs(BaseModel):
    """
    Calculator invocation as given on the command line.

    Either ``operation``, ``a`` and ``b`` together (one-shot) or ``interactive`` alone.
    ``base_url`` and ``timeout`` take precedence over ``CALCULATOR_API_URL`` and
    ``CALCULATOR_API_TIMEOUT``.
    """

    operation: Optional[Operator] = None
    a: Optional[str] = None
    b: Optional[str] = None
    interactive: bool = False
    base_url: Optional[str] = None
    timeout: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_mode(self) -> "CliArgs":
        """Require either a full one-shot calculation or the interactive flag, not both."""
        one_shot = [self.operation, self.a, self.b]
        if self.interactive and any(arg is not None for arg in one_shot):
            raise ValueError("--interactive does not take OPERATION A B")
        if not self.interactive and any(arg is None for arg in one_shot):
            raise ValueError("OPERATION A B are required unless --interactive is given")
        return self

    def settings(self) -> ClientSettings:
        """
        Resolve connection settings, command-line values taking precedence over the environment.

        :return: Connection settings
        :rtype: ClientSettings
        :raises ValueError: If no base URL is available
        """
        if self.base_url is not None:
            return ClientSettings(base_url=self.base_url, timeout=self.timeout)
        settings = ClientSettings.from_env()
        if self.timeout is not None:
            return settings.model_copy(update={"timeout": self.timeout})
        return settings


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="calculator-client",
        description="Send a calculation to the remote calculator API",
    )
    parser.add_argument(
        "operation",
        nargs="?",
        help="Operator code: " + ", ".join(f"{op.value} ({sym})" for op, sym in OPERATOR_SYMBOLS.items()),
    )
    parser.add_argument("a", nargs="?", help="First operand")
    parser.add_argument("b", nargs="?", help="Second operand")
    parser.add_argument("-i", "--interactive", action="store_true", help="Start an interactive session")
    parser.add_argument("--base-url", help="Base URL of the API (default: $CALCULATOR_API_URL)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (default: none)")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Turn argv into a CliArgs, exiting with a usage message on bad input.

    :param argv: Command line without the program name, ``sys.argv[1:]`` when None

    :return: One-shot or interactive invocation
    :rtype: CliArgs
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return CliArgs(**vars(args))
    except ValidationError as exc:
        parser.error(str(exc))


def run_once(calculator: Calculator, args: CliArgs, out: TextIO = sys.stdout) -> int:
    """
    Dispatch a single calculation and print the panel.

    :return: Exit code, 0 when no error is displayed
    :rtype: int
    """
    calculator.set_operator(args.operation)
    calculator.set_a(args.a)
    calculator.set_b(args.b)
    state = calculator.calculate()
    print(render(state), file=out)
    return 1 if state.display_kind is DisplayKind.ERROR else 0


def run_interactive(calculator: Calculator, stdin: TextIO = sys.stdin, out: TextIO = sys.stdout) -> int:
    """
    Read commands line by line until ``quit`` or end of input.

    :return: Exit code
    :rtype: int
    """
    setters: Dict[str, Callable[[str], object]] = {
        "a": calculator.set_a,
        "b": calculator.set_b,
    }

    print(render(calculator.state), file=out)
    print("Type 'help' for the list of commands.", file=out)

    for line in stdin:
        # Only the single space after the command word is syntax, operands keep their spacing
        command, _, value = line.rstrip("\r\n").lstrip().partition(" ")
        command = command.lower()

        if not command:
            continue
        if command in ("quit", "exit"):
            break
        if command == "help":
            print(HELP_TEXT, file=out)
            continue

        if command in ("a", "b"):
            setters[command](value)
        elif command == "op":
            try:
                calculator.set_operator(value.strip())
            except ValueError:
                print(f"Unknown operator: {value.strip()!r}", file=out)
                continue
        elif command == "calc":
            calculator.calculate()
        elif command == "clear":
            calculator.clear()
        elif command != "show":
            print(f"Unknown command: {command!r}. Type 'help'.", file=out)
            continue

        print(render(calculator.state), file=out)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function used by the ``calculator-client`` script.
    """
    args = parse_args(argv)
    try:
        settings = args.settings()
    except ValueError as exc:
        build_parser().error(str(exc))

    with Calculator.from_settings(settings) as calculator:
        if args.interactive:
            return run_interactive(calculator)
        return run_once(calculator, args)


if __name__ == "__main__":
    sys.exit(main())
