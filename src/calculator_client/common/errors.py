"""Errors raised and handled on the client side of a calculation."""
from enum import Enum


class ErrorKind(str, Enum):
    """Origin of the error currently shown to the user."""

    VALIDATION = "validation"
    TRANSPORT = "transport"
    SERVICE = "service"


class CalculatorError(Exception):
    """Base class for client-side calculator errors."""

    kind: ErrorKind


class InputValidationError(CalculatorError):
    """An operand is missing; the request never reaches the network."""

    kind = ErrorKind.VALIDATION


class TransportError(CalculatorError):
    """The calculation service could not be reached or answered with an unusable response."""

    kind = ErrorKind.TRANSPORT
