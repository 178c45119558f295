"""State of the calculator: inputs, request lifecycle and outcome."""
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from calculator_client.common.errors import ErrorKind
from calculator_client.common.operators import DEFAULT_OPERATOR, Operator


class RequestState(str, Enum):
    """Lifecycle of the dispatcher."""

    IDLE = "idle"
    CALCULATING = "calculating"


class DisplayKind(str, Enum):
    """What drives the display, in decreasing priority."""

    CALCULATING = "calculating"
    ERROR = "error"
    RESULT = "result"
    PLACEHOLDER = "placeholder"


class CalculatorState(BaseModel):
    """
    Immutable snapshot of the calculator.

    Transitions produce a new snapshot through ``model_copy(update=...)``,
    so a snapshot handed out to a renderer never changes afterwards.
    """

    model_config = ConfigDict(frozen=True)

    a: str = Field(default="", description="First operand, empty string when unset")
    b: str = Field(default="", description="Second operand, empty string when unset")
    operator: Operator = Field(default=DEFAULT_OPERATOR, description="Selected operator")
    request_state: RequestState = Field(default=RequestState.IDLE, description="Dispatcher lifecycle")
    result: Optional[Union[int, float]] = Field(default=None, description="Last computed value")
    error: Optional[str] = Field(default=None, description="Message currently shown as error")
    error_kind: Optional[ErrorKind] = Field(default=None, description="Origin of the error")

    @property
    def calculating(self) -> bool:
        """True while the latest dispatch has not settled."""
        return self.request_state is RequestState.CALCULATING

    @property
    def can_dispatch(self) -> bool:
        """Whether input controls are interactable and a new dispatch should be offered."""
        return not self.calculating

    @property
    def display_kind(self) -> DisplayKind:
        """
        Element driving the display.

        An error is shown whenever present, even next to a result.
        """
        if self.calculating:
            return DisplayKind.CALCULATING
        if self.error:
            return DisplayKind.ERROR
        if self.result is not None:
            return DisplayKind.RESULT
        return DisplayKind.PLACEHOLDER
