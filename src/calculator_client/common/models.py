"""Pydantic models for calculation requests and responses exchanged with the service."""
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from calculator_client.common.operators import Operator


class CalculationRequest(BaseModel):
    """Represents a single ``GET /calculate`` request sent to the calculation service."""

    model_config = ConfigDict(frozen=True)

    operation: Operator = Field(..., description="Operator code")
    a: str = Field(..., min_length=1, description="First operand, sent verbatim")
    b: str = Field(..., min_length=1, description="Second operand, sent verbatim")

    def to_params(self) -> Dict[str, str]:
        """
        Build the query parameters of the request.

        :return: Mapping of ``operation``, ``a`` and ``b``
        :rtype: Dict[str, str]
        """
        return {"operation": self.operation.value, "a": self.a, "b": self.b}


class CalculationResponse(BaseModel):
    """Represents the JSON body returned by the calculation service."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Strict: a JSON string or boolean is not a number, it is never coerced
    result: Optional[Union[StrictInt, StrictFloat]] = Field(default=None, description="Computed value, if any")
    error: Optional[str] = Field(default=None, description="Error declared by the service, if any")
