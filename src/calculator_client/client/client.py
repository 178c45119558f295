"""HTTP client for the remote calculation service."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import requests

from calculator_client.common.config import ClientSettings
from calculator_client.common.errors import TransportError
from calculator_client.common.logger import logger
from calculator_client.common.models import CalculationRequest, CalculationResponse


CALCULATE_PATH: str = "/calculate"


class CalculatorApiClient(BaseModel):
    """
    HTTP client responsible for sending one calculation to the service and decoding its answer.

    The HTTP client:
    - issues ``GET {base_url}/calculate`` with ``operation``, ``a`` and ``b`` as query parameters
    - decodes the JSON body into a CalculationResponse
    - turns every network or decoding failure into a TransportError
    """

    # Make the Pydantic instance immutable (read-only), the endpoint must not change
    # while requests are in flight.
    # Allow arbitrary types like requests.Session
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str = Field(..., description="Base URL of the calculation service")
    timeout: Optional[float] = Field(default=None, gt=0, description="Request timeout in seconds")
    session: Optional[requests.Session] = Field(default=None, description="Optional session reused between requests")

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "CalculatorApiClient":
        """
        Create a client from loaded settings.

        :param ClientSettings settings: Connection settings

        :return: Client bound to the configured endpoint
        :rtype: CalculatorApiClient
        """
        return cls(base_url=settings.base_url, timeout=settings.timeout)

    @property
    def url(self) -> str:
        """Full URL of the calculate endpoint, built without normalizing the base URL."""
        return f"{self.base_url}{CALCULATE_PATH}"

    def fetch(self, request: CalculationRequest) -> CalculationResponse:
        """
        Send a calculation request and return the decoded response.

        The service's own ``error`` field is returned as data, it is not raised.

        :param CalculationRequest request: Calculation to perform

        :return: Decoded response body
        :rtype: CalculationResponse
        :raises TransportError: On connection failure, timeout, non-2xx status or malformed body
        """
        http = self.session if self.session is not None else requests
        params = request.to_params()
        logger.debug(f"🌐 GET {self.url} params={params}")

        try:
            response = http.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            body: Any = response.json()
        except requests.RequestException as exc:
            # Also covers JSON decoding errors (requests.JSONDecodeError)
            raise TransportError(f"🌐❌ Request to {self.url} failed: {exc}") from exc
        except Exception as exc:
            # Unusable base URL rejected below requests, e.g. urllib3 LocationParseError
            raise TransportError(f"🌐❌ Request to {self.url} could not be sent: {exc!r}") from exc

        if not isinstance(body, dict):
            raise TransportError(f"🌐❌ Unexpected response body from {self.url}: {body!r}")

        try:
            return CalculationResponse.model_validate(body)
        except ValidationError as exc:
            raise TransportError(f"🌐❌ Malformed response body from {self.url}: {exc}") from exc
