"""Test class CalculatorApiClient."""
from typing import Any, Dict, List

from pydantic import ValidationError
import pytest
import requests
from urllib3.exceptions import LocationParseError

from calculator_client.client.client import CalculatorApiClient
from calculator_client.common.config import ClientSettings
from calculator_client.common.errors import ErrorKind, TransportError
from calculator_client.common.models import CalculationRequest


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, body: Any = None, status_code: int = 200, invalid_json: bool = False):
        self.body = body
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        if self.invalid_json:
            raise requests.JSONDecodeError("Expecting value", "<html>", 0)
        return self.body


class FakeHttp:
    """Replacement for requests.get recording every call."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.response = FakeResponse({"result": 8, "error": None})

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        return self.response


@pytest.fixture
def http(monkeypatch) -> FakeHttp:
    """Patch requests.get with a FakeHttp."""
    fake = FakeHttp()
    monkeypatch.setattr(requests, "get", fake.get)
    return fake


def test_client_valid_config() -> None:
    """A base URL and timeout correctly initialize the client."""
    client = CalculatorApiClient(base_url="http://localhost:8080/api", timeout=2.5)
    assert client.url == "http://localhost:8080/api/calculate"
    assert client.timeout == 2.5


def test_client_invalid_timeout() -> None:
    """Non-positive timeouts raise a ValidationError."""
    with pytest.raises(ValidationError):
        CalculatorApiClient(base_url="http://localhost", timeout=0)


def test_client_keeps_trailing_slash() -> None:
    """The base URL is used as given, a trailing slash is not normalized."""
    client = CalculatorApiClient(base_url="http://localhost:8080/api/")
    assert client.url == "http://localhost:8080/api//calculate"


def test_client_from_settings() -> None:
    """Settings are carried over to the client."""
    client = CalculatorApiClient.from_settings(ClientSettings(base_url="http://calc", timeout=1.0))
    assert client.base_url == "http://calc"
    assert client.timeout == 1.0


def test_fetch_sends_one_get_with_raw_params(http) -> None:
    """fetch issues exactly one GET with operation, a and b as query parameters."""
    client = CalculatorApiClient(base_url="http://localhost:8080/api")
    response = client.fetch(CalculationRequest(operation="div", a="10", b="3"))

    assert http.calls == [
        {
            "url": "http://localhost:8080/api/calculate",
            "params": {"operation": "div", "a": "10", "b": "3"},
            "timeout": None,
        }
    ]
    assert response.result == 8
    assert response.error is None


def test_fetch_returns_service_error_as_data(http) -> None:
    """An error declared in a 200 response is returned, not raised."""
    http.response = FakeResponse({"result": None, "error": "Division by zero"})
    client = CalculatorApiClient(base_url="http://calc")
    response = client.fetch(CalculationRequest(operation="div", a="1", b="0"))
    assert response.result is None
    assert response.error == "Division by zero"


def test_fetch_uses_session_when_given() -> None:
    """A provided session is used instead of the module-level requests.get."""

    class FakeSession(requests.Session):
        def __init__(self):
            super().__init__()
            self.urls: List[str] = []

        def get(self, url, **kwargs):
            self.urls.append(url)
            return FakeResponse({"result": 1.5})

    session = FakeSession()
    client = CalculatorApiClient(base_url="http://calc", session=session)
    assert client.fetch(CalculationRequest(operation="avg", a="1", b="2")).result == 1.5
    assert session.urls == ["http://calc/calculate"]


@pytest.mark.parametrize("response", [
    FakeResponse({"error": "boom"}, status_code=500),
    FakeResponse({"result": None}, status_code=404),
    FakeResponse(invalid_json=True),
    FakeResponse([1, 2, 3]),
    FakeResponse({"result": "not a number"}),
    FakeResponse({"result": "8"}),
    FakeResponse({"result": True}),
])
def test_fetch_bad_responses_raise_transport_error(http, response: FakeResponse) -> None:
    """Non-2xx statuses and malformed bodies become TransportError."""
    http.response = response
    client = CalculatorApiClient(base_url="http://calc")
    with pytest.raises(TransportError) as exc_info:
        client.fetch(CalculationRequest(operation="add", a="1", b="2"))
    assert exc_info.value.kind is ErrorKind.TRANSPORT


@pytest.mark.parametrize("exc", [
    requests.ConnectionError("Connection refused"),
    requests.Timeout("Read timed out"),
    LocationParseError("aaaa.com, label empty or too long"),
    ValueError("unexpected"),
])
def test_fetch_network_failures_raise_transport_error(monkeypatch, exc: Exception) -> None:
    """Connection errors, timeouts and URL parsing failures become TransportError with the cause chained."""

    def failing_get(*args, **kwargs):
        raise exc

    monkeypatch.setattr(requests, "get", failing_get)
    client = CalculatorApiClient(base_url="http://calc")
    with pytest.raises(TransportError) as exc_info:
        client.fetch(CalculationRequest(operation="add", a="1", b="2"))
    assert exc_info.value.__cause__ is exc
