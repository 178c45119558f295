"""Calculator front-end: input state, request dispatch and reset."""
from concurrent.futures import Future, ThreadPoolExecutor
import threading
from typing import Any, Optional, Protocol, Tuple, Union

from calculator_client.client.client import CalculatorApiClient
from calculator_client.client.state import CalculatorState, RequestState
from calculator_client.common.config import ClientSettings
from calculator_client.common.errors import ErrorKind, InputValidationError, TransportError
from calculator_client.common.logger import logger
from calculator_client.common.models import CalculationRequest, CalculationResponse
from calculator_client.common.operators import Operator


MISSING_OPERAND_MESSAGE: str = "Please enter both numbers"
TRANSPORT_ERROR_MESSAGE: str = "Error calling API"


class CalculationService(Protocol):
    """Anything able to answer a calculation request, CalculatorApiClient in production."""

    def fetch(self, request: CalculationRequest) -> CalculationResponse:
        ...


class Calculator:
    """
    Holds the calculator inputs and dispatches calculations to the remote service.

    Lifecycle of a dispatch:
        1. Both operands are checked for presence (no network call when one is missing).
        2. A new sequence number is issued and the state switches to CALCULATING.
        3. One request is sent to the service.
        4. The outcome is applied only if no newer dispatch or clear happened meanwhile.

    Every state change happens under a lock and produces a new CalculatorState snapshot,
    so dispatches running on the worker thread (see ``submit``) never interleave with edits.
    """

    def __init__(self, service: CalculationService, max_workers: int = 4) -> None:
        """
        :param CalculationService service: Client used to reach the calculation service
        :param int max_workers: Number of threads available to ``submit``
        """
        self._service: CalculationService = service
        self._state: CalculatorState = CalculatorState()
        self._lock = threading.Lock()
        self._sequence: int = 0
        self._max_workers: int = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None

    @classmethod
    def from_settings(cls, settings: ClientSettings, **kwargs: Any) -> "Calculator":
        """
        Create a calculator talking to the endpoint described by ``settings``.

        :param ClientSettings settings: Connection settings

        :return: Calculator bound to a CalculatorApiClient
        :rtype: Calculator
        """
        return cls(CalculatorApiClient.from_settings(settings), **kwargs)

    @property
    def state(self) -> CalculatorState:
        """Current state snapshot."""
        with self._lock:
            return self._state

    # Input state holder

    def set_a(self, value: str) -> CalculatorState:
        """Set the first operand. A previous result or error is kept."""
        return self._update(a=value)

    def set_b(self, value: str) -> CalculatorState:
        """Set the second operand. A previous result or error is kept."""
        return self._update(b=value)

    def set_operator(self, operator: Union[Operator, str]) -> CalculatorState:
        """
        Select the operator.

        :param operator: Operator or its code (e.g. ``"absdiff"``)

        :return: New state
        :rtype: CalculatorState
        :raises ValueError: If the code is not a known operator
        """
        return self._update(operator=Operator(operator))

    def _update(self, **changes: Any) -> CalculatorState:
        with self._lock:
            self._state = self._state.model_copy(update=changes)
            return self._state

    # Request dispatcher

    def _validate(self, state: CalculatorState) -> CalculationRequest:
        """
        Check operand presence and build the request.

        :param CalculatorState state: State to validate

        :return: Request carrying the raw operand strings
        :rtype: CalculationRequest
        :raises InputValidationError: If an operand is empty
        """
        if not state.a or not state.b:
            raise InputValidationError(MISSING_OPERAND_MESSAGE)
        return CalculationRequest(operation=state.operator, a=state.a, b=state.b)

    def _begin(self) -> Optional[Tuple[int, CalculationRequest]]:
        """Validate and enter CALCULATING. Return None when validation failed."""
        with self._lock:
            try:
                request = self._validate(self._state)
            except InputValidationError as exc:
                logger.warning(f"🧮❌ Calculation refused: {exc}")
                self._state = self._state.model_copy(
                    update={"error": str(exc), "error_kind": exc.kind}
                )
                return None

            self._sequence += 1
            self._state = self._state.model_copy(
                update={
                    "request_state": RequestState.CALCULATING,
                    "error": None,
                    "error_kind": None,
                }
            )
            return self._sequence, request

    def _settle(self, sequence: int, **outcome: Any) -> CalculatorState:
        """Apply the outcome of dispatch ``sequence`` unless it has been superseded."""
        with self._lock:
            if sequence != self._sequence:
                logger.info(
                    f"🧮🗑️ Discarding stale response #{sequence} (latest is #{self._sequence})"
                )
                return self._state
            self._state = self._state.model_copy(
                update={"request_state": RequestState.IDLE, **outcome}
            )
            return self._state

    def calculate(self) -> CalculatorState:
        """
        Dispatch the current inputs to the calculation service.

        Never raises: validation, transport, service and unexpected errors all end up
        in the ``error`` field of the returned state.

        :return: State once the dispatch settled
        :rtype: CalculatorState
        """
        started = self._begin()
        if started is None:
            return self.state
        sequence, request = started

        logger.info(f"🧮🏁 Dispatch #{sequence}: {request.a} {request.operation.value} {request.b}")
        try:
            response: CalculationResponse = self._service.fetch(request)
        except TransportError as exc:
            logger.error(f"🧮❌ Dispatch #{sequence} failed: {exc}")
            return self._settle(
                sequence, error=TRANSPORT_ERROR_MESSAGE, error_kind=ErrorKind.TRANSPORT
            )
        except Exception as exc:
            logger.exception(f"🧮❌ Dispatch #{sequence} failed unexpectedly: {exc!r}")
            return self._settle(
                sequence, error=TRANSPORT_ERROR_MESSAGE, error_kind=ErrorKind.TRANSPORT
            )

        logger.info(
            f"🧮✅ Dispatch #{sequence} settled: result={response.result!r} error={response.error!r}"
        )
        return self._settle(
            sequence,
            result=response.result,
            error=response.error,
            error_kind=ErrorKind.SERVICE if response.error else None,
        )

    def submit(self) -> "Future[CalculatorState]":
        """
        Run ``calculate`` on a worker thread.

        Several submissions may be in flight; only the most recently started one
        is reflected in the state.

        :return: Future resolving to the state after that dispatch settled
        :rtype: Future[CalculatorState]
        """
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers, thread_name_prefix="calculator"
                )
            executor = self._executor
        return executor.submit(self.calculate)

    # Clear operation

    def clear(self) -> CalculatorState:
        """
        Reset operands, operator, result and error to their defaults in one transition.

        An in-flight request is not cancelled, but its response is discarded on arrival.

        :return: Fresh state
        :rtype: CalculatorState
        """
        with self._lock:
            self._sequence += 1
            self._state = CalculatorState()
            logger.info("🧮🧹 Calculator cleared")
            return self._state

    def close(self) -> None:
        """Shut down the worker pool used by ``submit``, waiting for running dispatches."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "Calculator":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
