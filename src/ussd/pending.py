from __future__ import annotations

import asyncio
import logging

from src.ussd.outcome import Failure, FailureKind, Success, UssdOutcome
from src.ussd.telephony import UssdResponseCallback, describe_failure_code

logger = logging.getLogger(__name__)


class PendingOperation(UssdResponseCallback):
    """Correlates one USSD send with the single callback that completes it.

    Callbacks may arrive on any thread; the outcome is always settled on the
    owning event loop. The first outcome wins and later ones are ignored.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop: asyncio.AbstractEventLoop | None = loop
        self._future: asyncio.Future[UssdOutcome] | None = loop.create_future()

    @property
    def future(self) -> asyncio.Future[UssdOutcome]:
        if self._future is None:
            raise RuntimeError("Pending operation already settled")
        return self._future

    @property
    def settled(self) -> bool:
        return self._future is None

    def on_receive_ussd_response(self, request: str, response: str) -> None:
        self._deliver(Success(str(response)))

    def on_receive_ussd_response_failed(self, request: str, failure_code: int) -> None:
        reason = describe_failure_code(failure_code)
        logger.info("USSD request %s failed with code %s (%s)", request, failure_code, reason)
        self._deliver(Failure(FailureKind.EXECUTION_FAILURE, reason, failure_code))

    def discard(self) -> None:
        """Drop an operation whose send never went out."""
        if self._future is not None and not self._future.done():
            self._future.cancel()
        self._future = None
        self._loop = None

    def _deliver(self, outcome: UssdOutcome) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.warning("Ignoring USSD outcome for a finished operation: %r", outcome)
            return
        try:
            loop.call_soon_threadsafe(self._settle, outcome)
        except RuntimeError:
            # loop closed after the check above
            logger.warning("Ignoring USSD outcome for a finished operation: %r", outcome)

    def _settle(self, outcome: UssdOutcome) -> None:
        future = self._future
        if future is None or future.done():
            logger.warning("Ignoring USSD outcome for a finished operation: %r", outcome)
            return
        future.set_result(outcome)
        self._future = None
        self._loop = None
