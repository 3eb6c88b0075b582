from __future__ import annotations

import asyncio
import logging

from src.ussd.outcome import Failure, FailureKind, UssdOutcome
from src.ussd.pending import PendingOperation
from src.ussd.request import UssdRequest
from src.ussd.telephony import CALL_PHONE, PermissionChecker, TelephonyService

logger = logging.getLogger(__name__)


class UssdRequestBridge:
    """Turns the callback-based telephony API into one awaitable outcome.

    Each call to ``execute`` owns its own PendingOperation. The telephony
    handle is looked up per call and never cached.
    """

    def __init__(
        self,
        permissions: PermissionChecker,
        telephony: TelephonyService,
        required_permission: str = CALL_PHONE,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._permissions = permissions
        self._telephony = telephony
        self._required_permission = required_permission
        self._loop = loop

    @property
    def required_permission(self) -> str:
        return self._required_permission

    def check_preconditions(self) -> Failure | None:
        """Return a Failure if the caller may not place USSD requests."""
        if self._permissions.is_granted(self._required_permission):
            return None
        logger.warning("USSD request rejected: %s permission missing", self._required_permission)
        return Failure(
            FailureKind.EXECUTION_FAILURE,
            f"{self._required_permission} permission missing",
        )

    def execute(self, request: UssdRequest) -> asyncio.Future[UssdOutcome] | Failure:
        """Start a USSD request and return a future for its outcome.

        A missing permission is returned as a Failure right away, nothing is
        sent and no event loop is needed. Errors raised by the telephony
        service propagate.
        """
        failure = self.check_preconditions()
        if failure is not None:
            return failure

        loop = self._loop or asyncio.get_running_loop()
        operation = PendingOperation(loop)
        future = operation.future
        try:
            subscription = self._telephony.for_subscription(request.subscription_id)
            subscription.send_ussd_request(request.code, operation)
        except Exception:
            operation.discard()
            raise

        logger.info("USSD request %s sent on subscription %d", request.code, request.subscription_id)
        return future

    async def request(self, request: UssdRequest) -> UssdOutcome:
        """Await the outcome of a single request."""
        started = self.execute(request)
        if isinstance(started, Failure):
            return started
        return await started
