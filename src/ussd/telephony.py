from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

CALL_PHONE = "CALL_PHONE"

# Failure codes delivered to UssdResponseCallback.on_receive_ussd_response_failed
USSD_RETURN_FAILURE = -1
USSD_ERROR_SERVICE_UNAVAIL = -2

_FAILURE_REASONS = {
    USSD_ERROR_SERVICE_UNAVAIL: "USSD_ERROR_SERVICE_UNAVAIL",
    USSD_RETURN_FAILURE: "USSD_RETURN_FAILURE",
}


def describe_failure_code(failure_code: int) -> str:
    """Map a platform failure code to its symbolic reason."""
    return _FAILURE_REASONS.get(failure_code, "unknown error")


class UssdResponseCallback(ABC):
    """Two-branch completion handler for a single USSD send.

    The telephony service calls exactly one of the two methods, once.
    """

    @abstractmethod
    def on_receive_ussd_response(self, request: str, response: str) -> None:
        ...

    @abstractmethod
    def on_receive_ussd_response_failed(self, request: str, failure_code: int) -> None:
        ...


@runtime_checkable
class PermissionChecker(Protocol):
    def is_granted(self, permission: str) -> bool:
        """Return True if the caller holds ``permission``."""
        ...


@runtime_checkable
class SubscriptionTelephony(Protocol):
    def send_ussd_request(self, code: str, callback: UssdResponseCallback) -> None:
        """Send ``code`` silently and report the result through ``callback``.

        Returns immediately; the callback may fire on any thread.
        """
        ...


@runtime_checkable
class TelephonyService(Protocol):
    def for_subscription(self, subscription_id: int) -> SubscriptionTelephony:
        """Return a telephony handle scoped to one SIM subscription."""
        ...
