from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Iterable

from src.ussd.telephony import USSD_RETURN_FAILURE, UssdResponseCallback

if TYPE_CHECKING:
    from src.config import SimulatorConfig

logger = logging.getLogger(__name__)


class StaticPermissionChecker:
    """Permission checker backed by a fixed set of granted permissions."""

    def __init__(self, granted: Iterable[str] = ()) -> None:
        self._granted = frozenset(granted)

    def is_granted(self, permission: str) -> bool:
        return permission in self._granted


class ScriptedTelephony:
    """Telephony service that answers USSD codes from a script.

    Codes listed in ``failures`` fail with their failure code, codes in
    ``responses`` succeed with their text, and any other code fails with
    ``default_failure_code``. Callbacks fire on a timer thread, like a radio.
    The daemon timers are fire-and-forget: they are never joined or
    cancelled, and a pending one is dropped when the process exits.
    """

    def __init__(
        self,
        responses: dict[str, str] | None = None,
        failures: dict[str, int] | None = None,
        default_failure_code: int = USSD_RETURN_FAILURE,
        delay_seconds: float = 0.0,
    ) -> None:
        self.responses = dict(responses or {})
        self.failures = dict(failures or {})
        self.default_failure_code = default_failure_code
        self.delay_seconds = delay_seconds

    def for_subscription(self, subscription_id: int) -> _ScriptedSubscription:
        return _ScriptedSubscription(self, subscription_id)

    @classmethod
    def from_config(cls, config: SimulatorConfig) -> ScriptedTelephony:
        return cls(
            responses=config.responses,
            failures=config.failures,
            default_failure_code=config.default_failure_code,
            delay_seconds=config.delay_seconds,
        )


class _ScriptedSubscription:
    def __init__(self, service: ScriptedTelephony, subscription_id: int) -> None:
        self._service = service
        self.subscription_id = subscription_id

    def send_ussd_request(self, code: str, callback: UssdResponseCallback) -> None:
        logger.debug("Simulating USSD %s on subscription %d", code, self.subscription_id)
        timer = threading.Timer(self._service.delay_seconds, self._fire, args=(code, callback))
        timer.daemon = True
        timer.start()

    def _fire(self, code: str, callback: UssdResponseCallback) -> None:
        service = self._service
        if code in service.failures:
            callback.on_receive_ussd_response_failed(code, int(service.failures[code]))
        elif code in service.responses:
            callback.on_receive_ussd_response(code, service.responses[code])
        else:
            callback.on_receive_ussd_response_failed(code, service.default_failure_code)
