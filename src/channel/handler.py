from __future__ import annotations

import asyncio
import logging

from src.channel.base import MethodCall, MethodCallHandler, MethodResult
from src.ussd.bridge import UssdRequestBridge
from src.ussd.outcome import Failure, FailureKind, Success, UssdOutcome
from src.ussd.request import validate

logger = logging.getLogger(__name__)

MAKE_REQUEST_METHOD = "makeRequest"


class _SingleReply:
    """Sends at most one reply to a MethodResult."""

    def __init__(self, result: MethodResult) -> None:
        self._result = result
        self._sent = False

    def send(self, outcome: UssdOutcome) -> None:
        if self._sent:
            logger.warning("Dropping extra reply: %r", outcome)
            return
        self._sent = True
        if isinstance(outcome, Success):
            self._result.success(outcome.text)
        else:
            self._result.error(outcome.kind.value, outcome.detail, None)

    def send_from(self, future: asyncio.Future[UssdOutcome]) -> None:
        if future.cancelled():
            self.send(Failure(FailureKind.UNKNOWN, "request cancelled"))
            return
        exc = future.exception()
        if exc is not None:
            logger.error("USSD request raised", exc_info=exc)
            self.send(Failure(FailureKind.UNKNOWN, str(exc)))
            return
        self.send(future.result())


class UssdMethodCallHandler(MethodCallHandler):
    """Serves ``makeRequest`` calls through a UssdRequestBridge."""

    def __init__(self, bridge: UssdRequestBridge) -> None:
        self._bridge = bridge

    def on_method_call(self, call: MethodCall, result: MethodResult) -> None:
        if call.method != MAKE_REQUEST_METHOD:
            result.not_implemented()
            return

        reply = _SingleReply(result)
        try:
            request = validate(call.arguments)
            if isinstance(request, Failure):
                logger.info("Rejected %s: %s", call.method, request.detail)
                reply.send(request)
                return
            started = self._bridge.execute(request)
        except Exception as exc:
            logger.exception("Unexpected error handling %s", call.method)
            reply.send(Failure(FailureKind.UNKNOWN, str(exc)))
            return

        if isinstance(started, Failure):
            reply.send(started)
        elif started.done():
            reply.send_from(started)
        else:
            started.add_done_callback(reply.send_from)
