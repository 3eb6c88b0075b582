from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.ussd.outcome import Failure, FailureKind


@dataclass(frozen=True)
class UssdRequest:
    """A validated USSD request."""

    subscription_id: int
    code: str


def _invalid(message: str) -> Failure:
    return Failure(FailureKind.INVALID_PARAMETERS, message)


def validate(args: Mapping[str, Any] | None) -> UssdRequest | Failure:
    """Parse a method-call argument bag into a UssdRequest.

    Checks run in a fixed order and the first failing one is returned.
    Values are taken as-is, without trimming or coercion.
    """
    if args is None:
        args = {}
    if not isinstance(args, Mapping):
        return _invalid("Parameter `subscriptionId` must be an int")

    subscription_id = args.get("subscriptionId")
    # bool is an int subclass but never a valid subscription
    if not isinstance(subscription_id, int) or isinstance(subscription_id, bool):
        return _invalid("Parameter `subscriptionId` must be an int")
    if subscription_id < 0:
        return _invalid("Parameter `subscriptionId` must be >= 0")

    code = args.get("code")
    if not isinstance(code, str):
        return _invalid("Parameter `code` must be a String")
    if not code:
        return _invalid("Parameter `code` must not be empty")

    return UssdRequest(subscription_id=subscription_id, code=code)
