from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class FailureKind(Enum):
    """Error kinds reported back over the method channel."""

    INVALID_PARAMETERS = "ussd_plugin_incorrect_parameters"
    EXECUTION_FAILURE = "ussd_plugin_ussd_execution_failure"
    UNKNOWN = "unknown_exception"


@dataclass(frozen=True)
class Success:
    """The carrier's response to a USSD request."""

    text: str


@dataclass(frozen=True)
class Failure:
    """A failed request.

    ``code`` keeps the raw platform failure code when there is one. It is
    diagnostic only and never part of the reply.
    """

    kind: FailureKind
    detail: str | None = None
    code: int | None = None


UssdOutcome = Union[Success, Failure]
