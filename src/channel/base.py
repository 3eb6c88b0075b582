from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MethodCall:
    """A method invocation received on a channel."""

    method: str
    arguments: Any = None


class MethodResult(ABC):
    """Reply sink for one method call. Exactly one method is called per call."""

    @abstractmethod
    def success(self, result: Any) -> None:
        ...

    @abstractmethod
    def error(self, code: str, message: str | None, details: Any = None) -> None:
        ...

    @abstractmethod
    def not_implemented(self) -> None:
        ...


class MethodCallHandler(ABC):
    """Handles method calls delivered on a named channel."""

    @abstractmethod
    def on_method_call(self, call: MethodCall, result: MethodResult) -> None:
        ...


@dataclass(frozen=True)
class Reply:
    """A reply captured by FutureResult."""

    value: Any = None
    error_code: str | None = None
    error_message: str | None = None
    error_details: Any = None
    implemented: bool = True

    @property
    def ok(self) -> bool:
        return self.implemented and self.error_code is None


class FutureResult(MethodResult):
    """MethodResult that resolves an asyncio future with the reply."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        loop = loop or asyncio.get_running_loop()
        self.future: asyncio.Future[Reply] = loop.create_future()

    def success(self, result: Any) -> None:
        self._set(Reply(value=result))

    def error(self, code: str, message: str | None, details: Any = None) -> None:
        self._set(Reply(error_code=code, error_message=message, error_details=details))

    def not_implemented(self) -> None:
        self._set(Reply(implemented=False))

    def _set(self, reply: Reply) -> None:
        if self.future.done():
            raise RuntimeError("Reply already submitted")
        self.future.set_result(reply)
