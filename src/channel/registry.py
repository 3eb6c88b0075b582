from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.channel.base import MethodCall, MethodCallHandler, MethodResult

if TYPE_CHECKING:
    from src.config import Config

logger = logging.getLogger(__name__)


class ChannelRegistry:
    """Registry of method-call handlers keyed by channel name.

    Routes incoming method calls to the handler registered on their channel.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, MethodCallHandler] = {}

    def register(self, channel_name: str, handler: MethodCallHandler) -> None:
        """Register a handler, replacing any previous one on the channel."""
        self._handlers[channel_name] = handler

    def unregister(self, channel_name: str) -> MethodCallHandler | None:
        """Remove and return the handler for a channel."""
        return self._handlers.pop(channel_name, None)

    def get_handler(self, channel_name: str) -> MethodCallHandler | None:
        """Get the handler registered on a channel."""
        return self._handlers.get(channel_name)

    def dispatch(self, channel_name: str, call: MethodCall, result: MethodResult) -> bool:
        """Route a method call to the handler on its channel.

        Returns True if a handler received the call. Calls on unknown channels
        are answered with not_implemented and return False.
        """
        handler = self._handlers.get(channel_name)
        if handler is None:
            logger.warning("No handler registered on channel: %s", channel_name)
            result.not_implemented()
            return False
        handler.on_method_call(call, result)
        return True

    @property
    def channel_names(self) -> list[str]:
        """List all channels with a registered handler."""
        return list(self._handlers.keys())

    @classmethod
    def from_config(cls, config: Config) -> ChannelRegistry:
        """Create a registry with the USSD plugin attached per configuration."""
        from src.channel.plugin import UssdServicePlugin

        registry = cls()
        UssdServicePlugin.from_config(config).attach(registry)
        return registry
