from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.channel.handler import UssdMethodCallHandler
from src.ussd.bridge import UssdRequestBridge

if TYPE_CHECKING:
    from src.channel.registry import ChannelRegistry
    from src.config import Config

logger = logging.getLogger(__name__)

CHANNEL_NAME = "com.ktminnov.ussd_service/plugin_channel"


class UssdServicePlugin:
    """Exposes a UssdRequestBridge on a method channel."""

    def __init__(self, bridge: UssdRequestBridge, channel_name: str = CHANNEL_NAME) -> None:
        self.channel_name = channel_name
        self.handler = UssdMethodCallHandler(bridge)

    def attach(self, registry: ChannelRegistry) -> None:
        registry.register(self.channel_name, self.handler)
        logger.info("USSD plugin attached to %s", self.channel_name)

    def detach(self, registry: ChannelRegistry) -> None:
        """Unregister the handler, leaving channels owned by others untouched."""
        if registry.get_handler(self.channel_name) is not self.handler:
            return
        registry.unregister(self.channel_name)
        logger.info("USSD plugin detached from %s", self.channel_name)

    @classmethod
    def from_config(cls, config: Config) -> UssdServicePlugin:
        """Build a plugin backed by the scripted telephony simulator."""
        from src.simulator import ScriptedTelephony, StaticPermissionChecker

        bridge = UssdRequestBridge(
            permissions=StaticPermissionChecker(config.permissions.granted),
            telephony=ScriptedTelephony.from_config(config.simulator),
            required_permission=config.permissions.required,
        )
        return cls(bridge, channel_name=config.channel.name)
