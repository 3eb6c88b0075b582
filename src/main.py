from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from src.config import load_config, Config

logger = logging.getLogger(__name__)


def _setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _init_registry(config: Config):
    from src.channel.registry import ChannelRegistry
    registry = ChannelRegistry.from_config(config)
    logger.info("Channels: %s", registry.channel_names)
    return registry


async def _run_request(config: Config, subscription_id: int, code: str) -> int:
    """Send one makeRequest call through the channel and print the reply."""
    from src.channel.base import FutureResult, MethodCall
    from src.channel.handler import MAKE_REQUEST_METHOD

    registry = _init_registry(config)
    result = FutureResult()
    call = MethodCall(MAKE_REQUEST_METHOD, {"subscriptionId": subscription_id, "code": code})
    registry.dispatch(config.channel.name, call, result)
    reply = await result.future

    if not reply.implemented:
        print("not implemented", file=sys.stderr)
        return 2
    if reply.error_code is not None:
        print(f"{reply.error_code}: {reply.error_message}", file=sys.stderr)
        return 1
    print(reply.value)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="ussd-bridge",
        description="Send USSD codes and print the carrier response",
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to config file (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    request_parser = subparsers.add_parser("request", help="Send a single USSD code")
    request_parser.add_argument(
        "--subscription-id",
        type=int,
        default=0,
        help="SIM subscription to send on (default: 0)",
    )
    request_parser.add_argument("code", help="USSD code, e.g. *123#")

    return parser


def main(args: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    parsed = parser.parse_args(args)
    config = load_config(parsed.config)
    _setup_logging(config.logging.level)

    if parsed.command == "request":
        sys.exit(asyncio.run(_run_request(config, parsed.subscription_id, parsed.code)))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
