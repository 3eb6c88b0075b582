from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.channel.plugin import CHANNEL_NAME
from src.ussd.telephony import CALL_PHONE, USSD_RETURN_FAILURE


@dataclass
class ChannelConfig:
    name: str = CHANNEL_NAME


@dataclass
class PermissionsConfig:
    required: str = CALL_PHONE
    granted: list[str] = field(default_factory=lambda: [CALL_PHONE])


@dataclass
class SimulatorConfig:
    responses: dict[str, str] = field(default_factory=dict)
    failures: dict[str, int] = field(default_factory=dict)
    default_failure_code: int = USSD_RETURN_FAILURE
    delay_seconds: float = 0.0


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class Config:
    channel: ChannelConfig = field(default_factory=ChannelConfig)
    permissions: PermissionsConfig = field(default_factory=PermissionsConfig)
    simulator: SimulatorConfig = field(default_factory=SimulatorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Override config values with environment variables."""
    env_map = {
        "USSD_BRIDGE_CHANNEL_NAME": ("channel", "name"),
        "USSD_BRIDGE_REQUIRED_PERMISSION": ("permissions", "required"),
        "USSD_BRIDGE_LOG_LEVEL": ("logging", "level"),
    }
    for env_var, path in env_map.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        section, key = path
        if not isinstance(raw.get(section), dict):
            raw[section] = {}
        raw[section][key] = value
    return raw


_NESTED_TYPES = {
    "channel": ChannelConfig,
    "permissions": PermissionsConfig,
    "simulator": SimulatorConfig,
    "logging": LoggingConfig,
}


def _dict_to_config(raw: dict[str, Any]) -> Config:
    """Convert a raw dict to a Config dataclass."""
    kwargs: dict[str, Any] = {}
    for section_name, section_cls in _NESTED_TYPES.items():
        section_data = raw.get(section_name)
        if isinstance(section_data, dict):
            kwargs[section_name] = section_cls(**section_data)
    return Config(**kwargs)


def load_config(config_path: str | Path = "config.yaml") -> Config:
    """Load configuration from a YAML file with env var overrides.

    If the file doesn't exist, returns default config.
    """
    config_path = Path(config_path)
    raw: dict[str, Any] = {}

    if config_path.exists():
        with open(config_path) as f:
            loaded = yaml.safe_load(f)
            if isinstance(loaded, dict):
                raw = loaded

    raw = _apply_env_overrides(raw)
    return _dict_to_config(raw)
