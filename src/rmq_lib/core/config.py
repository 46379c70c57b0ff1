# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for rmq.

This module defines dataclasses representing all configurable aspects of rmq,
including environment variables, the location of the resource manager,
federation routing, timeouts, presentation settings, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by rmq."""

    # Enables rmq debug mode.
    debug_mode: str = "RMQ_DEBUG"
    # Path to an explicit rmq config file.
    config: str = "RMQ_CONFIG"
    # Web address of the resource manager (or federation router).
    rm_address: str = "RMQ_RM_ADDRESS"
    # Forces federation mode on ("1", "true", "yes") or off (anything else).
    federation: str = "RMQ_FEDERATION"


@dataclass
class ResourceManagerSettings:
    """Settings describing how to reach the resource manager."""

    # Web address of the resource manager, or of the router in federation mode.
    address: str = "http://localhost:8088"
    # Path of the scheduler endpoint of the REST API.
    scheduler_endpoint: str = "/ws/v1/cluster/scheduler"


@dataclass
class FederationSettings:
    """Settings for deployments running in federation mode."""

    # Is the resource manager a federation router?
    enabled: bool = False
    # Web addresses of the individual subclusters, keyed by subcluster id.
    subclusters: dict[str, str] = field(default_factory=dict)


@dataclass
class TimeoutSettings:
    """Timeout settings in seconds."""

    # Timeout for a single request to the resource manager.
    http: int = 30


@dataclass
class QueuePresenterSettings:
    """Settings for QueuePresenter."""

    # Displayed when a queue has no default node label expression.
    default_partition: str = "<DEFAULT_PARTITION>"
    # Format of the queues table, see `tabulate` for available formats.
    table_format: str = "psql"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by rmq.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Returned when a queue is not found, on invalid usage and on most errors.
    default: int = 255
    # Returned when the resource manager cannot be reached or fails to respond.
    communication: int = 92
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for rmq."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    resource_manager: ResourceManagerSettings = field(
        default_factory=ResourceManagerSettings
    )
    federation: FederationSettings = field(default_factory=FederationSettings)
    timeouts: TimeoutSettings = field(default_factory=TimeoutSettings)
    queue_presenter: QueuePresenterSettings = field(
        default_factory=QueuePresenterSettings
    )
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read rmq config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path) if (env_path := os.getenv("RMQ_CONFIG")) else None,
            # 2. Current working directory (for development/override)
            Path.cwd() / "rmq_config.toml",
            # 3. XDG config home (standard user config location)
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "rmq"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for rmq.
CFG = Config.load()
