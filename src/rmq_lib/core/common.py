# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the rmq library.

This module provides helpers for YAML output, formatting of numeric queue
metrics, and interpreting boolean-like strings from the environment.
"""

from functools import lru_cache

import yaml

from .logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def load_yaml_dumper() -> type[yaml.Dumper]:
    """Return the fastest available YAML dumper (CDumper if possible)."""
    try:
        from yaml import CDumper as Dumper  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CDumper.")
    except ImportError:
        from yaml import Dumper

        logger.debug("Loaded default YAML dumper.")
    return Dumper


def format_percentage(fraction: float) -> str:
    """
    Format a fraction as a percentage with two decimal places.

    Examples:
        0.5   -> "50.00%"
        0.255 -> "25.50%"
        1.0   -> "100.00%"

    Args:
        fraction (float): Value on the 0.0-1.0 scale.

    Returns:
        str: The formatted percentage including the trailing '%'.
    """
    return f"{fraction * 100:.2f}%"


def format_decimal(value: float) -> str:
    """
    Format a number with exactly two decimal places, e.g. 1.0 -> "1.00".
    """
    return f"{value:.2f}"


def is_truthy(s: str | None) -> bool:
    """
    Interpret a string (typically the value of an environment variable) as a boolean.

    Args:
        s (str | None): The string to interpret.

    Returns:
        bool: True for "1", "true", "yes" and "on" (case-insensitive), False otherwise.
    """
    if s is None:
        return False

    return s.strip().lower() in ("1", "true", "yes", "on")
