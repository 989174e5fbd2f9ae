#!/usr/bin/env python3
"""Misc utilities."""


from pathlib import Path
from typing import Any, Dict

from .optimizer import DEFAULT_OVERHEAD, DEFAULT_SAMPLING_TIMES, SamplingTimeMenu


def load_config(filename: Path) -> Dict[str, Any]:
    """Load configuration variables.

    Args:
        filename (Path): The configuration file to load

    Returns:
        Dict[str, Any]: The configuration data
    """
    config: Dict[str, Any] = {}
    exec(filename.read_text(), None, config)
    return config


def menu_from_config(config: Dict[str, Any]) -> SamplingTimeMenu:
    """Build the sampling time menu described by a configuration.

    Args:
        config: A dictionary containing the configuration parameters.

    Returns:
        SamplingTimeMenu: The menu, with defaults for missing entries
    """
    return SamplingTimeMenu(
        tuple(config.get("sampling_times", DEFAULT_SAMPLING_TIMES)),
        config.get("overhead_cycles", DEFAULT_OVERHEAD),
    )
