# MIT License (see LICENSE)
"""
Input/Output utilities for the demos.

This subpackage provides:
    - Config presets: Save and load engine configurations as JSON.
    - State snapshots: JSON-ready dicts for frame logs.

Typical usage:
    from physics_demos.io import load_config, save_config

    config = load_config("presets/slow_pendulum.json")
    engine.configure(config)
"""
from .json_io import (
    load_config,
    save_config,
    config_to_json,
    config_from_json,
    state_to_json,
)

__all__ = [
    # Loading
    "load_config",
    "config_from_json",
    # Saving
    "save_config",
    "config_to_json",
    # Snapshots
    "state_to_json",
]
