# MIT License (see LICENSE)
"""
JSON serialization for demo configurations and state snapshots.

Configurations can be stored as presets and loaded back to drive an
engine. Values are stored as requested; clamping happens when the config
is handed to an engine, so a preset written by hand may contain values
outside the documented ranges.

JSON Schema Overview:
---------------------
{
  "kind": "projectile" | "bouncing_ball" | "pendulum",   # Required
  "params": {                                           # Optional
    "<field>": float | bool,   # Any config field; missing fields use defaults
    ...
  }
}

Example:
{
  "kind": "pendulum",
  "params": {"length": 2.0, "initial_angle_deg": 10}
}

State snapshots (`state_to_json`) are plain dicts of floats and lists used by
FrameRecorder; they are not meant to be loaded back.
"""
from __future__ import annotations
import dataclasses
import json
from typing import Any

import numpy as np
from loguru import logger

from ..config import CONFIG_TYPES, SimulationConfig
from ..types import BallState, PendulumState, ProjectileState, SimulationState


def config_to_json(config: SimulationConfig) -> dict[str, Any]:
    """
    Serialize a config to a dictionary.

    Only fields that differ from the defaults are written to keep presets
    short.
    """
    params = {}
    for f in dataclasses.fields(config):
        value = getattr(config, f.name)
        if value != f.default:
            params[f.name] = value
    return {"kind": config.kind, "params": params}


def config_from_json(data: dict[str, Any]) -> SimulationConfig:
    """
    Build a config from a dictionary produced by config_to_json.

    Args:
        data: Dictionary with a "kind" and optional "params".

    Returns:
        Config instance (not clamped).

    Raises:
        ValueError: If the kind is missing or unknown, "params" is not an
            object, or a parameter has the wrong type.
    """
    kind = data.get("kind")
    if kind not in CONFIG_TYPES:
        raise ValueError(f"Unknown simulation kind: '{kind}'")
    cls = CONFIG_TYPES[kind]

    fields = {f.name: f for f in dataclasses.fields(cls)}
    kwargs: dict[str, Any] = {}
    params = data.get("params", {})
    if not isinstance(params, dict):
        raise ValueError(f"{kind}: 'params' must be an object, got {type(params).__name__}")

    for name, value in params.items():
        if name not in fields:
            # Forward compatibility: presets from newer versions may carry extras
            logger.warning("{}: ignoring unknown parameter '{}'", kind, name)
            continue
        if isinstance(fields[name].default, bool):
            if not isinstance(value, bool):
                raise ValueError(f"{kind}: parameter '{name}' must be true or false, got {value!r}")
            kwargs[name] = value
            continue
        try:
            kwargs[name] = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{kind}: parameter '{name}' must be a number, got {value!r}") from exc

    return cls(**kwargs)


def load_config(path: str) -> SimulationConfig:
    """
    Load a config preset from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the document does not describe a known config.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("Config document must be a JSON object")
    return config_from_json(data)


def save_config(config: SimulationConfig, path: str, indent: int = 2) -> None:
    """
    Save a config preset to a JSON file on disk.

    Raises:
        ValueError: If a parameter is NaN or infinite (not representable
            in strict JSON). Nothing is written in that case.
    """
    text = json.dumps(config_to_json(config), indent=indent, allow_nan=False)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def state_to_json(state: SimulationState) -> dict[str, Any]:
    """Serialize a state snapshot to a JSON-compatible dictionary."""
    if isinstance(state, PendulumState):
        return {
            "time": state.time,
            "angle": state.angle,
            "angular_velocity": state.angular_velocity,
        }
    if isinstance(state, ProjectileState):
        return {
            "time": state.time,
            "position": _to_list(state.position),
            "velocity": _to_list(state.velocity),
            "grounded": state.grounded,
        }
    if isinstance(state, BallState):
        return {
            "time": state.time,
            "position": _to_list(state.position),
            "velocity": _to_list(state.velocity),
            "radius": state.radius,
        }
    raise TypeError(f"Cannot serialize unknown state type: {type(state)}")


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
