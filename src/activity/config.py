"""Configuration for activity counters: defaults and JSON config files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_VERSION = "1.0"
DEFAULT_TAU: float = 60.0

DEFAULT_CONFIG = {
    "version": CONFIG_VERSION,
    "activity": {
        "tau_seconds": DEFAULT_TAU,
    },
}


class ActivityConfigError(Exception):
    """Error raised for corrupt or unreadable config files."""


def get_activity_config(config: dict[str, Any]) -> float:
    """Extract the characteristic time in seconds from *config*.

    Looks under the ``activity`` key.  Falls back to ``DEFAULT_TAU`` when the
    key is missing or the value is not positive.
    """
    activity_cfg = config.get("activity", {})
    try:
        tau = float(activity_cfg.get("tau_seconds", DEFAULT_TAU))
    except (TypeError, ValueError) as e:
        raise ActivityConfigError(f"Invalid tau_seconds: {e}") from e

    if not tau > 0:
        logger.warning("Ignoring non-positive tau_seconds=%s, using %s", tau, DEFAULT_TAU)
        return DEFAULT_TAU
    return tau


def read_config(path: Path) -> dict[str, Any]:
    """Read a JSON config file.  Raises FileNotFoundError if *path* is missing."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    try:
        result: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ActivityConfigError(f"Corrupt config file {path}: {e}") from e
    if not isinstance(result, dict):
        raise ActivityConfigError(f"Expected a JSON object in {path}, got: {type(result).__name__}")
    return result
