"""YAML configuration for the color plugin."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from mythcolor.color import MARKER
from mythcolor.markup import ALT_MARKERS

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "mythcolor.yaml"

DEFAULTS: dict[str, Any] = {
    "marker": MARKER,
    "alt_markers": ALT_MARKERS,
    "debug": False,
    "log_level": "INFO",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Invalid configuration file or value."""


def validate(config: dict[str, Any]) -> dict[str, Any]:
    """Check a merged config dict; returns it unchanged or raises ConfigError."""
    unknown = set(config) - set(DEFAULTS)
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")

    marker = config["marker"]
    if not isinstance(marker, str) or len(marker) != 1:
        raise ConfigError(f"marker must be a single character, got {marker!r}")

    alt = config["alt_markers"]
    if not isinstance(alt, str) or any(ch == "<" or ch.isalnum() for ch in alt):
        raise ConfigError(f"alt_markers must be punctuation characters, got {alt!r}")

    if not isinstance(config["debug"], bool):
        raise ConfigError(f"debug must be true or false, got {config['debug']!r}")

    level = config["log_level"]
    if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
    return config


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load a YAML config file over DEFAULTS. No path → defaults only."""
    config = dict(DEFAULTS)
    if path is None:
        return config
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    config.update(data)
    return validate(config)


def log_level(config: dict[str, Any]) -> int:
    """Numeric level from config; debug: true overrides log_level."""
    if config.get("debug"):
        return logging.DEBUG
    return getattr(logging, config.get("log_level", "INFO").upper())


def configure_logging(config: dict[str, Any]) -> None:
    """Install the root handler for standalone use."""
    logging.basicConfig(
        level=log_level(config),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
