"""
Configuration Loader
====================

Loads and validates chamber_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


# The rock catalog and row packing only cover this width
SUPPORTED_WIDTH = 7


class ConfigurationError(ValueError):
    """Raised when a jet pattern or configuration value is unusable."""


@dataclass(frozen=True)
class ChamberConfig:
    """Chamber geometry and spawn placement."""
    width: int         # Columns between the walls
    spawn_gap: int     # Empty rows between stack top and a new rock's bottom
    spawn_offset: int  # Empty columns between left wall and a new rock

    @property
    def full_row(self) -> int:
        """Bitmask with every column occupied."""
        return (1 << self.width) - 1


@dataclass(frozen=True)
class DetectionConfig:
    """Cycle detection parameters."""
    fingerprint_window: int   # Top rows captured in each fingerprint
    observation_height: int   # Height reached before the anchor is chosen


@dataclass(frozen=True)
class DebugConfig:
    """Diagnostic output."""
    enabled: bool


@dataclass(frozen=True)
class RockfallConfig:
    """
    Complete engine configuration loaded from YAML.

    All values are immutable to prevent accidental modification during a run.
    """
    chamber: ChamberConfig
    detection: DetectionConfig
    debug: DebugConfig

    @property
    def width(self) -> int:
        """Chamber width in columns."""
        return self.chamber.width


def _validate_config(config: RockfallConfig) -> None:
    """Validate configuration consistency."""
    if config.chamber.width != SUPPORTED_WIDTH:
        raise ConfigurationError(
            f"chamber.width must be {SUPPORTED_WIDTH}, got {config.chamber.width}"
        )

    if config.chamber.spawn_gap < 0:
        raise ConfigurationError(
            f"chamber.spawn_gap must be >= 0, got {config.chamber.spawn_gap}"
        )

    # The widest rock is 4 columns and must fit at spawn
    if not 0 <= config.chamber.spawn_offset <= config.chamber.width - 4:
        raise ConfigurationError(
            f"chamber.spawn_offset must be in [0, {config.chamber.width - 4}], "
            f"got {config.chamber.spawn_offset}"
        )

    if config.detection.fingerprint_window <= 0:
        raise ConfigurationError(
            f"detection.fingerprint_window must be positive, "
            f"got {config.detection.fingerprint_window}"
        )

    if config.detection.observation_height < 0:
        raise ConfigurationError(
            f"detection.observation_height must be >= 0, "
            f"got {config.detection.observation_height}"
        )


def load_config(config_path: Optional[str] = None) -> RockfallConfig:
    """
    Load and validate engine configuration from YAML.

    Args:
        config_path: Path to chamber_config.yaml. If None, uses default location.

    Returns:
        Validated RockfallConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "chamber_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f) or {}

    chamber_data = raw.get("chamber", {})
    chamber = ChamberConfig(
        width=int(chamber_data.get("width", SUPPORTED_WIDTH)),
        spawn_gap=int(chamber_data.get("spawn_gap", 3)),
        spawn_offset=int(chamber_data.get("spawn_offset", 2))
    )

    detection_data = raw.get("detection", {})
    detection = DetectionConfig(
        fingerprint_window=int(detection_data.get("fingerprint_window", 25)),
        observation_height=int(detection_data.get("observation_height", 50000))
    )

    # Debug section is optional
    debug_data = raw.get("debug", {})
    debug = DebugConfig(
        enabled=bool(debug_data.get("enabled", False))
    )

    config = RockfallConfig(
        chamber=chamber,
        detection=detection,
        debug=debug
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[RockfallConfig] = None


def get_config() -> RockfallConfig:
    """Get the cached engine configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> RockfallConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
