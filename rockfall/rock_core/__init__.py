"""
Rock Core - The falling-rock engine.

This module provides the drop simulation, cycle detection and height
extrapolation, plus supporting pieces (rock catalog, jet parsing, chamber).

Main exports:
- Extrapolator: Stack height after any number of drops (height_after)
- DropSimulator: Rock-by-rock simulation against a Chamber
- CycleDetector: Fingerprint-based period detection
- JetSequence: Parsed jet pattern
- RockfallConfig: Configuration loaded from chamber_config.yaml
"""

from rockfall.rock_core.config_loader import (
    ConfigurationError,
    RockfallConfig,
    load_config,
)
from rockfall.rock_core.rock_catalog import RockShape, RockCatalog
from rockfall.rock_core.jets import JetDirection, JetSequence
from rockfall.rock_core.chamber import Chamber
from rockfall.rock_core.drop_simulator import DropSimulator, SimulationState
from rockfall.rock_core.cycle_detector import CycleDetector, CycleRecord, Fingerprint
from rockfall.rock_core.extrapolator import Extrapolator, ExtrapolationResult, solve

__all__ = [
    "ConfigurationError",
    "RockfallConfig",
    "load_config",
    "RockShape",
    "RockCatalog",
    "JetDirection",
    "JetSequence",
    "Chamber",
    "DropSimulator",
    "SimulationState",
    "CycleDetector",
    "CycleRecord",
    "Fingerprint",
    "Extrapolator",
    "ExtrapolationResult",
    "solve",
]
