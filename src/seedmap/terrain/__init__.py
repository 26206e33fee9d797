"""Procedural map generation package.

This package turns a seed and a grid size into a classified island map:
elevation and moisture fields, biomes, rivers, settlements and roads.
"""

from .config import MapConfig, clamp_size, load_config
from .generator import generate_map
from .roads import connect, connect_settlements
from .tiles import compose_tiles
from .validation import ValidationResult, validate_map
from .world_map import WorldMap

__all__ = [
    "MapConfig",
    "ValidationResult",
    "WorldMap",
    "clamp_size",
    "compose_tiles",
    "connect",
    "connect_settlements",
    "generate_map",
    "load_config",
    "validate_map",
]
