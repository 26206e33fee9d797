"""Deterministic seed-driven world map generation."""

from .biomes import Biome, RoadShape, TileType
from .exceptions import ConfigurationError, SeedMapError
from .terrain import MapConfig, WorldMap, generate_map
from .types import Position

__all__ = [
    # Types
    "Position",
    "Biome",
    "RoadShape",
    "TileType",
    # Generation
    "MapConfig",
    "WorldMap",
    "generate_map",
    # Exceptions
    "SeedMapError",
    "ConfigurationError",
]
