"""Biome labels, tile types and road shapes."""

from enum import Enum


class Biome(str, Enum):
    """Per-cell biome classification."""

    WATER = "water"
    SAND = "sand"
    GRASS = "grass"
    FOREST = "forest"
    MOUNTAIN = "mountain"
    SNOW = "snow"

    @property
    def is_land(self) -> bool:
        """Whether this biome is dry land."""
        return self is not Biome.WATER

    @property
    def code(self) -> int:
        """Compact uint8 code used in biome grids."""
        return _BIOME_CODES[self]

    @classmethod
    def from_code(cls, value: int) -> "Biome":
        """Convert a uint8 grid code back to a Biome."""
        return _CODE_BIOMES[value]


_BIOME_CODES = {
    Biome.WATER: 0,
    Biome.SAND: 1,
    Biome.GRASS: 2,
    Biome.FOREST: 3,
    Biome.MOUNTAIN: 4,
    Biome.SNOW: 5,
}

_CODE_BIOMES = {code: biome for biome, code in _BIOME_CODES.items()}


class RoadShape(str, Enum):
    """Visual sub-type of a road tile, derived from its neighbors."""

    STRAIGHT = "road"
    CURVE = "road_curve"
    T_JUNCTION = "road_t"
    CROSS = "road_cross"


class TileType(str, Enum):
    """Tile-set entries for the auto-tiled map variant."""

    WATER = "water"
    SAND = "sand"
    GRASS = "grass"
    FOREST = "forest"
    MOUNTAIN = "mountain"
    SNOW = "snow"
    RIVER = "river"
    ROAD = "road"
    ROAD_CURVE = "road_curve"
    ROAD_T = "road_t"
    ROAD_CROSS = "road_cross"

    @classmethod
    def for_biome(cls, biome: Biome) -> "TileType":
        return cls(biome.value)

    @classmethod
    def for_road(cls, shape: RoadShape) -> "TileType":
        return cls(shape.value)
