"""The finished map handed to renderers."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..biomes import Biome
from ..types import Position
from .hydrology import River
from .roads import road_mask


def _frozen(array: NDArray) -> NDArray:
    array = array.copy()
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class WorldMap:
    """Fully classified map. Immutable once built.

    Arrays are indexed [y, x] and marked read-only. Rivers and roads are
    overlays: ``biomes`` still holds the underlying biome of those cells.
    """

    seed: str
    size: int
    elevation: NDArray[np.float64]
    moisture: NDArray[np.float64]
    biomes: NDArray[np.uint8]
    river_mask: NDArray[np.bool_]
    rivers: tuple[River, ...]
    settlements: tuple[Position, ...]
    road_cells: frozenset[Position]
    road_segments: tuple[tuple[Position, Position], ...] = ()

    @classmethod
    def build(
        cls,
        seed: str,
        size: int,
        elevation: NDArray[np.float64],
        moisture: NDArray[np.float64],
        biomes: NDArray[np.uint8],
        river_mask: NDArray[np.bool_],
        rivers: list[River],
        settlements: list[Position],
        road_cells: frozenset[Position],
        road_segments: tuple[tuple[Position, Position], ...] = (),
    ) -> "WorldMap":
        """Assemble a WorldMap from stage outputs, freezing every array."""
        return cls(
            seed=seed,
            size=size,
            elevation=_frozen(elevation),
            moisture=_frozen(moisture),
            biomes=_frozen(biomes),
            river_mask=_frozen(river_mask),
            rivers=tuple(rivers),
            settlements=tuple(settlements),
            road_cells=frozenset(road_cells),
            road_segments=tuple(road_segments),
        )

    def biome_at(self, x: int, y: int) -> Biome:
        return Biome.from_code(int(self.biomes[y, x]))

    def is_river(self, x: int, y: int) -> bool:
        return bool(self.river_mask[y, x])

    def road_mask(self) -> NDArray[np.bool_]:
        """Boolean [y, x] mask of road cells."""
        return road_mask(self.road_cells, self.size)

    def biome_counts(self) -> dict[Biome, int]:
        """Number of cells per biome."""
        return {biome: int(np.sum(self.biomes == biome.code)) for biome in Biome}
