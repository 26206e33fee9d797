"""Biome classification: water, sand, grass, forest, mountain, snow."""

import numpy as np
from numpy.typing import NDArray

from ..biomes import Biome
from .config import ClassificationConfig


def classify(
    elevation: float,
    moisture: float,
    config: ClassificationConfig | None = None,
) -> Biome:
    """Classify a single cell. First matching threshold wins.

    Args:
        elevation: Cell elevation in [0, 1].
        moisture: Cell moisture in [0, 1].
        config: Threshold table.

    Returns:
        Biome label for the cell.
    """
    config = config or ClassificationConfig()

    if elevation < config.water_level:
        return Biome.WATER
    if elevation < config.sand_level:
        return Biome.SAND
    if elevation > config.snow_level:
        return Biome.SNOW
    if elevation > config.mountain_level:
        return Biome.MOUNTAIN
    if moisture > config.forest_moisture:
        return Biome.FOREST
    return Biome.GRASS


def classify_grid(
    elevation: NDArray[np.float64],
    moisture: NDArray[np.float64],
    config: ClassificationConfig,
) -> NDArray[np.uint8]:
    """Classify every cell into a biome code.

    Same cascade as ``classify``, applied with masks in reverse order so
    earlier checks overwrite later ones.

    Args:
        elevation: Elevation field.
        moisture: Moisture field.
        config: Threshold table.

    Returns:
        2D array of ``Biome.code`` values as uint8.
    """
    biomes = np.full(elevation.shape, Biome.GRASS.code, dtype=np.uint8)

    biomes[moisture > config.forest_moisture] = Biome.FOREST.code
    biomes[elevation > config.mountain_level] = Biome.MOUNTAIN.code
    biomes[elevation > config.snow_level] = Biome.SNOW.code
    biomes[elevation < config.sand_level] = Biome.SAND.code
    biomes[elevation < config.water_level] = Biome.WATER.code

    return biomes
