"""Shared test fixtures for map generation tests."""

import numpy as np
import pytest

from seedmap.terrain.config import MapConfig
from seedmap.terrain.generator import generate_map
from seedmap.terrain.world_map import WorldMap


@pytest.fixture
def small_config() -> MapConfig:
    """32x32 map with the canonical seed."""
    return MapConfig(seed="matrix", size=32)


@pytest.fixture
def matrix_map(small_config: MapConfig) -> WorldMap:
    """Generated 32x32 map for seed "matrix"."""
    return generate_map(small_config)


@pytest.fixture
def slope_elevation() -> np.ndarray:
    """10x10 field rising from west (0.0) to east (0.9)."""
    elevation = np.zeros((10, 10), dtype=np.float64)
    for x in range(10):
        elevation[:, x] = x / 10
    return elevation


@pytest.fixture
def pit_elevation() -> np.ndarray:
    """5x5 flat field with a single pit at (2, 2)."""
    elevation = np.ones((5, 5), dtype=np.float64)
    elevation[2, 2] = 0.0
    return elevation
