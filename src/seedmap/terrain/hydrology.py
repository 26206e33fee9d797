"""Hydrology: river sources and steepest-descent river tracing.

Rivers never branch and are only ever added to the mask, so overlapping
rivers simply merge.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..types import Position
from .config import HydrologyConfig
from .rng import SeedStream

# D8 directions: N, NE, E, SE, S, SW, W, NW (clockwise from north)
D8_DY = np.array([-1, -1, 0, 1, 1, 1, 0, -1], dtype=np.int32)
D8_DX = np.array([0, 1, 1, 1, 0, -1, -1, -1], dtype=np.int32)


@dataclass(frozen=True)
class River:
    """A traced river: its source and every cell it visited, in order."""

    source: Position
    path: tuple[Position, ...]

    def __len__(self) -> int:
        return len(self.path)


def neighbor_elevation(
    elevation: NDArray[np.float64],
    x: int,
    y: int,
) -> float | None:
    """Elevation at (x, y), or None when the cell is outside the grid."""
    height, width = elevation.shape
    if 0 <= y < height and 0 <= x < width:
        return float(elevation[y, x])
    return None


def lowest_neighbor(
    elevation: NDArray[np.float64],
    x: int,
    y: int,
) -> Position | None:
    """Find the lowest 8-connected neighbor strictly below (x, y).

    Ties go to the first neighbor in D8 order.

    Returns:
        Neighbor position, or None at a local minimum.
    """
    best_elev = float(elevation[y, x])
    best: Position | None = None

    for d in range(8):
        nx = x + int(D8_DX[d])
        ny = y + int(D8_DY[d])
        elev = neighbor_elevation(elevation, nx, ny)
        if elev is not None and elev < best_elev:
            best_elev = elev
            best = Position(x=nx, y=ny)

    return best


def select_river_source(
    elevation: NDArray[np.float64],
    stream: SeedStream,
    min_elevation: float,
    attempts: int,
) -> Position:
    """Pick a high-ground river source by rejection sampling.

    Each attempt draws x then y. When no attempt clears ``min_elevation``
    the last sampled cell is used.

    Args:
        elevation: Elevation field.
        stream: River stream.
        min_elevation: Elevation a source must exceed.
        attempts: Number of draws allowed.

    Returns:
        Source position.
    """
    size = elevation.shape[0]
    candidate = Position(x=0, y=0)

    for _ in range(attempts):
        x = stream.randrange(size)
        y = stream.randrange(size)
        candidate = Position(x=x, y=y)
        if elevation[y, x] > min_elevation:
            break

    return candidate


def trace_river(
    source: Position,
    elevation: NDArray[np.float64],
    water_level: float,
    max_steps: int,
) -> tuple[Position, ...]:
    """Follow steepest descent from a source.

    Each step visits the current cell, stops if it is below ``water_level``,
    then moves to the lowest strictly-lower neighbor. The walk also ends at
    a local minimum or after ``max_steps`` steps.

    Args:
        source: Start cell.
        elevation: Elevation field.
        water_level: Elevation below which the river has reached water.
        max_steps: Step budget.

    Returns:
        Visited cells from source to end.
    """
    path = []
    current = source

    for _ in range(max_steps):
        path.append(current)
        if elevation[current.y, current.x] < water_level:
            break

        nxt = lowest_neighbor(elevation, current.x, current.y)
        if nxt is None:
            break
        current = nxt

    return tuple(path)


def carve_rivers(
    elevation: NDArray[np.float64],
    stream: SeedStream,
    config: HydrologyConfig,
    water_level: float,
) -> tuple[NDArray[np.bool_], list[River]]:
    """Trace ``config.river_count`` rivers into a shared mask.

    Args:
        elevation: Elevation field.
        stream: River stream.
        config: Hydrology configuration.
        water_level: Elevation below which a river stops.

    Returns:
        Tuple of (river_mask, list of River objects).
    """
    size = elevation.shape[0]
    river_mask = np.zeros(elevation.shape, dtype=bool)
    max_steps = config.max_steps_factor * size
    rivers: list[River] = []

    for _ in range(config.river_count):
        source = select_river_source(
            elevation, stream, config.source_elevation, config.source_attempts
        )
        path = trace_river(source, elevation, water_level, max_steps)

        for cell in path:
            river_mask[cell.y, cell.x] = True

        rivers.append(River(source=source, path=path))

    return river_mask, rivers


def trace_rivers(
    elevation: NDArray[np.float64],
    stream: SeedStream,
    config: HydrologyConfig,
    water_level: float,
) -> NDArray[np.bool_]:
    """Trace rivers and return only the mask."""
    river_mask, _ = carve_rivers(elevation, stream, config, water_level)
    return river_mask
