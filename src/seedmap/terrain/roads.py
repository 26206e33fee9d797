"""Road network: greedy nearest-fragment linking and line rasterization.

Each round links the closest (connected, remaining) settlement pair. This
is a cheap approximation of a minimum spanning tree; total road length is
not guaranteed to be minimal, only that every settlement ends up connected.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..biomes import RoadShape
from ..types import Position

# Neighbor bits for auto-tiling: up (y - 1), right, down, left
ROAD_UP = 1
ROAD_RIGHT = 2
ROAD_DOWN = 4
ROAD_LEFT = 8

ROAD_SHAPES: dict[int, RoadShape] = {
    0: RoadShape.STRAIGHT,
    1: RoadShape.STRAIGHT,
    2: RoadShape.STRAIGHT,
    3: RoadShape.CURVE,
    4: RoadShape.STRAIGHT,
    5: RoadShape.STRAIGHT,
    6: RoadShape.CURVE,
    7: RoadShape.T_JUNCTION,
    8: RoadShape.STRAIGHT,
    9: RoadShape.CURVE,
    10: RoadShape.STRAIGHT,
    11: RoadShape.T_JUNCTION,
    12: RoadShape.CURVE,
    13: RoadShape.T_JUNCTION,
    14: RoadShape.T_JUNCTION,
    15: RoadShape.CROSS,
}


@dataclass(frozen=True)
class RoadNetwork:
    """Road cells plus the settlement pairs linked, in link order."""

    cells: frozenset[Position]
    segments: tuple[tuple[Position, Position], ...]


def bresenham_line(start: Position, end: Position) -> list[Position]:
    """Rasterize a straight line between two cells, endpoints included."""
    x0, y0 = start.x, start.y
    x1, y1 = end.x, end.y
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    cells = []
    while True:
        cells.append(Position(x=x0, y=y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy

    return cells


def closest_pair(
    connected: list[Position],
    remaining: list[Position],
) -> tuple[Position, Position]:
    """Find the (connected, remaining) pair with minimum Manhattan distance.

    Scans connected in order, then remaining in order; the first pair found
    at the minimum distance wins.
    """
    best: tuple[Position, Position] | None = None
    best_dist = 0

    for a in connected:
        for b in remaining:
            dist = a.manhattan(b)
            if best is None or dist < best_dist:
                best = (a, b)
                best_dist = dist

    if best is None:
        raise ValueError("closest_pair needs non-empty connected and remaining lists")
    return best


def connect_settlements(settlements: list[Position]) -> RoadNetwork:
    """Link all settlements into one road network.

    Args:
        settlements: Settlement positions; the first seeds the network.

    Returns:
        RoadNetwork; empty when fewer than two settlements exist.
    """
    if len(settlements) < 2:
        return RoadNetwork(cells=frozenset(), segments=())

    connected = [settlements[0]]
    remaining = list(settlements[1:])
    cells: set[Position] = set()
    segments: list[tuple[Position, Position]] = []

    while remaining:
        a, b = closest_pair(connected, remaining)
        cells.update(bresenham_line(a, b))
        segments.append((a, b))
        remaining.remove(b)
        connected.append(b)

    return RoadNetwork(cells=frozenset(cells), segments=tuple(segments))


def connect(settlements: list[Position]) -> frozenset[Position]:
    """Road cells connecting all settlements."""
    return connect_settlements(settlements).cells


def road_mask(cells: frozenset[Position], size: int) -> NDArray[np.bool_]:
    """Boolean [y, x] mask of road cells."""
    mask = np.zeros((size, size), dtype=bool)
    for cell in cells:
        mask[cell.y, cell.x] = True
    return mask


def _is_road(mask: NDArray[np.bool_], x: int, y: int) -> bool:
    height, width = mask.shape
    if 0 <= y < height and 0 <= x < width:
        return bool(mask[y, x])
    # Out-of-grid neighbors are absent.
    return False


def road_bitmask(mask: NDArray[np.bool_], x: int, y: int) -> int:
    """4-neighbor bitmask of road cells around (x, y)."""
    bits = 0
    if _is_road(mask, x, y - 1):
        bits |= ROAD_UP
    if _is_road(mask, x + 1, y):
        bits |= ROAD_RIGHT
    if _is_road(mask, x, y + 1):
        bits |= ROAD_DOWN
    if _is_road(mask, x - 1, y):
        bits |= ROAD_LEFT
    return bits


def road_shape(mask: NDArray[np.bool_], x: int, y: int) -> RoadShape:
    """Visual road shape for the road cell at (x, y)."""
    return ROAD_SHAPES[road_bitmask(mask, x, y)]
