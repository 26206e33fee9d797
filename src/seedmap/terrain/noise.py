"""Noise functions for field generation.

Provides a coordinate-hash value noise blended with per-cell random jitter,
octave summation and the radial island falloff.
"""

import numpy as np
from numpy.typing import NDArray

from .config import OctaveConfig

HASH_X = 127.1
HASH_Y = 311.7
HASH_SCALE = 43758.5453123


def hash_noise(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Deterministic coordinate hash: fractional part of a scaled sine.

    Args:
        x: Sample x coordinates.
        y: Sample y coordinates.

    Returns:
        Values in [0, 1).
    """
    s = np.sin(x * HASH_X + y * HASH_Y) * HASH_SCALE
    return s - np.floor(s)


def jittered_noise(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    jitter: NDArray[np.float64],
    hash_weight: float = 0.5,
) -> NDArray[np.float64]:
    """Blend the coordinate hash with pre-drawn random jitter.

    Args:
        x: Sample x coordinates.
        y: Sample y coordinates.
        jitter: One RNG draw per sample, in [0, 1).
        hash_weight: Share of the hash in the result.

    Returns:
        Values in [0, 1).
    """
    return hash_noise(x, y) * hash_weight + (1.0 - hash_weight) * jitter


def octave_sum(
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
    octaves: list[OctaveConfig],
    jitter: NDArray[np.float64],
    hash_weight: float = 0.5,
) -> NDArray[np.float64]:
    """Weighted sum of octaves, normalized by the total weight.

    Args:
        xs: Grid x coordinates.
        ys: Grid y coordinates.
        octaves: Octave parameters.
        jitter: Array with one trailing slot per octave, in octave order.
        hash_weight: Share of the hash in each sample.

    Returns:
        Values in [0, 1).
    """
    result = np.zeros(xs.shape, dtype=np.float64)
    total_weight = 0.0

    for i, octave in enumerate(octaves):
        sample = jittered_noise(
            xs * octave.frequency + octave.offset_x,
            ys * octave.frequency + octave.offset_y,
            jitter[..., i],
            hash_weight,
        )
        result += octave.weight * sample
        total_weight += octave.weight

    return result / total_weight


def radial_distance(size: int) -> NDArray[np.float64]:
    """Euclidean distance of each cell from the grid center.

    Each axis is mapped to [-1, 1) via ``(i / size - 0.5) * 2``, so edge
    midpoints sit near 1 and corners near sqrt(2).
    """
    coords = (np.arange(size, dtype=np.float64) / size - 0.5) * 2.0
    xx, yy = np.meshgrid(coords, coords)
    return np.sqrt(xx * xx + yy * yy)


def island_falloff(
    elevation: NDArray[np.float64],
    strength: float,
) -> NDArray[np.float64]:
    """Attenuate elevation toward the edges to shape an island.

    Multiplies by ``1 - strength * distance`` and forces cells further than
    1 from the center to zero.
    """
    dist = radial_distance(elevation.shape[0])
    result = elevation * (1.0 - strength * dist)
    result[dist > 1.0] = 0.0
    return result
