"""Field generation: elevation and moisture."""

import numpy as np
from numpy.typing import NDArray

from .config import IslandConfig, NoiseConfig
from .noise import island_falloff, octave_sum
from .rng import SeedStream


def draw_cell_jitter(
    stream: SeedStream,
    size: int,
    per_cell: int,
) -> NDArray[np.float64]:
    """Draw every per-cell jitter value up front.

    Cells are visited row-major (y outer, x inner) and each takes
    ``per_cell`` consecutive draws, so the value for a given cell and slot
    does not depend on how the noise pass is later evaluated.

    Args:
        stream: Terrain stream, advanced by ``size * size * per_cell`` draws.
        size: Grid size.
        per_cell: Draws consumed by each cell.

    Returns:
        Array of shape (size, size, per_cell) indexed [y, x, slot].
    """
    return stream.draws(size * size * per_cell).reshape(size, size, per_cell)


def make_elevation(
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
    jitter: NDArray[np.float64],
    noise: NoiseConfig,
    island: IslandConfig,
) -> NDArray[np.float64]:
    """Generate the elevation field.

    Args:
        xs: Grid x coordinates.
        ys: Grid y coordinates.
        jitter: Elevation jitter, one slot per elevation octave.
        noise: Noise parameters.
        island: Island shaping parameters.

    Returns:
        2D elevation array in [0, 1].
    """
    elevation = octave_sum(xs, ys, noise.elevation_octaves, jitter, noise.hash_weight)
    elevation = island_falloff(elevation, island.falloff_strength)
    return np.clip(elevation, 0.0, 1.0)


def make_moisture(
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
    jitter: NDArray[np.float64],
    elevation: NDArray[np.float64],
    noise: NoiseConfig,
) -> NDArray[np.float64]:
    """Generate the moisture field.

    Noise is blended with ``1 - elevation`` so lowlands trend wetter.

    Returns:
        2D moisture array in [0, 1].
    """
    base = octave_sum(xs, ys, noise.moisture_octaves, jitter, noise.hash_weight)
    weight = noise.moisture_noise_weight
    moisture = base * weight + (1.0 - weight) * (1.0 - elevation)
    return np.clip(moisture, 0.0, 1.0)


def generate_fields(
    stream: SeedStream,
    size: int,
    noise: NoiseConfig,
    island: IslandConfig,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Generate elevation and moisture for a size x size grid.

    Args:
        stream: Terrain stream.
        size: Grid size.
        noise: Noise parameters.
        island: Island shaping parameters.

    Returns:
        Tuple of (elevation, moisture), both indexed [y, x].
    """
    n_elev = len(noise.elevation_octaves)
    per_cell = n_elev + len(noise.moisture_octaves)
    jitter = draw_cell_jitter(stream, size, per_cell)

    coords = np.arange(size, dtype=np.float64)
    xs, ys = np.meshgrid(coords, coords)

    elevation = make_elevation(xs, ys, jitter[..., :n_elev], noise, island)
    moisture = make_moisture(xs, ys, jitter[..., n_elev:], elevation, noise)

    return elevation, moisture
