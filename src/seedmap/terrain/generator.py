"""Main map generation orchestration."""

import numpy as np
import structlog

from ..biomes import Biome
from .classification import classify_grid
from .config import MapConfig, check_config
from .fields import generate_fields
from .hydrology import carve_rivers
from .rng import StreamId, derive_stream
from .roads import connect_settlements
from .settlements import place_settlements
from .world_map import WorldMap

logger = structlog.get_logger()


def generate_map(config: MapConfig) -> WorldMap:
    """Generate a complete map from configuration.

    Every stage reads only the seed, the size and earlier stage outputs, so
    identical configs produce identical maps.

    Args:
        config: Map generation configuration.

    Returns:
        The finished WorldMap.

    Raises:
        ConfigurationError: If the configuration is invalid. Nothing is
            generated in that case.
    """
    check_config(config)
    seed, size = config.seed, config.size

    logger.info("map_generation_started", seed=seed, size=size)

    # Stage A: Continuous fields
    terrain_stream = derive_stream(seed, StreamId.TERRAIN)
    elevation, moisture = generate_fields(
        terrain_stream, size, config.noise, config.island
    )
    logger.debug(
        "fields_generated",
        elevation_mean=round(float(np.mean(elevation)), 4),
        moisture_mean=round(float(np.mean(moisture)), 4),
    )

    # Stage B: Biomes
    biomes = classify_grid(elevation, moisture, config.classification)

    # Stage C: Hydrology
    river_mask, rivers = carve_rivers(
        elevation,
        derive_stream(seed, StreamId.RIVERS),
        config.hydrology,
        config.classification.water_level,
    )
    logger.debug(
        "rivers_traced",
        rivers=len(rivers),
        river_cells=int(np.sum(river_mask)),
    )

    # Stage D: Settlements
    settlements = place_settlements(
        elevation,
        moisture,
        river_mask,
        derive_stream(seed, StreamId.SETTLEMENTS),
        config.settlements,
    )
    logger.debug(
        "settlements_placed",
        placed=len(settlements),
        target=config.settlements.target_count,
    )

    # Stage E: Roads
    network = connect_settlements(settlements)
    logger.debug("roads_built", road_cells=len(network.cells), segments=len(network.segments))

    world_map = WorldMap.build(
        seed=seed,
        size=size,
        elevation=elevation,
        moisture=moisture,
        biomes=biomes,
        river_mask=river_mask,
        rivers=rivers,
        settlements=settlements,
        road_cells=network.cells,
        road_segments=network.segments,
    )

    _log_map_stats(world_map)
    return world_map


def _log_map_stats(world_map: WorldMap) -> None:
    """Log map generation statistics."""
    total = world_map.size * world_map.size
    counts = world_map.biome_counts()

    logger.info(
        "map_stats",
        cells=total,
        land_fraction=round(1.0 - counts[Biome.WATER] / total, 3),
        river_cells=int(np.sum(world_map.river_mask)),
        settlements=len(world_map.settlements),
        road_cells=len(world_map.road_cells),
        **{biome.value: count for biome, count in counts.items()},
    )
