"""Auto-tiled tile grid for tile-based renderers.

The tile set has no combined biome/feature tiles, so river cells replace
their biome tile and road cells replace both.
"""

from ..biomes import Biome, TileType
from .roads import road_shape
from .world_map import WorldMap


def compose_tiles(world_map: WorldMap) -> list[list[TileType]]:
    """Build the tile grid, indexed [y][x].

    Args:
        world_map: Generated map.

    Returns:
        Rows of tile types.
    """
    roads = world_map.road_mask()
    tiles: list[list[TileType]] = []

    for y in range(world_map.size):
        row = []
        for x in range(world_map.size):
            if roads[y, x]:
                tile = TileType.for_road(road_shape(roads, x, y))
            elif world_map.river_mask[y, x]:
                tile = TileType.RIVER
            else:
                tile = TileType.for_biome(Biome.from_code(int(world_map.biomes[y, x])))
            row.append(tile)
        tiles.append(row)

    return tiles
