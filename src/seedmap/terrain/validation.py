"""Post-generation validation of map invariants."""

import numpy as np
import structlog
from scipy import ndimage

from ..biomes import Biome
from .config import MapConfig
from .world_map import WorldMap

logger = structlog.get_logger()


class ValidationResult:
    """Result of map validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_map(world_map: WorldMap, config: MapConfig) -> ValidationResult:
    """Validate a generated map against its invariants.

    Args:
        world_map: Generated map.
        config: Configuration it was generated with.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    _check_field_ranges(world_map, result)
    _check_biome_labels(world_map, result)
    _check_settlements(world_map, config, result)
    _check_road_connectivity(world_map, result)

    if result.passed:
        logger.debug("map_validation_passed")
    else:
        logger.warning("map_validation_failed", errors=result.errors)

    for warning in result.warnings:
        logger.warning("map_validation_warning", warning=warning)

    return result


def _check_field_ranges(world_map: WorldMap, result: ValidationResult) -> None:
    """Check elevation and moisture lie in [0, 1]."""
    for name, field in (("elevation", world_map.elevation), ("moisture", world_map.moisture)):
        if field.shape != (world_map.size, world_map.size):
            result.add_error(f"{name} has shape {field.shape}")
        elif field.min() < 0.0 or field.max() > 1.0:
            result.add_error(
                f"{name} outside [0, 1]: [{field.min():.3f}, {field.max():.3f}]"
            )


def _check_biome_labels(world_map: WorldMap, result: ValidationResult) -> None:
    """Check every biome code is a known Biome."""
    valid = {biome.code for biome in Biome}
    unknown = set(np.unique(world_map.biomes).tolist()) - valid
    if unknown:
        result.add_error(f"Unknown biome codes: {sorted(unknown)}")

    if not np.any(world_map.biomes == Biome.WATER.code):
        result.add_warning("Map has no water")
    if np.all(world_map.biomes == Biome.WATER.code):
        result.add_warning("Map has no land")


def _check_settlements(
    world_map: WorldMap,
    config: MapConfig,
    result: ValidationResult,
) -> None:
    """Check settlement bounds, count and spacing."""
    settlements = world_map.settlements
    spacing = config.settlements.min_spacing

    if len(settlements) > config.settlements.target_count:
        result.add_error(
            f"{len(settlements)} settlements exceeds target {config.settlements.target_count}"
        )
    elif len(settlements) < config.settlements.target_count:
        result.add_warning(
            f"Placed {len(settlements)} of {config.settlements.target_count} settlements"
        )

    out_of_bounds = [s for s in settlements if not s.in_bounds(world_map.size)]
    if out_of_bounds:
        result.add_error(f"{len(out_of_bounds)} settlements outside the grid")

    too_close = 0
    for i, a in enumerate(settlements):
        for b in settlements[i + 1:]:
            if a.manhattan(b) < spacing:
                too_close += 1
    if too_close:
        result.add_error(f"{too_close} settlement pairs closer than {spacing}")


def _check_road_connectivity(world_map: WorldMap, result: ValidationResult) -> None:
    """Check roads join every settlement into one 8-connected component."""
    settlements = world_map.settlements

    if len(settlements) < 2:
        if world_map.road_cells:
            result.add_error("Roads present with fewer than two settlements")
        return

    if not world_map.road_cells:
        result.add_error("No roads between settlements")
        return

    structure = ndimage.generate_binary_structure(2, 2)
    labeled, _ = ndimage.label(world_map.road_mask(), structure=structure)

    labels = {int(labeled[s.y, s.x]) for s in settlements}
    if 0 in labels:
        result.add_error("Settlement not on a road cell")
    elif len(labels) > 1:
        result.add_error(f"Road network split into {len(labels)} components")
