"""Settlement placement with habitability and spacing constraints."""

import numpy as np
import structlog
from numpy.typing import NDArray

from ..types import Position
from .config import SettlementConfig
from .rng import SeedStream

logger = structlog.get_logger()


def is_habitable(
    elevation: NDArray[np.float64],
    moisture: NDArray[np.float64],
    river_mask: NDArray[np.bool_],
    cell: Position,
    config: SettlementConfig,
) -> bool:
    """Whether a cell is dry, inside the habitable bands and off-river."""
    h = elevation[cell.y, cell.x]
    m = moisture[cell.y, cell.x]
    return (
        config.min_elevation < h < config.max_elevation
        and config.min_moisture <= m <= config.max_moisture
        and not river_mask[cell.y, cell.x]
    )


def is_spaced(
    cell: Position,
    placed: list[Position],
    min_spacing: int,
) -> bool:
    """Whether the cell is further than ``min_spacing`` from every placed one."""
    return all(cell.manhattan(other) > min_spacing for other in placed)


def place_settlements(
    elevation: NDArray[np.float64],
    moisture: NDArray[np.float64],
    river_mask: NDArray[np.bool_],
    stream: SeedStream,
    config: SettlementConfig,
) -> list[Position]:
    """Place up to ``config.target_count`` settlements.

    Each slot gets ``config.attempts`` random draws (x then y); the first
    habitable, well-spaced candidate is accepted. Slots that find none are
    skipped, so the result may be shorter than the target.

    Args:
        elevation: Elevation field.
        moisture: Moisture field.
        river_mask: Cells occupied by rivers.
        stream: Settlement stream.
        config: Settlement configuration.

    Returns:
        Accepted settlement positions in placement order.
    """
    size = elevation.shape[0]
    placed: list[Position] = []

    for slot in range(config.target_count):
        for _ in range(config.attempts):
            candidate = Position(x=stream.randrange(size), y=stream.randrange(size))
            if is_habitable(
                elevation, moisture, river_mask, candidate, config
            ) and is_spaced(candidate, placed, config.min_spacing):
                placed.append(candidate)
                break
        else:
            logger.debug("settlement_slot_skipped", slot=slot, attempts=config.attempts)

    return placed
