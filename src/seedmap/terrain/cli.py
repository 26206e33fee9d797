"""Command-line interface for map generation."""

import argparse
import logging
import sys
import time

import structlog


def main() -> None:
    """CLI entry point for map generation."""
    parser = argparse.ArgumentParser(
        description="Generate a deterministic world map from a seed"
    )
    parser.add_argument(
        "--seed", type=str, default=None, help="Seed text (default: from config, else empty)"
    )
    parser.add_argument(
        "--size", type=int, default=None, help="Grid size, clamped to the allowed range"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path or name of a packaged TOML config",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    from ..exceptions import ConfigurationError
    from .config import MapConfig, clamp_size, find_config, load_config
    from .generator import generate_map
    from .validation import validate_map

    try:
        config = load_config(find_config(args.config)) if args.config else MapConfig()
    except (FileNotFoundError, ConfigurationError) as e:
        logger.error("config_load_failed", error=str(e))
        sys.exit(2)

    size = clamp_size(args.size if args.size is not None else config.size, config)
    seed = args.seed if args.seed is not None else config.seed
    config = config.model_copy(update={"seed": seed, "size": size})

    print(f"Generating {size}x{size} map with seed {seed!r}")

    start_time = time.time()
    try:
        world_map = generate_map(config)
    except ConfigurationError as e:
        logger.error("generation_rejected", error=str(e))
        sys.exit(2)
    gen_time = time.time() - start_time

    validation = validate_map(world_map, config)

    print(f"Generation complete in {gen_time:.2f}s")
    print()
    total = size * size
    for biome, count in world_map.biome_counts().items():
        print(f"  {biome.value:<9} {count:>7,} ({count / total:.1%})")
    print(f"  rivers    {len(world_map.rivers)} ({int(world_map.river_mask.sum())} cells)")
    print(f"  towns     {len(world_map.settlements)} of {config.settlements.target_count}")
    for town in world_map.settlements:
        print(f"    {town}")
    print(f"  roads     {len(world_map.road_cells)} cells")

    if not validation.passed:
        sys.exit(1)


if __name__ == "__main__":
    main()
