"""Map generation configuration models."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from ..exceptions import ConfigurationError

# Named TOML configs, packaged with seedmap.
CONFIGS_DIR = Path(__file__).parent.parent / "configs"


class OctaveConfig(BaseModel):
    """A single octave of coordinate-hash noise."""

    frequency: float = Field(description="Coordinate multiplier")
    weight: float = Field(default=1.0, description="Contribution weight")
    offset_x: float = Field(default=0.0, description="Offset added to scaled x")
    offset_y: float = Field(default=0.0, description="Offset added to scaled y")


class NoiseConfig(BaseModel):
    """Noise parameters for the elevation and moisture fields."""

    elevation_octaves: list[OctaveConfig] = Field(
        default_factory=lambda: [
            OctaveConfig(frequency=0.08, weight=0.7),
            OctaveConfig(frequency=0.17, weight=0.3, offset_x=4.0, offset_y=-4.0),
        ],
        description="Octaves summed into elevation",
    )
    moisture_octaves: list[OctaveConfig] = Field(
        default_factory=lambda: [
            OctaveConfig(frequency=0.13, weight=1.0, offset_x=100.0, offset_y=-50.0),
        ],
        description="Octaves summed into moisture",
    )
    hash_weight: float = Field(
        default=0.5, description="Share of the sin hash in a sample (rest is jitter)"
    )
    moisture_noise_weight: float = Field(
        default=0.8, description="Weight of noise in moisture (rest is 1 - elevation)"
    )


class IslandConfig(BaseModel):
    """Island shaping parameters."""

    falloff_strength: float = Field(
        default=0.65, description="Elevation multiplier is 1 - k * distance"
    )


class ClassificationConfig(BaseModel):
    """Biome threshold table. Checks run in this order, first match wins."""

    water_level: float = Field(default=0.32, description="Elevation below is water")
    sand_level: float = Field(default=0.36, description="Elevation below is sand")
    mountain_level: float = Field(default=0.80, description="Elevation above is mountain")
    snow_level: float = Field(default=0.90, description="Elevation above is snow")
    forest_moisture: float = Field(default=0.62, description="Moisture above is forest")


class HydrologyConfig(BaseModel):
    """River tracing parameters."""

    river_count: int = Field(default=4, description="Number of rivers to trace")
    source_elevation: float = Field(
        default=0.55, description="Minimum elevation for a river source"
    )
    source_attempts: int = Field(
        default=200, description="Random draws allowed when seeking a source"
    )
    max_steps_factor: int = Field(
        default=2, description="Step budget per river is factor * size"
    )


class SettlementConfig(BaseModel):
    """Settlement placement parameters."""

    target_count: int = Field(default=6, description="Settlements to attempt")
    min_spacing: int = Field(
        default=7, description="Manhattan distance that must be exceeded"
    )
    attempts: int = Field(default=70, description="Random draws per settlement")
    min_elevation: float = Field(default=0.42, description="Habitable band lower bound")
    max_elevation: float = Field(default=0.78, description="Habitable band upper bound")
    min_moisture: float = Field(default=0.0, description="Lowest acceptable moisture")
    max_moisture: float = Field(default=1.0, description="Highest acceptable moisture")


class MapConfig(BaseModel):
    """Complete map generation configuration."""

    seed: str = Field(default="", description="Seed text, may be empty")
    size: int = Field(default=64, description="Grid width and height in cells")
    min_size: int = Field(default=8, description="Smallest accepted size")
    max_size: int = Field(default=512, description="Largest accepted size")

    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    island: IslandConfig = Field(default_factory=IslandConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    hydrology: HydrologyConfig = Field(default_factory=HydrologyConfig)
    settlements: SettlementConfig = Field(default_factory=SettlementConfig)


def check_config(config: MapConfig) -> None:
    """Reject configurations that cannot produce a map.

    Raises:
        ConfigurationError: If size is out of bounds or tunables are inconsistent.
    """
    if config.min_size < 1 or config.min_size > config.max_size:
        raise ConfigurationError(
            f"Invalid size bounds [{config.min_size}, {config.max_size}]"
        )
    if not config.min_size <= config.size <= config.max_size:
        raise ConfigurationError(
            f"Size {config.size} outside [{config.min_size}, {config.max_size}]"
        )

    if not config.noise.elevation_octaves or not config.noise.moisture_octaves:
        raise ConfigurationError("At least one elevation and one moisture octave required")
    for octave in config.noise.elevation_octaves + config.noise.moisture_octaves:
        if octave.weight <= 0:
            raise ConfigurationError(f"Octave weight must be positive: {octave.weight}")
    if not 0.0 <= config.noise.hash_weight <= 1.0:
        raise ConfigurationError("hash_weight must lie in [0, 1]")
    if not 0.0 <= config.noise.moisture_noise_weight <= 1.0:
        raise ConfigurationError("moisture_noise_weight must lie in [0, 1]")

    c = config.classification
    if not c.water_level < c.sand_level < c.mountain_level <= c.snow_level:
        raise ConfigurationError(
            "Biome thresholds must satisfy water < sand < mountain <= snow"
        )

    h = config.hydrology
    if h.river_count < 0 or h.source_attempts < 1 or h.max_steps_factor < 1:
        raise ConfigurationError("Invalid hydrology parameters")

    s = config.settlements
    if s.target_count < 0 or s.min_spacing < 0 or s.attempts < 1:
        raise ConfigurationError("Invalid settlement parameters")
    if s.min_elevation >= s.max_elevation:
        raise ConfigurationError("Habitable elevation band is empty")
    if s.min_moisture > s.max_moisture:
        raise ConfigurationError("Habitable moisture band is empty")


def clamp_size(size: int, config: MapConfig | None = None) -> int:
    """Clamp untrusted size input into the accepted range."""
    config = config or MapConfig()
    return max(config.min_size, min(config.max_size, size))


def load_config(config_path: Path) -> MapConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed MapConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If TOML is malformed or fails validation.
    """
    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Malformed config {config_path}: {e}") from e
    try:
        return MapConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {config_path}: {e}") from e


def find_config(name: str, configs_dir: Path | None = None) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends with .toml
    2. {configs_dir}/{name}.toml (the packaged seedmap/configs by default)

    Args:
        name: Config name or path.
        configs_dir: Directory holding named configs.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = configs_dir or CONFIGS_DIR
    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    available = sorted(p.stem for p in configs_dir.glob("*.toml"))
    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. Available configs: {available}"
    )
