"""Tests for end-to-end map generation."""

import dataclasses

import numpy as np
import pytest

from seedmap.biomes import Biome
from seedmap.exceptions import ConfigurationError
from seedmap.terrain.config import HydrologyConfig, MapConfig, SettlementConfig
from seedmap.terrain.generator import generate_map
from seedmap.terrain.world_map import WorldMap


class TestScenarios:
    """End-to-end scenarios."""

    def test_matrix_32(self, matrix_map: WorldMap, small_config: MapConfig) -> None:
        """Seed "matrix" at 32 has water, land and consistent roads."""
        counts = matrix_map.biome_counts()
        assert counts[Biome.WATER] >= 1
        assert sum(counts.values()) - counts[Biome.WATER] >= 1
        assert len(matrix_map.settlements) <= small_config.settlements.target_count
        assert (len(matrix_map.road_cells) == 0) == (len(matrix_map.settlements) < 2)

    def test_empty_seed(self) -> None:
        """Empty seed at 16 produces full-size layers and four rivers."""
        world_map = generate_map(MapConfig(seed="", size=16))
        assert world_map.size == 16
        assert world_map.elevation.shape == (16, 16)
        assert world_map.moisture.shape == (16, 16)
        assert world_map.biomes.shape == (16, 16)
        assert world_map.river_mask.shape == (16, 16)
        assert len(world_map.rivers) == 4

    @pytest.mark.parametrize("size", [7, 513])
    def test_invalid_size_rejected(self, size: int) -> None:
        """Out-of-range sizes fail before generation."""
        with pytest.raises(ConfigurationError):
            generate_map(MapConfig(seed="x", size=size))


class TestDeterminism:
    """Identical (seed, size) gives identical maps."""

    @pytest.mark.parametrize("seed", ["", "matrix", "abc", "ünïcødé"])
    def test_identical_runs(self, seed: str) -> None:
        """Same seed and size give identical maps."""
        a = generate_map(MapConfig(seed=seed, size=40))
        b = generate_map(MapConfig(seed=seed, size=40))
        np.testing.assert_array_equal(a.elevation, b.elevation)
        np.testing.assert_array_equal(a.moisture, b.moisture)
        np.testing.assert_array_equal(a.biomes, b.biomes)
        np.testing.assert_array_equal(a.river_mask, b.river_mask)
        assert a.settlements == b.settlements
        assert a.road_cells == b.road_cells

    def test_near_duplicate_seeds_differ(self) -> None:
        """Seeds one character apart give different maps."""
        a = generate_map(MapConfig(seed="abc", size=64))
        b = generate_map(MapConfig(seed="abd", size=64))
        assert not np.array_equal(a.elevation, b.elevation)
        assert a.settlements != b.settlements

    def test_settlement_tuning_leaves_terrain_alone(self) -> None:
        """Settlement settings do not disturb terrain or rivers."""
        a = generate_map(MapConfig(seed="matrix", size=48))
        b = generate_map(
            MapConfig(
                seed="matrix",
                size=48,
                settlements=SettlementConfig(target_count=2, min_spacing=3),
            )
        )
        np.testing.assert_array_equal(a.elevation, b.elevation)
        np.testing.assert_array_equal(a.river_mask, b.river_mask)

    def test_river_count_leaves_fields_alone(self) -> None:
        """River count does not disturb fields or biomes."""
        a = generate_map(MapConfig(seed="matrix", size=48))
        b = generate_map(
            MapConfig(seed="matrix", size=48, hydrology=HydrologyConfig(river_count=0))
        )
        np.testing.assert_array_equal(a.elevation, b.elevation)
        np.testing.assert_array_equal(a.biomes, b.biomes)
        assert not b.river_mask.any()


class TestInvariants:
    """Range, spacing and overlay invariants over several seeds."""

    @pytest.fixture(params=["", "matrix", "seed-1", "seed-2", "x" * 40])
    def world_map(self, request: pytest.FixtureRequest) -> WorldMap:
        return generate_map(MapConfig(seed=request.param, size=64))

    def test_field_ranges(self, world_map: WorldMap) -> None:
        """Elevation and moisture stay in [0, 1]."""
        for field in (world_map.elevation, world_map.moisture):
            assert field.min() >= 0.0
            assert field.max() <= 1.0

    def test_biome_labels(self, world_map: WorldMap) -> None:
        """Only known biome codes appear."""
        valid = {biome.code for biome in Biome}
        assert set(np.unique(world_map.biomes).tolist()).issubset(valid)

    def test_settlement_bounds_and_spacing(self, world_map: WorldMap) -> None:
        """Settlements are in bounds and spaced apart."""
        spacing = MapConfig().settlements.min_spacing
        towns = world_map.settlements
        assert all(t.in_bounds(64) for t in towns)
        for i, a in enumerate(towns):
            for b in towns[i + 1:]:
                assert a.manhattan(b) >= spacing

    def test_settlements_habitable(self, world_map: WorldMap) -> None:
        """Settlements sit in the habitable band off rivers."""
        for town in world_map.settlements:
            assert 0.42 < world_map.elevation[town.y, town.x] < 0.78
            assert not world_map.is_river(town.x, town.y)

    def test_rivers_are_overlays(self, world_map: WorldMap) -> None:
        """River cells keep their biome label."""
        for river in world_map.rivers:
            for cell in river.path:
                biome = world_map.biome_at(cell.x, cell.y)
                assert isinstance(biome, Biome)

    def test_settlements_on_roads(self, world_map: WorldMap) -> None:
        """Every settlement lies on a road cell."""
        if len(world_map.settlements) >= 2:
            assert set(world_map.settlements) <= world_map.road_cells


class TestWorldMapImmutability:
    """WorldMap cannot be changed after generation."""

    def test_arrays_read_only(self, matrix_map: WorldMap) -> None:
        """Field arrays reject writes."""
        with pytest.raises(ValueError):
            matrix_map.elevation[0, 0] = 1.0
        with pytest.raises(ValueError):
            matrix_map.river_mask[0, 0] = True

    def test_fields_frozen(self, matrix_map: WorldMap) -> None:
        """Attributes cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            matrix_map.size = 10

    def test_road_mask_matches_cells(self, matrix_map: WorldMap) -> None:
        """Road mask has one cell per road position."""
        mask = matrix_map.road_mask()
        assert int(mask.sum()) == len(matrix_map.road_cells)


class TestRivers:
    """Rivers under the default hydrology settings."""

    @pytest.mark.parametrize("seed", ["", "matrix", "abc", "x"])
    @pytest.mark.parametrize("size", [32, 64])
    def test_default_rivers_flow(self, seed: str, size: int) -> None:
        """Default settings yield a river that starts on high land and flows."""
        config = MapConfig(seed=seed, size=size)
        world_map = generate_map(config)
        water_level = config.classification.water_level

        flowing = [
            river
            for river in world_map.rivers
            if world_map.elevation[river.source.y, river.source.x]
            > config.hydrology.source_elevation
            > water_level
            and len(river) > 1
        ]
        assert flowing
