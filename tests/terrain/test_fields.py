"""Tests for elevation and moisture field generation."""

import numpy as np

from seedmap.terrain.config import IslandConfig, NoiseConfig
from seedmap.terrain.fields import draw_cell_jitter, generate_fields
from seedmap.terrain.rng import SeedStream


def _fields(seed: int, size: int):
    return generate_fields(SeedStream(seed), size, NoiseConfig(), IslandConfig())


class TestDrawCellJitter:
    """Tests for precomputed per-cell draws."""

    def test_shape(self) -> None:
        """Jitter has one row of draws per cell."""
        jitter = draw_cell_jitter(SeedStream(1), 6, 3)
        assert jitter.shape == (6, 6, 3)

    def test_row_major_order(self) -> None:
        """Cell (x=1, y=0) holds draws 3..5, cell (x=0, y=1) draws 12..14."""
        jitter = draw_cell_jitter(SeedStream(5), 4, 3)
        flat = SeedStream(5).draws(4 * 4 * 3)
        np.testing.assert_array_equal(jitter[0, 1], flat[3:6])
        np.testing.assert_array_equal(jitter[1, 0], flat[12:15])


class TestGenerateFields:
    """Tests for generate_fields."""

    def test_output_shape(self) -> None:
        """Fields are size x size."""
        elevation, moisture = _fields(1, 24)
        assert elevation.shape == (24, 24)
        assert moisture.shape == (24, 24)

    def test_output_dtype(self) -> None:
        """Fields are float64."""
        elevation, moisture = _fields(1, 16)
        assert elevation.dtype == np.float64
        assert moisture.dtype == np.float64

    def test_values_in_unit_interval(self) -> None:
        """Field values lie in [0, 1]."""
        elevation, moisture = _fields(3, 64)
        for field in (elevation, moisture):
            assert field.min() >= 0.0
            assert field.max() <= 1.0

    def test_deterministic(self) -> None:
        """Same seed gives identical fields."""
        e1, m1 = _fields(42, 32)
        e2, m2 = _fields(42, 32)
        np.testing.assert_array_equal(e1, e2)
        np.testing.assert_array_equal(m1, m2)

    def test_different_seed_different_output(self) -> None:
        """Different seeds give different elevation."""
        e1, _ = _fields(42, 32)
        e2, _ = _fields(43, 32)
        assert not np.array_equal(e1, e2)

    def test_corners_are_zero_elevation(self) -> None:
        """Corners lie outside the island radius."""
        elevation, _ = _fields(9, 32)
        assert elevation[0, 0] == 0.0
        assert elevation[31, 31] == 0.0

    def test_interior_higher_than_border(self) -> None:
        """The island centre stands above the border."""
        elevation, _ = _fields(9, 64)
        assert elevation[24:40, 24:40].mean() > elevation[0, :].mean()

    def test_lowlands_wetter(self) -> None:
        """Zero-elevation corners get the full (1 - elevation) moisture share."""
        elevation, moisture = _fields(11, 32)
        corners = elevation == 0.0
        assert np.all(moisture[corners] >= 0.2)

    def test_consumes_three_draws_per_cell(self) -> None:
        """Fields use exactly three draws per cell."""
        stream = SeedStream(77)
        generate_fields(stream, 10, NoiseConfig(), IslandConfig())

        reference = SeedStream(77)
        reference.draws(10 * 10 * 3)
        assert stream.next() == reference.next()
