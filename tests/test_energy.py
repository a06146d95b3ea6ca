"""Tests for energy functions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from slimming.energy import pixel_energy, row_energy, energy_map
from slimming.errors import InvalidImage, OutOfRange
from slimming.grid import PixelGrid

from conftest import make_constant_grid, make_random_grid, make_red_grid


# Red channel used by the hand-computed cases below:
#    0  10  40
#    5  20  30
#   50   0  10
RED = [[0, 10, 40],
       [5, 20, 30],
       [50, 0, 10]]


class TestPixelEnergy:
    @pytest.mark.parametrize("row,col,expected", [
        (0, 0, 15.0),   # top-left corner:     |0-5| + |0-10|
        (0, 1, 30.0),   # top edge:            |10-20| + |0-40|/2
        (0, 2, 40.0),   # top-right corner:    |40-30| + |10-40|
        (1, 0, 40.0),   # left edge:           |0-50|/2 + |5-20|
        (1, 1, 17.5),   # interior:            |10-0|/2 + |5-30|/2
        (1, 2, 25.0),   # right edge:          |40-10|/2 + |20-30|
        (2, 0, 95.0),   # bottom-left corner:  |5-50| + |50-0|
        (2, 1, 40.0),   # bottom edge:         |20-0| + |50-10|/2
        (2, 2, 30.0),   # bottom-right corner: |30-10| + |0-10|
    ])
    def test_nine_positions(self, row, col, expected):
        """Each corner, edge and the interior uses its own difference."""
        grid = make_red_grid(RED)
        assert pixel_energy(grid, row, col) == pytest.approx(expected)

    def test_corner_is_not_clamped(self):
        """Clamping (0,0) would halve the one-sided differences to 7.5."""
        grid = make_red_grid(RED)
        assert pixel_energy(grid, 0, 0) != pytest.approx(7.5)

    def test_channels_are_summed(self):
        """Same values in all three channels triple the energy."""
        red = make_red_grid(RED)
        pixels = red.pixels[0].unsqueeze(0).expand(3, -1, -1).clone()
        grid = PixelGrid(pixels)
        assert pixel_energy(grid, 1, 1) == pytest.approx(3 * 17.5)

    def test_constant_image_is_zero_everywhere(self):
        """A flat-colored image has zero energy, edges included."""
        grid = make_constant_grid(6, 7)
        for i in range(6):
            for j in range(7):
                assert pixel_energy(grid, i, j) == 0.0

    def test_energy_nonnegative(self):
        torch.manual_seed(42)
        grid = make_random_grid(8, 8)
        for i in range(8):
            for j in range(8):
                assert pixel_energy(grid, i, j) >= 0.0

    def test_single_row_has_no_vertical_term(self):
        grid = make_red_grid([[0, 10, 40]])
        assert pixel_energy(grid, 0, 1) == pytest.approx(20.0)

    def test_single_column_has_no_horizontal_term(self):
        grid = make_red_grid([[0], [10], [40]])
        assert pixel_energy(grid, 1, 0) == pytest.approx(20.0)

    def test_single_pixel_is_zero(self):
        grid = make_red_grid([[77]])
        assert pixel_energy(grid, 0, 0) == 0.0

    @pytest.mark.parametrize("row,col", [(3, 0), (0, 3), (-1, 1)])
    def test_out_of_range(self, row, col):
        grid = make_red_grid(RED)
        with pytest.raises(OutOfRange):
            pixel_energy(grid, row, col)

    def test_missing_or_empty_grid(self):
        with pytest.raises(InvalidImage):
            pixel_energy(None, 0, 0)
        with pytest.raises(InvalidImage):
            pixel_energy(PixelGrid.create(0, 3), 0, 0)


class TestRowEnergy:
    def test_matches_pixel_energy(self):
        """The vectorized form agrees with the per-pixel form everywhere."""
        torch.manual_seed(3)
        grid = make_random_grid(7, 9)
        for i in range(7):
            energies = row_energy(grid, i)
            for j in range(9):
                assert energies[j].item() == pytest.approx(pixel_energy(grid, i, j))

    @pytest.mark.parametrize("start,stop", [(0, 1), (0, 4), (3, 6), (5, 9), (8, 9), (0, 9)])
    def test_band_matches_full_row(self, start, stop):
        torch.manual_seed(5)
        grid = make_random_grid(4, 9)
        for i in range(4):
            full = row_energy(grid, i)
            assert torch.equal(row_energy(grid, i, start, stop), full[start:stop])

    def test_empty_band(self):
        grid = make_red_grid(RED)
        assert row_energy(grid, 1, 2, 2).numel() == 0

    def test_band_out_of_range(self):
        grid = make_red_grid(RED)
        with pytest.raises(OutOfRange):
            row_energy(grid, 0, 2, 4)
        with pytest.raises(OutOfRange):
            row_energy(grid, 3)

    def test_two_column_grid(self):
        """Both columns of a width-2 row are edges."""
        grid = make_red_grid([[0, 8], [2, 2]])
        energies = row_energy(grid, 0)
        assert energies.tolist() == [10.0, 14.0]


class TestEnergyMap:
    def test_output_shape_matches_input(self):
        grid = make_random_grid(5, 11)
        assert energy_map(grid).shape == (5, 11)

    def test_hand_computed_map(self):
        grid = make_red_grid(RED)
        expected = torch.tensor([[15.0, 30.0, 40.0],
                                 [40.0, 17.5, 25.0],
                                 [95.0, 40.0, 30.0]], dtype=torch.float64)
        assert torch.equal(energy_map(grid), expected)

    def test_vertical_edge_has_energy(self):
        """An image with a single vertical edge has energy along that edge."""
        pixels = torch.zeros(3, 10, 10, dtype=torch.float64)
        pixels[:, :, 5:] = 255.0
        energy = energy_map(PixelGrid(pixels))
        assert energy[:, 4:6].min() > 0
        assert energy[:, :3].max() == 0
        assert energy[:, 7:].max() == 0


class TestIntegerInput:
    def test_uint8_data_matches_per_pixel_energy(self):
        """uint8 image data must not wrap around when differenced."""
        data = torch.tensor([[0, 10, 40]] * 3, dtype=torch.uint8)
        grid = PixelGrid.from_tensor(data)
        expected = [pixel_energy(grid, 0, j) for j in range(3)]
        assert expected == [30.0, 60.0, 90.0]
        assert row_energy(grid, 0).tolist() == expected
