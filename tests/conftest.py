"""Shared test fixtures for the slimming test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from slimming.grid import PixelGrid


@pytest.fixture
def random_grid():
    """Reproducible 12x9 grid with integer channel values."""
    torch.manual_seed(42)
    return make_random_grid(9, 12)


def make_random_grid(H, W):
    """Integer-valued RGB noise in [0, 255]."""
    return PixelGrid(torch.randint(0, 256, (3, H, W)).double())


def make_constant_grid(H, W, color=(120, 30, 200)):
    """Every pixel the same color."""
    pixels = torch.tensor(color, dtype=torch.float64).view(3, 1, 1).expand(3, H, W)
    return PixelGrid(pixels.clone())


def make_gradient_grid(H, W, step=10):
    """Horizontal gradient: every channel equals column index * step."""
    row = torch.arange(W, dtype=torch.float64) * step
    return PixelGrid(row.view(1, 1, W).expand(3, H, W).clone())


def make_red_grid(values):
    """Grid whose red channel holds the given rows; green and blue are 0."""
    red = torch.tensor(values, dtype=torch.float64)
    pixels = torch.zeros(3, *red.shape, dtype=torch.float64)
    pixels[0] = red
    return PixelGrid(pixels)
