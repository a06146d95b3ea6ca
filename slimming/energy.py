"""
Energy functions for seam carving.

The energy of a pixel estimates how visually important it is. Low-energy
seams are preferred for removal.

We use the dual-gradient energy: for every color channel, the absolute
vertical difference plus the absolute horizontal difference, summed over
red, green and blue. Interior pixels use centered differences halved;
pixels on an edge use the one-sided difference with their only neighbor
on that axis. Clamping the index instead would produce a halved one-sided
difference, which is a different number, so each position is handled
explicitly.
"""

import torch

from .errors import InvalidImage, OutOfRange
from .grid import Channel, PixelGrid


def _check_grid(grid: PixelGrid):
    if grid is None or grid.pixels is None or grid.is_empty():
        raise InvalidImage("Energy requested on a missing or empty grid")


def _vertical_term(plane: torch.Tensor, i: int, j: int) -> float:
    H = plane.shape[0]
    if H == 1:
        return 0.0
    if i == 0:
        # top row: only the pixel below exists
        return abs(plane[0, j].item() - plane[1, j].item())
    if i == H - 1:
        # bottom row: only the pixel above exists
        return abs(plane[H - 2, j].item() - plane[H - 1, j].item())
    return abs(plane[i - 1, j].item() - plane[i + 1, j].item()) / 2


def _horizontal_term(plane: torch.Tensor, i: int, j: int) -> float:
    W = plane.shape[1]
    if W == 1:
        return 0.0
    if j == 0:
        # left column: only the pixel to the right exists
        return abs(plane[i, 0].item() - plane[i, 1].item())
    if j == W - 1:
        # right column: only the pixel to the left exists
        return abs(plane[i, W - 2].item() - plane[i, W - 1].item())
    return abs(plane[i, j - 1].item() - plane[i, j + 1].item()) / 2


def pixel_energy(grid: PixelGrid, row: int, col: int) -> float:
    """
    Energy of a single pixel.

    Corners combine both one-sided substitutions, edges one of them, and
    interior pixels use centered differences on both axes. A grid with a
    single row (or column) has no neighbor on that axis, which contributes 0.

    Args:
        grid: Image to read from
        row: Row index in [0, height)
        col: Column index in [0, width)

    Returns:
        Non-negative energy, summed over the three channels
    """
    _check_grid(grid)
    if not (0 <= row < grid.height and 0 <= col < grid.width):
        raise OutOfRange(f"Pixel ({row}, {col}) outside "
                         f"{grid.height}x{grid.width} grid")

    total = 0.0
    for channel in Channel:
        plane = grid.pixels[int(channel)]
        total += _vertical_term(plane, row, col) + _horizontal_term(plane, row, col)
    return total


def row_energy(grid: PixelGrid, row: int, start: int = 0, stop: int = None) -> torch.Tensor:
    """
    Energy of columns [start, stop) of one row, computed for all three
    channels at once.

    Evaluates the same per-position formula as ``pixel_energy``.

    Args:
        grid: Image to read from
        row: Row index
        start: First column (inclusive)
        stop: Last column (exclusive), defaults to the grid width

    Returns:
        Energy tensor of shape (stop - start,)
    """
    _check_grid(grid)
    pixels = grid.pixels
    _, H, W = pixels.shape
    if stop is None:
        stop = W
    if not 0 <= row < H:
        raise OutOfRange(f"Row {row} outside grid of height {H}")
    if not 0 <= start <= stop <= W:
        raise OutOfRange(f"Columns [{start}, {stop}) outside grid of width {W}")

    n = stop - start
    if n == 0:
        return torch.zeros(0, dtype=pixels.dtype, device=pixels.device)

    # Vertical differences
    if H == 1:
        vertical = torch.zeros(3, n, dtype=pixels.dtype, device=pixels.device)
    elif row == 0:
        vertical = torch.abs(pixels[:, 0, start:stop] - pixels[:, 1, start:stop])
    elif row == H - 1:
        vertical = torch.abs(pixels[:, H - 2, start:stop] - pixels[:, H - 1, start:stop])
    else:
        vertical = torch.abs(pixels[:, row - 1, start:stop] - pixels[:, row + 1, start:stop]) / 2

    # Horizontal differences
    line = pixels[:, row, :]
    horizontal = torch.zeros(3, n, dtype=pixels.dtype, device=pixels.device)
    if W > 1:
        lo = max(start, 1)
        hi = min(stop, W - 1)
        if lo < hi:
            horizontal[:, lo - start:hi - start] = \
                torch.abs(line[:, lo - 1:hi - 1] - line[:, lo + 1:hi + 1]) / 2
        if start == 0:
            horizontal[:, 0] = torch.abs(line[:, 0] - line[:, 1])
        if stop == W:
            horizontal[:, n - 1] = torch.abs(line[:, W - 2] - line[:, W - 1])

    return (vertical + horizontal).sum(dim=0)


def energy_map(grid: PixelGrid) -> torch.Tensor:
    """
    Energy of every pixel.

    Returns:
        Energy map (H, W)
    """
    _check_grid(grid)
    return torch.stack([row_energy(grid, i) for i in range(grid.height)])
