"""
Vertical seam extraction and removal.

A seam is one column index per row, top to bottom, with neighboring rows
at most one column apart. It is found by backtracking the cost table from
the cheapest cell of the last row.
"""

from typing import Iterator, Tuple

import torch

from .cost import CostTable
from .errors import AllocationFailure, EmptyImage, InvalidImage, InvalidSeam, InvalidTable
from .grid import PixelGrid


class Seam:
    """
    Connected top-to-bottom path of one pixel per row.

    Args:
        columns: Long tensor (H,) with the column of the path in each row
        cost: Total energy along the path
    """

    def __init__(self, columns: torch.Tensor, cost: float):
        self.columns = columns
        self.cost = cost

    def __len__(self):
        return self.columns.shape[0]

    def column(self, row: int) -> int:
        return int(self.columns[row].item())

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        """Yield (row, column) pairs in increasing row order."""
        return iter(enumerate(self.columns.tolist()))

    def validate(self, width: int):
        """Raise InvalidSeam unless every column is inside [0, width) and connected."""
        if len(self) == 0:
            raise InvalidSeam("Empty seam")
        if self.columns.min().item() < 0 or self.columns.max().item() >= width:
            raise InvalidSeam(f"Seam leaves the grid of width {width}: "
                              f"{self.columns.tolist()}")
        if len(self) > 1 and torch.abs(self.columns[1:] - self.columns[:-1]).max().item() > 1:
            raise InvalidSeam(f"Seam is not connected: {self.columns.tolist()}")

    def __repr__(self):
        return f"Seam(columns={self.columns.tolist()}, cost={self.cost})"


def find_seam(table: CostTable) -> Seam:
    """
    Extract the cheapest vertical seam from a cost table.

    The seam ends at the minimum of the last row (lowest column on ties)
    and is traced upward by picking, in each row, the cheapest of the up
    to three cells above the current one. Ties prefer straight up, then
    up-left, then up-right, so the seam is reproducible for a given table.

    Args:
        table: Cost table of the current image

    Returns:
        Seam with one column per row and the minimum total cost
    """
    if table is None or table.values is None or table.values.numel() == 0:
        raise InvalidTable("Cannot find a seam in a missing or empty table")

    values = table.values
    H, W = values.shape
    try:
        columns = torch.empty(H, dtype=torch.long)
    except RuntimeError as exc:
        raise AllocationFailure(f"Cannot allocate seam of height {H}") from exc

    c = torch.argmin(values[H - 1]).item()
    cost = values[H - 1, c].item()
    columns[H - 1] = c

    for r in range(H - 2, -1, -1):
        row = values[r]
        mid = row[c].item()
        left = row[c - 1].item() if c > 0 else float('inf')
        right = row[c + 1].item() if c < W - 1 else float('inf')

        if left < mid and left <= right:
            c = c - 1
        elif mid <= right:
            pass
        else:
            c = c + 1
        columns[r] = c

    return Seam(columns, cost)


def remove_seam(grid: PixelGrid, seam: Seam):
    """
    Remove a seam from a grid in place.

    Each row loses the pixel at its seam column; the pixels to its right
    move one column left. Width shrinks by one, height is unchanged.

    Args:
        grid: Image to carve (mutated)
        seam: Seam found on this grid
    """
    if grid is None or grid.pixels is None:
        raise InvalidImage("Cannot remove a seam from a missing grid")
    if grid.width == 0:
        raise EmptyImage("Cannot remove a seam from a zero-width grid")
    if seam is None or len(seam) != grid.height:
        raise InvalidSeam(f"Seam of length {None if seam is None else len(seam)} "
                          f"does not match grid height {grid.height}")
    seam.validate(grid.width)

    C, H, W = grid.pixels.shape
    keep = torch.ones(H, W, dtype=torch.bool, device=grid.pixels.device)
    keep[torch.arange(H), seam.columns.to(grid.pixels.device)] = False
    grid.pixels = grid.pixels[:, keep].view(C, H, W - 1)
