"""
Cumulative cost table for vertical seams, and its incremental repair.

Cell (i, j) holds the minimum total energy of any connected path that
starts anywhere in row 0 and ends at (i, j), stepping to column j-1, j or
j+1 of the row above at each row.
"""

import logging

import torch

from .energy import row_energy
from .errors import AllocationFailure, InvalidImage, InvalidSeam, InvalidTable
from .grid import PixelGrid

logger = logging.getLogger(__name__)


def _relax_row(values: torch.Tensor, energy: torch.Tensor, i: int,
               start: int, stop: int, width: int):
    """
    Fill values[i, start:stop] from row i-1 and the given energies.

    Only valid predecessors are considered: column 0 has no upper-left
    neighbor and column width-1 has no upper-right neighbor.
    """
    prev = values[i - 1, :width]
    best = prev[start:stop].clone()

    # Upper-left neighbor exists for columns >= 1
    lo = max(start, 1)
    if lo < stop:
        best[lo - start:] = torch.minimum(best[lo - start:], prev[lo - 1:stop - 1])

    # Upper-right neighbor exists for columns <= width - 2
    hi = min(stop, width - 1)
    if start < hi:
        best[:hi - start] = torch.minimum(best[:hi - start], prev[start + 1:hi + 1])

    values[i, start:stop] = energy + best


class CostTable:
    """
    H x W table of cumulative minimum seam energy.

    The height never changes; the width follows the image as seams are
    removed.
    """

    def __init__(self, values: torch.Tensor):
        self.values = values

    @classmethod
    def build(cls, grid: PixelGrid):
        """
        Build the table for a grid with one top-down pass.

        Row 0 is the energy of row 0. Every later row adds each pixel's
        energy to the cheapest of its (up to three) upper neighbors.

        Args:
            grid: Image to build from

        Returns:
            New CostTable of the grid's size
        """
        if grid is None or grid.pixels is None or grid.is_empty():
            raise InvalidImage("Cannot build a cost table for a missing or empty grid")

        H, W = grid.height, grid.width
        try:
            values = torch.empty(H, W, dtype=grid.pixels.dtype, device=grid.pixels.device)
        except RuntimeError as exc:
            raise AllocationFailure(f"Cannot allocate {H}x{W} cost table") from exc
        values[0] = row_energy(grid, 0)
        for i in range(1, H):
            _relax_row(values, row_energy(grid, i), i, 0, W, W)

        logger.debug("Built %dx%d cost table", H, W)
        return cls(values)

    @property
    def height(self) -> int:
        return self.values.shape[0]

    @property
    def width(self) -> int:
        return self.values.shape[1]

    def row(self, i: int) -> torch.Tensor:
        return self.values[i]

    def copy(self):
        try:
            values = self.values.clone()
        except RuntimeError as exc:
            raise AllocationFailure(f"Cannot copy {self.height}x{self.width} cost table") from exc
        return CostTable(values)

    def shift_out(self, seam):
        """
        Drop the seam's cell from every row, mirroring the pixel removal.

        Values are moved, not recomputed; the remaining cells keep their
        (possibly stale) numbers until the cone is repaired.
        """
        if seam is None or len(seam) != self.height:
            raise InvalidSeam(f"Seam of length {None if seam is None else len(seam)} "
                              f"does not match table height {self.height}")
        seam.validate(self.width)
        keep = torch.ones(self.height, self.width, dtype=torch.bool,
                          device=self.values.device)
        keep[torch.arange(self.height), seam.columns.to(self.values.device)] = False
        self.values = self.values[keep].view(self.height, self.width - 1)

    def __repr__(self):
        return f"CostTable(width={self.width}, height={self.height})"


def _check_table(table: CostTable):
    if table is None or table.values is None or table.values.numel() == 0:
        raise InvalidTable("Cost table is missing or empty")


def update_after_removal(grid: PixelGrid, table: CostTable, seam) -> CostTable:
    """
    Repair the table after ``seam`` was removed from ``grid``.

    The table is shifted like the pixels, then only the cone below the
    seam's top column is recomputed. At row i the recomputed columns are
    [first - 1 - i, first + i] clipped to the table, where first is the
    seam's column in row 0. The seam moves at most one column per row, so
    every pixel whose energy changed lies in that band (the left neighbor
    of a removed pixel gains a new right neighbor, hence the extra column
    on the left), and every cell outside it only depends on unchanged
    cells. Once the band spans the whole row it is a full rebuild.

    Args:
        grid: Image with the seam already removed
        table: Table built for the image before removal; mutated in place
        seam: The removed seam

    Returns:
        The same table, now matching ``grid``
    """
    _check_table(table)
    if seam is None or len(seam) != table.height:
        raise InvalidSeam(f"Seam of length {None if seam is None else len(seam)} "
                          f"does not match table height {table.height}")
    seam.validate(table.width)
    if grid is None or grid.pixels is None:
        raise InvalidImage("Missing grid")
    if grid.height != table.height or grid.width != table.width - 1:
        raise InvalidImage(f"Grid {grid.height}x{grid.width} is not the table "
                           f"{table.height}x{table.width} minus one seam")

    table.shift_out(seam)
    H, W = table.height, table.width
    if W == 0:
        return table

    values = table.values
    first = seam.column(0)
    for i in range(H):
        start = max(0, first - 1 - i)
        stop = min(W, first + i + 1)
        if start >= stop:
            continue
        energy = row_energy(grid, i, start, stop)
        if i == 0:
            values[0, start:stop] = energy
        else:
            _relax_row(values, energy, i, start, stop, W)

    return table
