"""
High-level width reduction: build the cost table once, then remove seams
one at a time while repairing the table incrementally.
"""

import logging
import numbers

from .cost import CostTable, update_after_removal
from .errors import EmptyImage, InvalidImage
from .grid import PixelGrid
from .seam import find_seam, remove_seam

logger = logging.getLogger(__name__)


def reduce_width(image: PixelGrid, k: int) -> PixelGrid:
    """
    Content-aware width reduction.

    Removes the k cheapest vertical seams, one after another. The input
    grid is not modified; a carved copy is returned. On failure nothing
    is returned and the working copy is dropped.

    Args:
        image: Image to narrow
        k: Number of seams to remove, 0 <= k < image.width

    Returns:
        New grid of width image.width - k and the same height
    """
    if image is None or image.pixels is None or image.is_empty():
        raise InvalidImage("Cannot reduce a missing or empty image")
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise ValueError(f"Seam count must be an integer, got {k!r}")
    if k < 0:
        raise ValueError(f"Seam count must be non-negative, got {k}")
    if k >= image.width:
        raise EmptyImage(f"Removing {k} seams from a {image.width}-wide image "
                         f"would leave no pixels")

    k = int(k)
    carved = image.copy()
    if k == 0:
        return carved

    table = CostTable.build(carved)
    for i in range(k):
        seam = find_seam(table)
        remove_seam(carved, seam)
        table = update_after_removal(carved, table, seam)
        logger.debug("Removed seam %d/%d (cost %.3f), width now %d",
                     i + 1, k, seam.cost, carved.width)

    return carved
