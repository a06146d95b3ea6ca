"""
Content-aware image slimming.

Narrows an image by repeatedly removing its lowest-energy vertical seam
(Avidan & Shamir 2007), repairing the seam cost table incrementally
between removals instead of rebuilding it.
"""

__version__ = "0.1.0"

from .errors import (
    SlimmingError,
    InvalidImage,
    OutOfRange,
    UnknownChannel,
    AllocationFailure,
    InvalidSeam,
    InvalidTable,
    EmptyImage,
)
from .grid import Channel, PixelGrid
from .energy import pixel_energy, row_energy, energy_map
from .cost import CostTable, update_after_removal
from .seam import Seam, find_seam, remove_seam
from .carving import reduce_width

__all__ = [
    'SlimmingError',
    'InvalidImage',
    'OutOfRange',
    'UnknownChannel',
    'AllocationFailure',
    'InvalidSeam',
    'InvalidTable',
    'EmptyImage',
    'Channel',
    'PixelGrid',
    'pixel_energy',
    'row_energy',
    'energy_map',
    'CostTable',
    'update_after_removal',
    'Seam',
    'find_seam',
    'remove_seam',
    'reduce_width',
]
