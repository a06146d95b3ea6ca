"""
Exceptions raised by the slimming engine.

Every component validates its inputs on entry and raises one of these.
They also derive from the matching builtin so callers can catch
``ValueError`` / ``IndexError`` without importing this module.
"""


class SlimmingError(Exception):
    """Base class for all seam-carving failures."""


class InvalidImage(SlimmingError, ValueError):
    """Grid is missing, empty, or does not match the structure it is used with."""


class OutOfRange(SlimmingError, IndexError):
    """Row or column index outside the grid."""


class UnknownChannel(SlimmingError, ValueError):
    """Channel selector is not one of red, green, blue."""


class AllocationFailure(SlimmingError, MemoryError):
    """Storage for a grid or table could not be allocated."""


class InvalidSeam(SlimmingError, ValueError):
    """Seam is missing or does not fit the grid."""


class InvalidTable(SlimmingError, ValueError):
    """Cost table is missing or does not fit the grid."""


class EmptyImage(SlimmingError, ValueError):
    """Operation would act on (or produce) a zero-width image."""
