"""
Pixel storage for the slimming engine.

A PixelGrid owns one channel-first RGB tensor of shape (3, H, W).
Values live in the 8-bit range but are kept as floats so the energy
arithmetic never has to convert.
"""

from enum import IntEnum
from typing import Union

import torch

from .errors import AllocationFailure, InvalidImage, OutOfRange, UnknownChannel


class Channel(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2


def _check_dtype(dtype):
    if not dtype.is_floating_point:
        raise InvalidImage(f"Pixel storage must be floating point, got {dtype}")


class PixelGrid:
    """
    Mutable RGB image of width W and height H.

    The engine shrinks ``width`` in place while carving; ``pixels`` is
    always exactly (3, height, width).
    """

    def __init__(self, pixels: torch.Tensor):
        """
        Wrap an existing tensor. Prefer ``create`` or ``from_tensor``.

        Args:
            pixels: Tensor of shape (3, H, W)
        """
        if pixels is None or pixels.dim() != 3 or pixels.shape[0] != 3:
            raise InvalidImage(f"Expected a (3, H, W) tensor, got "
                               f"{None if pixels is None else tuple(pixels.shape)}")
        if not pixels.is_floating_point():
            raise InvalidImage(f"Pixel storage must be floating point, got {pixels.dtype}")
        self.pixels = pixels

    @classmethod
    def create(cls, width: int, height: int, dtype=torch.float64, device='cpu'):
        """Allocate a black grid of the given size."""
        if width < 0 or height < 0:
            raise ValueError(f"Negative grid size: {width}x{height}")
        _check_dtype(dtype)
        try:
            pixels = torch.zeros(3, height, width, dtype=dtype, device=device)
        except RuntimeError as exc:
            raise AllocationFailure(f"Cannot allocate {width}x{height} grid") from exc
        return cls(pixels)

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor, channels_last: bool = False,
                    dtype=torch.float64):
        """
        Build a grid from image data.

        Args:
            tensor: RGB tensor (3, H, W), or (H, W, 3) with channels_last,
                    or grayscale (H, W) which is replicated to all channels
            channels_last: Input is laid out (H, W, 3), e.g. from PIL via numpy
            dtype: Storage dtype

        Returns:
            New PixelGrid owning a copy of the data
        """
        if tensor is None:
            raise InvalidImage("No image data")
        _check_dtype(dtype)
        if tensor.dim() == 2:
            tensor = tensor.unsqueeze(0).expand(3, -1, -1)
        elif channels_last:
            if tensor.dim() != 3 or tensor.shape[2] != 3:
                raise InvalidImage(f"Expected (H, W, 3), got {tuple(tensor.shape)}")
            tensor = tensor.permute(2, 0, 1)
        return cls(tensor.to(dtype).clone().contiguous())

    def to_tensor(self, channels_last: bool = False) -> torch.Tensor:
        """Return a copy of the pixel data, (3, H, W) or (H, W, 3)."""
        if channels_last:
            return self.pixels.permute(1, 2, 0).clone()
        return self.pixels.clone()

    @property
    def height(self) -> int:
        return self.pixels.shape[1]

    @property
    def width(self) -> int:
        return self.pixels.shape[2]

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def copy(self):
        try:
            pixels = self.pixels.clone()
        except RuntimeError as exc:
            raise AllocationFailure(f"Cannot copy {self.width}x{self.height} grid") from exc
        return PixelGrid(pixels)

    def _check_index(self, row: int, col: int):
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise OutOfRange(f"Pixel ({row}, {col}) outside "
                             f"{self.height}x{self.width} grid")

    @staticmethod
    def _channel(channel: Union[Channel, int]) -> Channel:
        try:
            return Channel(channel)
        except ValueError as exc:
            raise UnknownChannel(f"Unknown channel: {channel!r}") from exc

    def get(self, row: int, col: int, channel: Union[Channel, int]) -> float:
        self._check_index(row, col)
        return self.pixels[int(self._channel(channel)), row, col].item()

    def set(self, row: int, col: int, channel: Union[Channel, int], value: float):
        self._check_index(row, col)
        self.pixels[int(self._channel(channel)), row, col] = value

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (self.pixels.shape == other.pixels.shape
                and torch.equal(self.pixels, other.pixels))

    def __repr__(self):
        return f"PixelGrid(width={self.width}, height={self.height})"
