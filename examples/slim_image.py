"""
Narrow an image file by k seams.

    python slim_image.py input.ppm output.ppm 50
    python slim_image.py photo.jpg photo_slim.png 120 --show-seam seam.png

Any format Pillow can read works, including binary PNM (.ppm).
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import argparse
import time

import numpy as np
import torch
from PIL import Image

from slimming import (PixelGrid, CostTable, SlimmingError, find_seam,
                      reduce_width)


def load_image(path: str) -> PixelGrid:
    """Load image into a PixelGrid with 0-255 channel values."""
    img = Image.open(path).convert('RGB')
    img_array = np.array(img, dtype=np.float64)
    return PixelGrid.from_tensor(torch.from_numpy(img_array), channels_last=True)


def save_image(grid: PixelGrid, path: str):
    """Save PixelGrid as an 8-bit RGB image."""
    img_array = grid.to_tensor(channels_last=True).cpu().numpy()
    img_array = img_array.round().clip(0, 255).astype(np.uint8)
    Image.fromarray(img_array).save(path)
    print(f"Saved: {path}")


def visualize_seam(grid: PixelGrid, path: str):
    """Write a copy of the image with its cheapest seam painted red."""
    seam = find_seam(CostTable.build(grid))
    img_vis = grid.copy()
    for row, col in seam:
        img_vis.pixels[:, row, col] = torch.tensor([255.0, 0.0, 0.0],
                                                   dtype=img_vis.pixels.dtype)
    save_image(img_vis, path)


def main():
    parser = argparse.ArgumentParser(
        description="Content-aware width reduction by seam carving"
    )
    parser.add_argument('input', type=str, help='Input image')
    parser.add_argument('output', type=str, help='Output image')
    parser.add_argument('k', type=int, help='Number of seams to remove')
    parser.add_argument(
        '--show-seam', type=str, metavar='PATH',
        help='Also save the input with its first seam highlighted'
    )
    args = parser.parse_args()

    try:
        image = load_image(args.input)
    except (OSError, ValueError) as exc:
        print(f"Error: cannot read {args.input}: {exc}")
        sys.exit(1)
    print(f"Image size: {image.width} x {image.height}")

    try:
        if args.show_seam:
            visualize_seam(image, args.show_seam)

        print(f"Removing {args.k} seams...")
        start = time.time()
        carved = reduce_width(image, args.k)
        elapsed = time.time() - start
    except (SlimmingError, ValueError) as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(f"Done in {elapsed:.2f}s, new size: {carved.width} x {carved.height}")
    save_image(carved, args.output)


if __name__ == '__main__':
    main()
