"""Textures with a box-filtered mipmap pyramid packed into one buffer.

Level 0 occupies the top-left ``width x height`` corner of a
``dimension x (dimension * 3/2)`` buffer, where ``dimension`` is the next
power of two of the larger side. Every further level sits in the right-hand
third, stacked downwards, each half the size of the one before::

    +-----------------+--------+
    |                 |   1    |
    |        0        +----+---+
    |                 | 2  |
    |                 +--+-+
    |                 |3 |
    +-----------------+--+
"""
import logging
import math

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def next_pow2(n):
    return 1 << (int(n) - 1).bit_length()


class Texture:
    def __init__(self, pixels):
        pixels = np.asarray(pixels, dtype=float)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected a height x width x 3 color array, got shape {pixels.shape}")
        height, width = pixels.shape[:2]
        if width <= 0 or height <= 0:
            raise ValueError(f"Texture dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.dimension = next_pow2(max(width, height))
        self.fullwidth = self.dimension + self.dimension // 2
        self.levels = self.dimension.bit_length()

        self._pixels = np.zeros((self.dimension, self.fullwidth, 3), dtype=float)
        self._pixels[:height, :width] = pixels
        self._windows = self._level_windows()
        self._create_mipmap()
        self._pixels.flags.writeable = False

        logger.debug("Built %dx%d texture with %d mip levels", width, height, self.levels)

    # ==================================================
    # Mipmap
    # ==================================================
    def _level_windows(self):
        # (xstart, xend, ystart, yend) for each level
        windows = [(0, self.width, 0, self.height)]
        for level in range(1, self.levels):
            px0, px1, py0, py1 = windows[-1]
            w = max(1, (px1 - px0) // 2)
            h = max(1, (py1 - py0) // 2)
            ystart = self.dimension - self.dimension // 2 ** (level - 1)
            windows.append((self.dimension, self.dimension + w, ystart, ystart + h))
        return windows

    def _create_mipmap(self):
        for level in range(1, self.levels):
            px0, px1, py0, py1 = self._windows[level - 1]
            x0, x1, y0, y1 = self._windows[level]
            w, h = x1 - x0, y1 - y0

            previous = self._pixels[py0:py1, px0:px1]
            # Odd or single-texel sides reuse their last row/column
            pad_y = max(0, 2 * h - previous.shape[0])
            pad_x = max(0, 2 * w - previous.shape[1])
            if pad_x or pad_y:
                previous = np.pad(previous, ((0, pad_y), (0, pad_x), (0, 0)), mode="edge")
            previous = previous[: 2 * h, : 2 * w]

            self._pixels[y0:y1, x0:x1] = previous.reshape(h, 2, w, 2, 3).mean(axis=(1, 3))

    @property
    def pixels(self):
        return self._pixels

    def level(self, level):
        x0, x1, y0, y1 = self._windows[level]
        return self._pixels[y0:y1, x0:x1]

    # ==================================================
    # Sampling
    # ==================================================
    def _texel_coordinates(self, uv, tiling):
        u = uv[0] * tiling[0]
        v = uv[1] * tiling[1]
        return (u - math.floor(u)) * self.width, (v - math.floor(v)) * self.height

    def color(self, uv, tiling=(1.0, 1.0)):
        """Nearest texel of level 0."""
        px, py = self._texel_coordinates(uv, tiling)
        return self._pixels[int(py) % self.height, int(px) % self.width]

    def bilinear_filtered_color(self, uv, tiling=(1.0, 1.0)):
        px, py = self._texel_coordinates(uv, tiling)
        x0 = int(px) % self.width
        x1 = (x0 + 1) % self.width
        y0 = int(py) % self.height
        y1 = (y0 + 1) % self.height

        tx = px - math.floor(px)
        ty = py - math.floor(py)
        p = self._pixels
        top = p[y0, x0] * (1.0 - tx) + p[y0, x1] * tx
        bottom = p[y1, x0] * (1.0 - tx) + p[y1, x1] * tx
        return top * (1.0 - ty) + bottom * ty

    # ==================================================
    # Construction
    # ==================================================
    @classmethod
    def from_array(cls, pixels):
        return cls(pixels)

    @classmethod
    def from_image(cls, path):
        with Image.open(path) as image:
            pixels = np.asarray(image.convert("RGB"), dtype=float) / 255.0
        logger.info("Loaded texture %s (%dx%d)", path, pixels.shape[1], pixels.shape[0])
        return cls(pixels)

    @classmethod
    def checkerboard(cls, rows, cols, size, color_a, color_b):
        if rows <= 0 or cols <= 0 or size <= 0:
            raise ValueError(f"Checkerboard needs positive rows, cols and size, got {rows}, {cols}, {size}")
        parity = (np.arange(rows)[:, None] + np.arange(cols)[None, :]) % 2
        cells = np.where(parity[..., None] == 0, np.asarray(color_a, dtype=float), np.asarray(color_b, dtype=float))
        pixels = np.repeat(np.repeat(cells, size, axis=0), size, axis=1)
        return cls(pixels)

    def save(self, path):
        """Write the packed buffer, mip levels included, as an image file."""
        data = (np.clip(self._pixels, 0.0, 1.0) * 255).astype(np.uint8)
        Image.fromarray(data).save(path)

    def __repr__(self):
        return f"Texture({self.width}x{self.height}, levels={self.levels})"
