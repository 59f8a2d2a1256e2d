"""
Pixel buffers and texture resources.

A PixelBuffer owns a contiguous float32 RGBA array of shape (height, width, 4)
with values in [0, 1]. Row 0 is v = 0, i.e. the bottom of the image in UV
space, so pixel (x, y) in a buffer matches UV (x / width, y / height).
PIL images store the top row first; from_image/to_image flip rows.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from atlasmith.exceptions import TextureReadError
from atlasmith.schema.settings import FilterMode

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)
BLACK: Color = (0.0, 0.0, 0.0, 1.0)
FLAT_NORMAL: Color = (0.5, 0.5, 1.0, 1.0)


class PixelBuffer:
    """RGBA pixel storage with explicit width and height."""

    def __init__(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.float32)
        if data.ndim != 3 or data.shape[2] != 4:
            raise ValueError(f"Pixel data must have shape (height, width, 4), got {data.shape}")
        self.data = np.ascontiguousarray(data)

    @classmethod
    def filled(cls, width: int, height: int, color: Color) -> "PixelBuffer":
        """Allocate a buffer with every pixel set to color."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid buffer size {width}x{height}")
        data = np.empty((height, width, 4), dtype=np.float32)
        data[:, :] = color
        return cls(data)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        data = np.asarray(image, dtype=np.float32) / 255.0
        return cls(np.flipud(data))

    def to_image(self) -> Image.Image:
        data = np.clip(np.flipud(self.data), 0.0, 1.0)
        return Image.fromarray(np.round(data * 255.0).astype(np.uint8))

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.data.copy())

    def get_pixel(self, x: int, y: int) -> Color:
        return tuple(float(c) for c in self.data[y, x])

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self.data[y, x] = color

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        """Fill a rectangle, clipped to the buffer."""
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, self.width), min(y + h, self.height)
        if x1 > x0 and y1 > y0:
            self.data[y0:y1, x0:x1] = color


@dataclass
class Texture:
    """
    A named RGBA texture resource.

    Attributes:
        name: Resource name
        width: Width in pixels
        height: Height in pixels
        pixels: CPU copy of the pixels (None when only the GPU has them)
        readable: Whether pixels may be read directly
        filter_mode: Sampling hint for consumers
        mipmaps: Whether consumers should build a mip chain
    """
    name: str
    width: int
    height: int
    pixels: Optional[PixelBuffer] = None
    readable: bool = True
    filter_mode: FilterMode = FilterMode.bilinear
    mipmaps: bool = False

    @classmethod
    def from_pixels(cls, name: str, pixels: PixelBuffer, **kwargs) -> "Texture":
        return cls(name=name, width=pixels.width, height=pixels.height, pixels=pixels, **kwargs)

    @classmethod
    def from_image(cls, name: str, image: Image.Image, readable: bool = True) -> "Texture":
        return cls.from_pixels(name, PixelBuffer.from_image(image), readable=readable)

    @classmethod
    def solid(cls, name: str, width: int, height: int, color: Color) -> "Texture":
        return cls.from_pixels(name, PixelBuffer.filled(width, height, color))

    def get_pixels(self) -> PixelBuffer:
        """Return the CPU pixels, raising TextureReadError if they can't be read."""
        if not self.readable:
            raise TextureReadError(f"Texture '{self.name}' is not readable")
        if self.pixels is None:
            raise TextureReadError(f"Texture '{self.name}' has no pixel data")
        return self.pixels

    def to_image(self) -> Image.Image:
        return self.get_pixels().to_image()
