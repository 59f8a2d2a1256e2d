"""
Texture access providers.

Making a texture CPU-readable is host specific (usually a GPU round trip), so
the collector asks an injected provider for the pixels instead of doing it
itself. Hosts plug in their own provider; tests plug in fakes.
"""

import logging
from abc import ABC, abstractmethod

from atlasmith.exceptions import TextureReadError
from atlasmith.texturing.pixels import PixelBuffer, Texture

logger = logging.getLogger(__name__)


class TextureProvider(ABC):
    """Materializes readable pixel buffers for textures."""

    @abstractmethod
    def read_pixels(self, texture: Texture) -> PixelBuffer:
        """
        Return a new PixelBuffer with the texture's pixels.

        Raises:
            TextureReadError: If the pixels can't be obtained
        """

    def make_readable(self, texture: Texture) -> Texture:
        """Return a readable copy of texture, leaving the original untouched."""
        pixels = self.read_pixels(texture)
        if (pixels.width, pixels.height) != (texture.width, texture.height):
            logger.warning(
                f"Readback of '{texture.name}' returned {pixels.width}x{pixels.height}, "
                f"expected {texture.width}x{texture.height}"
            )
        return Texture.from_pixels(
            texture.name,
            pixels,
            filter_mode=texture.filter_mode,
            mipmaps=texture.mipmaps,
        )


class CPUTextureProvider(TextureProvider):
    """
    Provider that can only copy pixels the texture already carries.

    Textures that only live on a GPU raise TextureReadError.
    """

    def read_pixels(self, texture: Texture) -> PixelBuffer:
        if texture.pixels is None:
            raise TextureReadError(f"No CPU copy available for texture '{texture.name}'")
        return texture.pixels.copy()
