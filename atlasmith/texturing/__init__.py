"""
Texture utilities for atlas generation.

Includes pixel buffers, texture access providers, atlas layout and per-channel
composition.
"""
from .pixels import PixelBuffer, Texture, Color, WHITE, BLACK, FLAT_NORMAL
from .provider import TextureProvider, CPUTextureProvider

__all__ = [
    'PixelBuffer',
    'Texture',
    'Color',
    'WHITE',
    'BLACK',
    'FLAT_NORMAL',
    'TextureProvider',
    'CPUTextureProvider',
]
