"""Custom exceptions for atlas generation"""


class AtlasError(Exception):
    """Base exception for atlas generation errors"""
    pass


class InvalidInputError(AtlasError):
    """Missing mesh, missing materials, or nothing worth atlasing"""
    pass


class LayoutError(AtlasError):
    """Atlas layout could not fit the requested tiles"""
    pass


class TextureReadError(AtlasError):
    """Texture pixels are not available on the CPU"""
    pass
