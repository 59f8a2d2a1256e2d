"""Mesh data and UV remapping."""
from .model import MeshData, BlendShape, BlendShapeFrame, Bounds
from .uv_remap import remap_mesh_uvs, wrap_uv

__all__ = [
    "MeshData",
    "BlendShape",
    "BlendShapeFrame",
    "Bounds",
    "remap_mesh_uvs",
    "wrap_uv",
]
