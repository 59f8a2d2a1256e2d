"""
Material handling for atlas generation.

Collects per-material texture/color entries and assembles the final atlas
material.
"""
from .model import Material, MaterialEntry, Rect, TextureChannel
from .properties import ShaderFamily, SHADER_FAMILIES, texture_property_candidates
from .collector import collect_material_entries
from .assembler import create_atlas_material

__all__ = [
    'Material',
    'MaterialEntry',
    'Rect',
    'TextureChannel',
    'ShaderFamily',
    'SHADER_FAMILIES',
    'texture_property_candidates',
    'collect_material_entries',
    'create_atlas_material',
]
