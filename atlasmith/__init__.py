"""
atlasmith - Merge a skinned mesh's materials into a single texture atlas

Packs the textures of every material on a mesh into one atlas, remaps the
mesh's UVs into it and builds one replacement material, so the mesh renders
with a single draw call.
"""

from atlasmith.client import Atlasmith
from atlasmith.generator.engine import generate
from atlasmith.result import AtlasResult
from atlasmith.schema.settings import AtlasSettings, FilterMode

__version__ = "0.1.0"
__all__ = ["Atlasmith", "AtlasResult", "AtlasSettings", "FilterMode", "generate"]
