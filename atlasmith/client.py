"""
Core atlasmith client API

Provides the Atlasmith class, which holds settings and a texture provider and
runs atlas generation for meshes or scene files.
"""

from typing import Optional, Sequence

from atlasmith.generator.engine import generate
from atlasmith.materials.model import Material
from atlasmith.mesh.model import MeshData
from atlasmith.result import AtlasResult
from atlasmith.schema.settings import AtlasSettings
from atlasmith.texturing.provider import CPUTextureProvider, TextureProvider


class Atlasmith:
    """
    Main client for merging a mesh's materials into one atlas material.

    Examples:
        Basic usage:
        >>> am = Atlasmith(max_atlas_size=2048, padding=8)
        >>> result = am.generate(mesh, materials)
        >>> result.save("output/")

        From a scene file:
        >>> am.generate_from_scene("avatar.json").save("output/")
    """

    def __init__(
        self,
        settings: Optional[AtlasSettings] = None,
        provider: Optional[TextureProvider] = None,
        **overrides
    ):
        """
        Initialize the client.

        Args:
            settings: Base settings (defaults to AtlasSettings())
            provider: Texture readback capability for non-readable textures
            **overrides: Individual AtlasSettings fields to override
        """
        settings = settings or AtlasSettings()
        if overrides:
            settings = AtlasSettings.model_validate({**settings.model_dump(), **overrides})
        self.settings = settings
        self.provider = provider or CPUTextureProvider()

    def generate(self, mesh: MeshData, materials: Sequence[Optional[Material]]) -> AtlasResult:
        """Generate an atlas for mesh and its material slots."""
        return generate(mesh, materials, self.settings, self.provider)

    def generate_from_scene(self, path: str) -> AtlasResult:
        """
        Load a scene JSON document and generate its atlas.

        Raises:
            FileNotFoundError: If the scene or a referenced texture is missing
            ValueError: If the scene document is invalid
        """
        from atlasmith.persistence import load_scene
        mesh, materials = load_scene(path)
        return self.generate(mesh, materials)
