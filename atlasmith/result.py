"""
Atlas generation result.

An AtlasResult is built fresh for every generate() call and owns every buffer
it holds. A failed run carries only an error message (and the original
material count when it was known).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from atlasmith.materials.model import Material, MaterialEntry, TextureChannel
from atlasmith.mesh.model import MeshData
from atlasmith.texturing.pixels import Texture


@dataclass
class AtlasResult:
    """
    Attributes:
        main_texture: Main color atlas (always set on success)
        normal_texture: Normal map atlas or None
        emission_texture: Emission atlas or None
        occlusion_texture: Occlusion atlas or None
        material: The assembled atlas material
        remapped_mesh: Mesh with merged sub-meshes and atlas UVs
        entries: Material entries with their final atlas rects
        original_material_count: Number of material slots passed in
        atlas_size: Final atlas side length in pixels
        error_message: Empty on success
    """
    main_texture: Optional[Texture] = None
    normal_texture: Optional[Texture] = None
    emission_texture: Optional[Texture] = None
    occlusion_texture: Optional[Texture] = None
    material: Optional[Material] = None
    remapped_mesh: Optional[MeshData] = None
    entries: List[MaterialEntry] = field(default_factory=list)
    original_material_count: int = 0
    atlas_size: int = 0
    error_message: str = ""

    @property
    def success(self) -> bool:
        return not self.error_message

    @property
    def textures(self) -> Dict[TextureChannel, Optional[Texture]]:
        return {
            TextureChannel.MAIN: self.main_texture,
            TextureChannel.NORMAL: self.normal_texture,
            TextureChannel.EMISSION: self.emission_texture,
            TextureChannel.OCCLUSION: self.occlusion_texture,
        }

    def set_texture(self, channel: TextureChannel, texture: Optional[Texture]) -> None:
        setattr(self, f"{channel.value}_texture", texture)

    def discard_outputs(self) -> None:
        """Drop everything produced so far, keeping the error state."""
        for channel in TextureChannel:
            self.set_texture(channel, None)
        self.material = None
        self.remapped_mesh = None
        self.entries = []
        self.atlas_size = 0

    def summary(self) -> str:
        """Human-readable one-screen summary of the run."""
        if not self.success:
            return f"Failed: {self.error_message}"
        lines = [
            f"Materials: {self.original_material_count} -> 1",
            f"Atlas size: {self.atlas_size} x {self.atlas_size}",
        ]
        for channel, texture in self.textures.items():
            mark = "yes" if texture is not None else "no"
            lines.append(f"  {channel.value:<10} {mark}")
        return "\n".join(lines)

    def save(self, directory: str, base_name: Optional[str] = None) -> List[str]:
        """
        Write atlas PNGs, the mesh and the material into directory.

        Args:
            directory: Output folder (created if missing)
            base_name: File name prefix (defaults to the source mesh name)

        Returns:
            Paths of the written files

        Example:
            >>> result = generate(mesh, materials)
            >>> result.save("output/", "avatar")
        """
        from atlasmith.persistence import save_result
        return save_result(self, directory, base_name)
