"""
atlasmith Quick Start Example

This example builds a tiny two-material mesh in memory and merges its
materials into one atlas.
"""

from atlasmith import Atlasmith
from atlasmith.materials import Material
from atlasmith.mesh import MeshData
from atlasmith.texturing import Texture

# Two quads, one per material slot
mesh = MeshData(
    name="Crate",
    vertices=[[0, 0, 0], [1, 0, 0], [0, 1, 0], [1, 1, 0],
              [2, 0, 0], [3, 0, 0], [2, 1, 0], [3, 1, 0]],
    uv=[[0, 0], [1, 0], [0, 1], [1, 1]] * 2,
    submeshes=[[0, 1, 2, 1, 3, 2], [4, 5, 6, 5, 7, 6]],
)

wood = Material(name="Wood", textures={"_MainTex": Texture.solid("wood", 256, 256, (0.55, 0.35, 0.2, 1.0))})
metal = Material(name="Metal", textures={"_MainTex": Texture.solid("metal", 128, 128, (0.7, 0.7, 0.75, 1.0))})

am = Atlasmith(max_atlas_size=1024, padding=4)

print("Building atlas...")
result = am.generate(mesh, [wood, metal])
if not result.success:
    raise SystemExit(result.error_message)

print(result.summary())
result.save("output/")
print("✅ Saved to output/")
