"""
atlasmith Advanced Example

This example loads a scene file, plugs in a custom texture provider for
GPU-only textures, inspects the layout and saves every channel atlas.
"""

from atlasmith import Atlasmith, FilterMode
from atlasmith.texturing import CPUTextureProvider, PixelBuffer


class GreyFallbackProvider(CPUTextureProvider):
    """Reads CPU pixels when present, otherwise returns mid grey."""

    def read_pixels(self, texture):
        if texture.pixels is not None:
            return super().read_pixels(texture)
        return PixelBuffer.filled(texture.width, texture.height, (0.5, 0.5, 0.5, 1.0))


am = Atlasmith(
    provider=GreyFallbackProvider(),
    max_atlas_size=2048,
    padding=8,
    include_occlusion_map=True,
    filter_mode=FilterMode.trilinear,
)

print("Generating atlas from avatar.json...")
result = am.generate_from_scene("avatar.json")
if not result.success:
    raise SystemExit(result.error_message)

print("\n--- Layout ---")
for entry in result.entries:
    r = entry.atlas_rect
    print(f"[{entry.original_index}] {entry.material.name}: ({r.x:.3f}, {r.y:.3f}) {r.width:.3f}x{r.height:.3f}")

print("\n--- Summary ---")
print(result.summary())

print("\n--- Saving ---")
for path in result.save("output/", "avatar"):
    print(f"✅ {path}")
