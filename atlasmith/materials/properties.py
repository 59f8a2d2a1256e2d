"""
Shader property naming tables.

Two naming conventions are in use: the standard one (_MainTex, _BumpMap, ...)
and lilToon's (_MainColorTex, _MainNormalTex, ...). Both are described as data
so another shader family only needs a new ShaderFamily entry.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from atlasmith.materials.model import TextureChannel


@dataclass(frozen=True)
class ShaderFamily:
    """Property names one shader family uses for each logical channel."""
    name: str
    shader_token: Optional[str]  # substring identifying the shader, None matches nothing
    textures: Dict[TextureChannel, str] = field(default_factory=dict)

    def matches(self, shader_name: Optional[str]) -> bool:
        return bool(self.shader_token and shader_name and self.shader_token in shader_name)


STANDARD_FAMILY = ShaderFamily(
    name="standard",
    shader_token=None,
    textures={
        TextureChannel.MAIN: "_MainTex",
        TextureChannel.NORMAL: "_BumpMap",
        TextureChannel.EMISSION: "_EmissionMap",
        TextureChannel.OCCLUSION: "_OcclusionMap",
    },
)

LILTOON_FAMILY = ShaderFamily(
    name="lilToon",
    shader_token="lilToon",
    textures={
        TextureChannel.MAIN: "_MainColorTex",
        TextureChannel.NORMAL: "_MainNormalTex",
        TextureChannel.EMISSION: "_EmissionMapTex",
    },
)

# Probe order matters: the standard names win when both are bound.
SHADER_FAMILIES: Tuple[ShaderFamily, ...] = (STANDARD_FAMILY, LILTOON_FAMILY)

MAIN_COLOR_PROPERTY = "_Color"
EMISSION_COLOR_PROPERTY = "_EmissionColor"


def texture_property_candidates(channel: TextureChannel) -> List[str]:
    """Candidate property names for a channel, in probe order."""
    return [fam.textures[channel] for fam in SHADER_FAMILIES if channel in fam.textures]


def families_for_shader(shader_name: Optional[str]) -> List[ShaderFamily]:
    """Alternate families whose naming the given shader also understands."""
    return [fam for fam in SHADER_FAMILIES if fam.matches(shader_name)]
