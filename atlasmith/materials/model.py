"""Material descriptors and per-entry atlas bookkeeping."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from atlasmith.texturing.pixels import BLACK, WHITE, Color, Texture


class TextureChannel(str, Enum):
    MAIN = "main"
    NORMAL = "normal"
    EMISSION = "emission"
    OCCLUSION = "occlusion"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; x/y is the corner nearest the UV origin."""
    x: float
    y: float
    width: float
    height: float

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    def overlaps(self, other: "Rect") -> bool:
        return not (
            self.x_max <= other.x or other.x_max <= self.x or
            self.y_max <= other.y or other.y_max <= self.y
        )


@dataclass
class Material:
    """
    A shader plus its named properties.

    Texture properties may be present with a None value, which reads the same
    as an unbound slot.
    """
    name: str
    shader: str = "Standard"
    colors: Dict[str, Color] = field(default_factory=dict)
    textures: Dict[str, Optional[Texture]] = field(default_factory=dict)
    floats: Dict[str, float] = field(default_factory=dict)

    def has_property(self, name: str) -> bool:
        return name in self.colors or name in self.textures or name in self.floats

    def get_color(self, name: str) -> Color:
        return self.colors[name]

    def set_color(self, name: str, color: Color) -> None:
        self.colors[name] = tuple(color)

    def get_texture(self, name: str) -> Optional[Texture]:
        return self.textures.get(name)

    def set_texture(self, name: str, texture: Optional[Texture]) -> None:
        self.textures[name] = texture

    def copy(self, name: Optional[str] = None) -> "Material":
        """Duplicate the material; texture references are shared, not cloned."""
        return Material(
            name=name or self.name,
            shader=self.shader,
            colors=dict(self.colors),
            textures=dict(self.textures),
            floats=dict(self.floats),
        )


@dataclass
class MaterialEntry:
    """One surviving material slot and the tile it owns in the atlas."""
    material: Material
    original_index: int
    submesh_indices: List[int]
    textures: Dict[TextureChannel, Optional[Texture]] = field(default_factory=dict)
    main_color: Color = WHITE
    emission_color: Color = BLACK
    atlas_rect: Optional[Rect] = None

    def texture_for(self, channel: TextureChannel) -> Optional[Texture]:
        return self.textures.get(channel)

    @property
    def main_texture(self) -> Optional[Texture]:
        return self.textures.get(TextureChannel.MAIN)
