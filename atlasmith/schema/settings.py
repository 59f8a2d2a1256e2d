"""
Atlas generation settings.

One immutable settings object describes a single atlas run. Every field has a
default and can be toggled independently:

- max_atlas_size: upper bound for the square atlas (power of two)
- padding: edge-bleed pixels around every tile
- include_*_map: gate the optional channel atlases
- preserve_texel_density: layout policy switch (currently the uniform grid)
- filter_mode: sampling hint attached to the output textures
"""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, field_validator


class FilterMode(str, Enum):
    point = "point"
    bilinear = "bilinear"
    trilinear = "trilinear"


class AtlasSettings(BaseModel):
    """
    Configuration for one atlas run.

    Settings are frozen: build a new instance (or use model_copy(update=...))
    to change a value.
    """
    model_config = ConfigDict(frozen=True, extra='forbid')

    max_atlas_size: int = Field(4096, description="Upper bound for the atlas side length in pixels (power of two).")
    padding: int = Field(4, ge=0, description="Pixels of edge bleed around each tile.")
    include_normal_map: bool = Field(True, description="Compose a normal map atlas when any material has one.")
    include_emission_map: bool = Field(True, description="Compose an emission atlas when any material has one.")
    include_occlusion_map: bool = Field(False, description="Compose an occlusion atlas when any material has one.")
    preserve_texel_density: bool = Field(True, description="""
        Weight tile size by source texture resolution.

        Accepted for compatibility. The layout is still a uniform grid, so
        every tile gets the same size regardless of this flag.
    """)
    filter_mode: FilterMode = Field(FilterMode.bilinear, description="Filter mode attached to the output atlas textures.")

    @field_validator('max_atlas_size')
    @classmethod
    def validate_max_atlas_size(cls, v):
        if v <= 0 or (v & (v - 1)) != 0:
            raise ValueError("max_atlas_size must be a positive power of two")
        return v
