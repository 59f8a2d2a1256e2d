"""
Scene document schema.

A scene document is a JSON description of one skinned mesh and its material
slots, used by the CLI and Atlasmith.generate_from_scene():

    {
      "mesh": {
        "name": "Body",
        "vertices": [[x, y, z], ...],
        "uv": [[u, v], ...],
        "submeshes": [[0, 1, 2, ...], [...]],
        "blend_shapes": [{"name": "smile", "frames": [{"weight": 100, "delta_vertices": [...]}]}]
      },
      "materials": [
        {"name": "Skin", "shader": "Standard",
         "colors": {"_Color": [1, 1, 1, 1]},
         "textures": {"_MainTex": {"path": "skin.png"}}},
        null
      ]
    }

Texture paths are relative to the scene file. Colors are RGBA floats in [0, 1].
"""

from __future__ import annotations
from typing import List, Optional, Dict
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

Vec2 = List[float]
Vec3 = List[float]
Vec4 = List[float]


def _check_width(rows, width: int, label: str):
    if rows is None:
        return rows
    for row in rows:
        if len(row) != width:
            raise ValueError(f"Every {label} entry must have {width} components")
    return rows


class SceneBlendShapeFrame(BaseModel):
    model_config = ConfigDict(extra='forbid')

    weight: float = Field(100.0, description="Frame weight.")
    delta_vertices: List[Vec3] = Field(..., description="Per-vertex position deltas.")
    delta_normals: Optional[List[Vec3]] = Field(None, description="Per-vertex normal deltas.")
    delta_tangents: Optional[List[Vec3]] = Field(None, description="Per-vertex tangent deltas.")


class SceneBlendShape(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str
    frames: List[SceneBlendShapeFrame] = Field(default_factory=list)


class SceneMesh(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field("Mesh", description="Mesh name.")
    vertices: List[Vec3] = Field(..., description="Vertex positions.")
    uv: List[Vec2] = Field(..., description="Primary UV channel, one per vertex.")
    normals: Optional[List[Vec3]] = None
    tangents: Optional[List[Vec4]] = None
    uv2: Optional[List[Vec2]] = None
    bone_indices: Optional[List[List[int]]] = None
    bone_weights: Optional[List[Vec4]] = None
    bind_poses: Optional[List[List[float]]] = Field(None, description="Row-major 4x4 matrices, 16 floats each.")
    submeshes: List[List[int]] = Field(..., description="Triangle index list per sub-mesh.")
    blend_shapes: List[SceneBlendShape] = Field(default_factory=list)

    @field_validator('vertices', 'normals')
    @classmethod
    def validate_vec3(cls, v):
        return _check_width(v, 3, "position/normal")

    @field_validator('uv', 'uv2')
    @classmethod
    def validate_vec2(cls, v):
        return _check_width(v, 2, "UV")

    @field_validator('tangents', 'bone_indices', 'bone_weights')
    @classmethod
    def validate_vec4(cls, v):
        return _check_width(v, 4, "tangent/skin")

    @field_validator('bind_poses')
    @classmethod
    def validate_bind_poses(cls, v):
        return _check_width(v, 16, "bind pose")

    @model_validator(mode='after')
    def validate_counts(self):
        count = len(self.vertices)
        for label in ('uv', 'normals', 'tangents', 'uv2', 'bone_indices', 'bone_weights'):
            values = getattr(self, label)
            if values is not None and len(values) != count:
                raise ValueError(f"'{label}' has {len(values)} entries, expected {count}")
        for shape in self.blend_shapes:
            for i, frame in enumerate(shape.frames):
                for label in ('delta_vertices', 'delta_normals', 'delta_tangents'):
                    values = getattr(frame, label)
                    if values is not None and len(values) != count:
                        raise ValueError(
                            f"Blend shape '{shape.name}' frame {i} '{label}' has {len(values)} entries, expected {count}"
                        )
        for s, tris in enumerate(self.submeshes):
            if len(tris) % 3 != 0:
                raise ValueError(f"Sub-mesh {s} index count {len(tris)} is not a multiple of 3")
            if any(idx < 0 or idx >= count for idx in tris):
                raise ValueError(f"Sub-mesh {s} has vertex indices outside 0..{count - 1}")
        return self


class SceneTexture(BaseModel):
    model_config = ConfigDict(extra='forbid')

    path: str = Field(..., description="Image file path relative to the scene file.")
    readable: bool = Field(True, description="False simulates a GPU-only texture.")


class SceneMaterial(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str
    shader: str = Field("Standard", description="Shader name; 'lilToon' shaders use lilToon property names.")
    colors: Dict[str, Vec4] = Field(default_factory=dict)
    floats: Dict[str, float] = Field(default_factory=dict)
    textures: Dict[str, Optional[SceneTexture]] = Field(default_factory=dict)

    @field_validator('colors')
    @classmethod
    def validate_colors(cls, v):
        _check_width(v.values(), 4, "color")
        return v


class SceneDefinition(BaseModel):
    model_config = ConfigDict(extra='forbid')

    mesh: SceneMesh
    materials: List[Optional[SceneMaterial]] = Field(..., description="Material slots in sub-mesh order.")
