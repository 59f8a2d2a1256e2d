"""
Skinned mesh data.

Per-vertex attributes are numpy arrays indexed by vertex. Sub-meshes are flat
triangle index lists (three indices per triangle), one per material slot.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np


def copy_array(array: Optional[np.ndarray]) -> Optional[np.ndarray]:
    return None if array is None else np.array(array, copy=True)


@dataclass
class Bounds:
    center: np.ndarray
    extents: np.ndarray

    @classmethod
    def from_points(cls, points: np.ndarray) -> "Bounds":
        if len(points) == 0:
            return cls(center=np.zeros(3), extents=np.zeros(3))
        lo = points.min(axis=0)
        hi = points.max(axis=0)
        return cls(center=(lo + hi) / 2.0, extents=(hi - lo) / 2.0)

    @property
    def min(self) -> np.ndarray:
        return self.center - self.extents

    @property
    def max(self) -> np.ndarray:
        return self.center + self.extents


@dataclass
class BlendShapeFrame:
    weight: float
    delta_vertices: np.ndarray
    delta_normals: Optional[np.ndarray] = None
    delta_tangents: Optional[np.ndarray] = None

    def copy(self) -> "BlendShapeFrame":
        return BlendShapeFrame(
            weight=self.weight,
            delta_vertices=copy_array(self.delta_vertices),
            delta_normals=copy_array(self.delta_normals),
            delta_tangents=copy_array(self.delta_tangents),
        )


@dataclass
class BlendShape:
    name: str
    frames: List[BlendShapeFrame] = field(default_factory=list)

    def copy(self) -> "BlendShape":
        return BlendShape(name=self.name, frames=[f.copy() for f in self.frames])


@dataclass
class MeshData:
    """
    Attributes:
        name: Mesh name
        vertices: (N, 3) positions
        uv: (N, 2) primary UV channel
        normals: (N, 3) or None
        tangents: (N, 4) or None
        uv2: (N, 2) secondary UV channel or None
        bone_indices: (N, 4) skin bone indices or None
        bone_weights: (N, 4) skin weights or None
        bind_poses: (B, 4, 4) inverse bind matrices or None
        submeshes: Triangle index arrays, one per sub-mesh
        blend_shapes: Named blend shapes with their frames
        bounds: Cached bounding box
    """
    name: str
    vertices: np.ndarray
    uv: np.ndarray
    normals: Optional[np.ndarray] = None
    tangents: Optional[np.ndarray] = None
    uv2: Optional[np.ndarray] = None
    bone_indices: Optional[np.ndarray] = None
    bone_weights: Optional[np.ndarray] = None
    bind_poses: Optional[np.ndarray] = None
    submeshes: List[np.ndarray] = field(default_factory=list)
    blend_shapes: List[BlendShape] = field(default_factory=list)
    bounds: Optional[Bounds] = None

    def __post_init__(self):
        self.vertices = np.asarray(self.vertices, dtype=np.float32).reshape(-1, 3)
        self.uv = np.asarray(self.uv, dtype=np.float32).reshape(-1, 2)
        self.submeshes = [np.asarray(tris, dtype=np.int64).ravel() for tris in self.submeshes]
        if len(self.uv) != len(self.vertices):
            raise ValueError(f"UV count {len(self.uv)} does not match vertex count {len(self.vertices)}")

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def submesh_count(self) -> int:
        return len(self.submeshes)

    def get_triangles(self, submesh: int) -> np.ndarray:
        return self.submeshes[submesh]

    @property
    def triangle_index_count(self) -> int:
        return sum(len(tris) for tris in self.submeshes)

    def recalculate_bounds(self) -> Bounds:
        self.bounds = Bounds.from_points(self.vertices)
        return self.bounds
