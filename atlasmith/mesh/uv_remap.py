"""
UV remapping for atlased meshes.

Builds a copy of the source mesh whose sub-meshes are merged into one and whose
primary UVs point into the atlas tile of the material driving each vertex.

UVs are wrapped into a single repeat before relocation, so tiled UV layouts
collapse into one tile. A repeating pattern can't survive atlasing; this is an
accepted lossy step.

A vertex shared by several sub-meshes takes the tile of the first (lowest
index) sub-mesh that references it. Vertices are never split, which keeps the
vertex count unchanged but can put wrong UVs on seams between tiles.
"""

import logging
from typing import Dict, Sequence

import numpy as np

from atlasmith.materials.model import MaterialEntry, Rect
from atlasmith.mesh.model import MeshData, copy_array

logger = logging.getLogger(__name__)


def wrap_uv(values: np.ndarray) -> np.ndarray:
    """
    Fold UV values into [0, 1] (fractional part, clamped).

    Whole numbers fold to 0, so a UV of exactly 1.0 lands on the tile's near
    edge rather than its far edge.
    """
    values = np.asarray(values, dtype=np.float64)
    return np.clip(values - np.floor(values), 0.0, 1.0)


def remap_uv(uv: np.ndarray, rect: Rect) -> np.ndarray:
    """Relocate (N, 2) UVs into rect after wrapping."""
    wrapped = wrap_uv(uv)
    out = np.empty_like(wrapped)
    out[:, 0] = rect.x + wrapped[:, 0] * rect.width
    out[:, 1] = rect.y + wrapped[:, 1] * rect.height
    return out


def _submesh_owners(entries: Sequence[MaterialEntry]) -> Dict[int, MaterialEntry]:
    owners = {}
    for entry in entries:
        for sub in entry.submesh_indices:
            # First entry claiming a sub-mesh keeps it
            owners.setdefault(sub, entry)
    return owners


def remap_mesh_uvs(src: MeshData, entries: Sequence[MaterialEntry]) -> MeshData:
    """
    Create the atlased mesh.

    Args:
        src: Source mesh (not modified)
        entries: Entries with atlas_rect assigned

    Returns:
        New mesh named <name>_Atlas with a single sub-mesh
    """
    original_uv = src.uv
    new_uv = np.array(original_uv, dtype=np.float32, copy=True)
    assigned = np.zeros(src.vertex_count, dtype=bool)
    owners = _submesh_owners(entries)

    all_triangles = []
    for sub_idx in range(src.submesh_count):
        tris = src.get_triangles(sub_idx)
        if len(tris) == 0:
            continue
        all_triangles.append(tris)

        entry = owners.get(sub_idx)
        if entry is None:
            logger.warning(f"Sub-mesh {sub_idx} has no material entry; its UVs are left unchanged")
            continue

        in_range = tris[(tris >= 0) & (tris < src.vertex_count)]
        verts = np.unique(in_range)
        verts = verts[~assigned[verts]]
        if len(verts) == 0:
            continue

        new_uv[verts] = remap_uv(original_uv[verts], entry.atlas_rect)
        assigned[verts] = True

    merged = np.concatenate(all_triangles) if all_triangles else np.zeros(0, dtype=np.int64)

    mesh = MeshData(
        name=f"{src.name}_Atlas",
        vertices=copy_array(src.vertices),
        uv=new_uv,
        normals=copy_array(src.normals),
        tangents=copy_array(src.tangents),
        uv2=copy_array(src.uv2),
        bone_indices=copy_array(src.bone_indices),
        bone_weights=copy_array(src.bone_weights),
        bind_poses=copy_array(src.bind_poses),
        submeshes=[merged],
        blend_shapes=[shape.copy() for shape in src.blend_shapes],
    )
    mesh.recalculate_bounds()

    logger.info(
        f"Remapped {int(assigned.sum())}/{src.vertex_count} vertices, "
        f"merged {src.submesh_count} sub-meshes ({len(merged) // 3} triangles)"
    )
    return mesh
