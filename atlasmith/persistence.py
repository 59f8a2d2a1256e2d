"""
Scene loading and result saving.

This is the only module that touches the filesystem. The core pipeline works
on in-memory MeshData / Material objects; this module converts scene JSON
documents into those objects and writes an AtlasResult back out as PNG and
JSON files.
"""

import json
import logging
import os
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from atlasmith.materials.model import Material, TextureChannel
from atlasmith.mesh.model import BlendShape, BlendShapeFrame, MeshData
from atlasmith.schema.scene import SceneDefinition, SceneMaterial, SceneMesh
from atlasmith.texturing.pixels import Texture

logger = logging.getLogger(__name__)

TEXTURE_FILE_SUFFIXES = {
    TextureChannel.MAIN: "Main",
    TextureChannel.NORMAL: "Normal",
    TextureChannel.EMISSION: "Emission",
    TextureChannel.OCCLUSION: "Occlusion",
}


def _array(values, dtype=np.float32, shape=None) -> Optional[np.ndarray]:
    if values is None:
        return None
    array = np.asarray(values, dtype=dtype)
    return array.reshape(shape) if shape is not None else array


def load_scene(path: str) -> Tuple[MeshData, List[Optional[Material]]]:
    """
    Load a scene JSON document.

    Args:
        path: Path to the scene file

    Returns:
        Tuple of (mesh, material slots)

    Raises:
        FileNotFoundError: If the scene or a texture file doesn't exist
        ValueError: If the document fails validation
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Scene file not found: {path}")

    with open(path, 'r') as f:
        raw = json.load(f)

    # pydantic's ValidationError subclasses ValueError
    scene = SceneDefinition.model_validate(raw)
    base_dir = os.path.dirname(os.path.abspath(path))

    mesh = _mesh_from_scene(scene.mesh)
    materials = [
        _material_from_scene(m, base_dir) if m is not None else None
        for m in scene.materials
    ]

    logger.info(f"Loaded scene {path}: {mesh.vertex_count} vertices, {len(materials)} material slots")
    return mesh, materials


def _mesh_from_scene(doc: SceneMesh) -> MeshData:
    blend_shapes = [
        BlendShape(
            name=shape.name,
            frames=[
                BlendShapeFrame(
                    weight=frame.weight,
                    delta_vertices=_array(frame.delta_vertices),
                    delta_normals=_array(frame.delta_normals),
                    delta_tangents=_array(frame.delta_tangents),
                )
                for frame in shape.frames
            ],
        )
        for shape in doc.blend_shapes
    ]
    return MeshData(
        name=doc.name,
        vertices=_array(doc.vertices),
        uv=_array(doc.uv),
        normals=_array(doc.normals),
        tangents=_array(doc.tangents),
        uv2=_array(doc.uv2),
        bone_indices=_array(doc.bone_indices, dtype=np.int32),
        bone_weights=_array(doc.bone_weights),
        bind_poses=_array(doc.bind_poses, shape=(-1, 4, 4)),
        submeshes=[_array(tris, dtype=np.int64) for tris in doc.submeshes],
        blend_shapes=blend_shapes,
    )


def _material_from_scene(doc: SceneMaterial, base_dir: str) -> Material:
    textures = {}
    for prop, tex_doc in doc.textures.items():
        if tex_doc is None:
            textures[prop] = None
            continue
        tex_path = os.path.join(base_dir, tex_doc.path)
        if not os.path.exists(tex_path):
            raise FileNotFoundError(f"Texture not found for {doc.name}.{prop}: {tex_path}")
        with Image.open(tex_path) as image:
            name = os.path.splitext(os.path.basename(tex_path))[0]
            textures[prop] = Texture.from_image(name, image, readable=tex_doc.readable)

    return Material(
        name=doc.name,
        shader=doc.shader,
        colors={k: tuple(v) for k, v in doc.colors.items()},
        textures=textures,
        floats=dict(doc.floats),
    )


def _tolist(array: Optional[np.ndarray]):
    return None if array is None else array.tolist()


def mesh_to_document(mesh: MeshData) -> dict:
    """Serialize a mesh into the scene mesh layout."""
    doc = SceneMesh(
        name=mesh.name,
        vertices=_tolist(mesh.vertices),
        uv=_tolist(mesh.uv),
        normals=_tolist(mesh.normals),
        tangents=_tolist(mesh.tangents),
        uv2=_tolist(mesh.uv2),
        bone_indices=_tolist(mesh.bone_indices),
        bone_weights=_tolist(mesh.bone_weights),
        bind_poses=None if mesh.bind_poses is None else mesh.bind_poses.reshape(-1, 16).tolist(),
        submeshes=[tris.tolist() for tris in mesh.submeshes],
        blend_shapes=[
            {
                "name": shape.name,
                "frames": [
                    {
                        "weight": frame.weight,
                        "delta_vertices": _tolist(frame.delta_vertices),
                        "delta_normals": _tolist(frame.delta_normals),
                        "delta_tangents": _tolist(frame.delta_tangents),
                    }
                    for frame in shape.frames
                ],
            }
            for shape in mesh.blend_shapes
        ],
    )
    return doc.model_dump()


def material_to_document(material: Material, texture_files: dict) -> dict:
    """
    Serialize a material; textures are written as file references.

    Textures missing from texture_files have no file on disk and are written
    as null.
    """
    textures = {}
    for prop, texture in material.textures.items():
        filename = None if texture is None else texture_files.get(id(texture))
        textures[prop] = {"path": filename} if filename else None
    return {
        "name": material.name,
        "shader": material.shader,
        "colors": {k: list(v) for k, v in material.colors.items()},
        "floats": dict(material.floats),
        "textures": textures,
    }


def save_result(result, directory: str, base_name: Optional[str] = None) -> List[str]:
    """
    Write a successful AtlasResult to directory.

    Files written:
        <base>_Atlas_Main.png (+ _Normal / _Emission / _Occlusion when present)
        <base>_Atlas<property>.png for other readable textures still bound
        <base>_Atlas_Mesh.json
        <base>_Atlas_Material.json

    Raises:
        ValueError: If the result is not successful
    """
    if not result.success:
        raise ValueError(f"Cannot save a failed atlas result: {result.error_message}")

    os.makedirs(directory, exist_ok=True)
    if base_name is None:
        base_name = result.remapped_mesh.name
        if base_name.endswith("_Atlas"):
            base_name = base_name[:-len("_Atlas")]

    written = []
    texture_files = {}
    for channel, texture in result.textures.items():
        if texture is None:
            continue
        filename = f"{base_name}_Atlas_{TEXTURE_FILE_SUFFIXES[channel]}.png"
        path = os.path.join(directory, filename)
        texture.to_image().save(path, format='PNG')
        texture_files[id(texture)] = filename
        written.append(path)

    # Source textures still bound on the atlas material
    for prop, texture in result.material.textures.items():
        if texture is None or id(texture) in texture_files:
            continue
        if not texture.readable or texture.pixels is None:
            logger.warning(f"Texture '{texture.name}' bound to {prop} is not readable; saved as null")
            continue
        filename = f"{base_name}_Atlas{prop}.png"
        path = os.path.join(directory, filename)
        texture.to_image().save(path, format='PNG')
        texture_files[id(texture)] = filename
        written.append(path)

    mesh_path = os.path.join(directory, f"{base_name}_Atlas_Mesh.json")
    with open(mesh_path, 'w') as f:
        json.dump(mesh_to_document(result.remapped_mesh), f, indent=2)
    written.append(mesh_path)

    material_path = os.path.join(directory, f"{base_name}_Atlas_Material.json")
    with open(material_path, 'w') as f:
        json.dump(material_to_document(result.material, texture_files), f, indent=2)
    written.append(material_path)

    logger.info(f"Saved {len(written)} files to {directory}")
    return written
