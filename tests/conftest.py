"""
Shared builders for atlas tests.

Meshes are built like small avatars: one quad (4 vertices, 2 triangles) per
sub-mesh, laid out side by side, with full skinning data.
"""
import numpy as np
import pytest

from atlasmith.materials.model import Material
from atlasmith.mesh.model import BlendShape, BlendShapeFrame, MeshData
from atlasmith.texturing.pixels import PixelBuffer, Texture

PALETTE = [
    (1.0, 0.0, 0.0, 1.0),
    (0.0, 1.0, 0.0, 1.0),
    (0.0, 0.0, 1.0, 1.0),
    (1.0, 1.0, 0.0, 1.0),
    (1.0, 0.0, 1.0, 1.0),
    (0.0, 1.0, 1.0, 1.0),
    (0.5, 0.5, 0.0, 1.0),
    (0.0, 0.5, 0.5, 1.0),
]


def build_mesh(submesh_count, with_blend_shape=False):
    vertices, uvs, submeshes = [], [], []
    for s in range(submesh_count):
        off = s * 2.0
        vertices += [[off, 0, 0], [off + 1, 0, 0], [off, 1, 0], [off + 1, 1, 0]]
        uvs += [[0, 0], [1, 0], [0, 1], [1, 1]]
        b = s * 4
        submeshes.append([b, b + 1, b + 2, b + 1, b + 3, b + 2])

    n = len(vertices)
    blend_shapes = []
    if with_blend_shape:
        deltas = np.zeros((n, 3), dtype=np.float32)
        deltas[:, 2] = 0.25
        blend_shapes.append(BlendShape(
            name="puff",
            frames=[
                BlendShapeFrame(weight=50.0, delta_vertices=deltas * 0.5,
                                delta_normals=np.zeros((n, 3)), delta_tangents=np.zeros((n, 3))),
                BlendShapeFrame(weight=100.0, delta_vertices=deltas,
                                delta_normals=np.zeros((n, 3)), delta_tangents=np.zeros((n, 3))),
            ],
        ))

    return MeshData(
        name="TestMesh",
        vertices=np.array(vertices, dtype=np.float32),
        uv=np.array(uvs, dtype=np.float32),
        normals=np.tile([0.0, 0.0, 1.0], (n, 1)),
        tangents=np.tile([1.0, 0.0, 0.0, 1.0], (n, 1)),
        uv2=np.array(uvs, dtype=np.float32),
        bone_indices=np.zeros((n, 4), dtype=np.int32),
        bone_weights=np.tile([1.0, 0.0, 0.0, 0.0], (n, 1)),
        bind_poses=np.eye(4)[np.newaxis],
        submeshes=submeshes,
        blend_shapes=blend_shapes,
    )


def solid_texture(size, color, name="tex", height=None):
    return Texture.solid(name, size, height or size, color)


def gradient_texture(width, height, name="gradient"):
    """R ramps 0 -> 1 left to right, G ramps bottom to top."""
    data = np.zeros((height, width, 4), dtype=np.float32)
    data[:, :, 0] = (np.arange(width) / width)[np.newaxis, :]
    data[:, :, 1] = (np.arange(height) / height)[:, np.newaxis]
    data[:, :, 2] = 0.5
    data[:, :, 3] = 1.0
    return Texture.from_pixels(name, PixelBuffer(data))


def build_material(name, color, main_tex=None, shader="Standard"):
    mat = Material(name=name, shader=shader, colors={"_Color": color}, floats={"_Glossiness": 0.5})
    if main_tex is not None:
        mat.set_texture("_MainTex", main_tex)
    return mat


def build_materials(count, with_textures=False, tex_size=64):
    mats = []
    for i in range(count):
        color = PALETTE[i % len(PALETTE)]
        tex = solid_texture(tex_size, color, name=f"Tex_{i}") if with_textures else None
        mats.append(build_material(f"Mat_{i}", color, tex))
    return mats


@pytest.fixture
def mesh_factory():
    return build_mesh


@pytest.fixture
def materials_factory():
    return build_materials


@pytest.fixture
def material_factory():
    return build_material


@pytest.fixture
def texture_factory():
    return solid_texture


@pytest.fixture
def gradient_factory():
    return gradient_texture
