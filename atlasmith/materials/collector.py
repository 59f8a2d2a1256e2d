"""
Material entry collection.

Turns the renderer's ordered material list into MaterialEntry records: one per
non-null material, in input order, with the textures and fallback colors the
compositor needs.
"""

import logging
from typing import List, Optional, Sequence

from atlasmith.exceptions import TextureReadError
from atlasmith.materials.model import Material, MaterialEntry, TextureChannel
from atlasmith.materials.properties import (
    EMISSION_COLOR_PROPERTY,
    MAIN_COLOR_PROPERTY,
    texture_property_candidates,
)
from atlasmith.mesh.model import MeshData
from atlasmith.texturing.pixels import Texture
from atlasmith.texturing.provider import TextureProvider

logger = logging.getLogger(__name__)


def collect_material_entries(
    materials: Sequence[Optional[Material]],
    mesh: MeshData,
    provider: TextureProvider
) -> List[MaterialEntry]:
    """
    Build one MaterialEntry per non-null material.

    Args:
        materials: Ordered material slots (None entries are skipped)
        mesh: Source mesh, used to clamp sub-mesh indices
        provider: Used to obtain readable copies of non-readable textures

    Returns:
        Entries in input order
    """
    entries = []
    last_submesh = max(mesh.submesh_count - 1, 0)

    for i, mat in enumerate(materials):
        if mat is None:
            logger.debug(f"Skipping empty material slot {i}")
            continue

        entry = MaterialEntry(
            material=mat,
            original_index=i,
            submesh_indices=[min(i, last_submesh)],
        )

        for channel in TextureChannel:
            entry.textures[channel] = _find_channel_texture(mat, channel, provider)

        if mat.has_property(MAIN_COLOR_PROPERTY):
            entry.main_color = mat.get_color(MAIN_COLOR_PROPERTY)
        if mat.has_property(EMISSION_COLOR_PROPERTY):
            entry.emission_color = mat.get_color(EMISSION_COLOR_PROPERTY)

        entries.append(entry)

    logger.info(f"Collected {len(entries)} material entries from {len(materials)} slots")
    return entries


def _find_channel_texture(
    mat: Material,
    channel: TextureChannel,
    provider: TextureProvider
) -> Optional[Texture]:
    """First bound texture among the channel's candidate property names."""
    for prop in texture_property_candidates(channel):
        texture = _get_readable_texture(mat, prop, provider)
        if texture is not None:
            return texture
    return None


def _get_readable_texture(mat: Material, prop: str, provider: TextureProvider) -> Optional[Texture]:
    if not mat.has_property(prop):
        return None
    texture = mat.get_texture(prop)
    if texture is None:
        return None
    if texture.readable:
        return texture

    try:
        return provider.make_readable(texture)
    except TextureReadError as e:
        # Keep the handle; the compositor falls back to the solid color.
        logger.warning(f"Could not read '{texture.name}' on {mat.name}.{prop}: {e}")
        return texture
