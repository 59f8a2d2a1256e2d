"""
Core atlas generation engine

Runs the whole pipeline for one skinned mesh:

    collect entries -> layout -> compose channels -> remap UVs -> assemble material

Everything is synchronous. Errors never escape generate(); they end up in
AtlasResult.error_message and the partial output is dropped.
"""

import logging
from typing import Optional, Sequence

from atlasmith.exceptions import InvalidInputError
from atlasmith.materials.assembler import create_atlas_material
from atlasmith.materials.collector import collect_material_entries
from atlasmith.materials.model import Material, TextureChannel
from atlasmith.mesh.model import MeshData
from atlasmith.mesh.uv_remap import remap_mesh_uvs
from atlasmith.result import AtlasResult
from atlasmith.schema.settings import AtlasSettings
from atlasmith.texturing.compositor import compose_atlas_texture
from atlasmith.texturing.layout import calculate_layout, validate_layout
from atlasmith.texturing.provider import CPUTextureProvider, TextureProvider

logger = logging.getLogger(__name__)


def _channel_enabled(settings: AtlasSettings, channel: TextureChannel) -> bool:
    return {
        TextureChannel.MAIN: True,
        TextureChannel.NORMAL: settings.include_normal_map,
        TextureChannel.EMISSION: settings.include_emission_map,
        TextureChannel.OCCLUSION: settings.include_occlusion_map,
    }[channel]


def _validate_inputs(mesh: Optional[MeshData], materials: Optional[Sequence[Optional[Material]]]) -> None:
    if mesh is None:
        raise InvalidInputError("Mesh is null")
    if not materials:
        raise InvalidInputError("No materials to atlas")
    if len(materials) <= 1:
        raise InvalidInputError("Only one material; nothing to atlas")


def generate(
    mesh: Optional[MeshData],
    materials: Optional[Sequence[Optional[Material]]],
    settings: Optional[AtlasSettings] = None,
    provider: Optional[TextureProvider] = None
) -> AtlasResult:
    """
    Pack all material textures of a mesh into one atlas.

    Args:
        mesh: Source mesh (read only)
        materials: Material slots in sub-mesh order; None slots are skipped
        settings: Atlas settings (defaults to AtlasSettings())
        provider: Texture readback capability (defaults to CPUTextureProvider)

    Returns:
        AtlasResult; check result.success / result.error_message

    Examples:
        >>> result = generate(mesh, [skin, cloth, hair])
        >>> result.success, result.atlas_size
        (True, 2048)
    """
    settings = settings or AtlasSettings()
    provider = provider or CPUTextureProvider()
    result = AtlasResult()

    try:
        _validate_inputs(mesh, materials)
    except InvalidInputError as e:
        result.original_material_count = len(materials) if materials else 0
        result.error_message = str(e)
        logger.warning(f"Atlas generation skipped: {e}")
        return result

    result.original_material_count = len(materials)

    try:
        entries = collect_material_entries(materials, mesh, provider)
        if not entries:
            raise InvalidInputError("No valid materials found")
        result.entries = entries

        layout = calculate_layout(entries, settings)
        validate_layout(entries)
        result.atlas_size = layout.atlas_size

        for channel in TextureChannel:
            if not _channel_enabled(settings, channel):
                continue
            if channel != TextureChannel.MAIN and not any(e.texture_for(channel) is not None for e in entries):
                continue
            result.set_texture(channel, compose_atlas_texture(entries, layout.atlas_size, settings, channel))

        result.remapped_mesh = remap_mesh_uvs(mesh, entries)
        result.material = create_atlas_material(entries[0].material, result.textures)

        logger.info(
            f"Atlas generated: {len(materials)} materials -> 1 material, "
            f"size={layout.atlas_size}x{layout.atlas_size}"
        )
    except InvalidInputError as e:
        result.discard_outputs()
        result.error_message = str(e)
        logger.warning(f"Atlas generation skipped: {e}")
    except Exception as e:
        result.discard_outputs()
        result.error_message = f"Atlas generation failed: {e}"
        logger.exception(result.error_message)

    return result
