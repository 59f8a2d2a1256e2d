"""
Atlas material assembly.

The atlas material is a duplicate of the first surviving material with its
texture slots pointed at the atlases. Tints were already baked into the tiles
during composition, so the main color is reset to white.
"""

import logging
from typing import Mapping, Optional

from atlasmith.materials.model import Material, TextureChannel
from atlasmith.materials.properties import (
    MAIN_COLOR_PROPERTY,
    STANDARD_FAMILY,
    families_for_shader,
)
from atlasmith.texturing.pixels import WHITE, Texture

logger = logging.getLogger(__name__)


def create_atlas_material(
    source: Material,
    atlas_textures: Mapping[TextureChannel, Optional[Texture]]
) -> Material:
    """
    Build the replacement material.

    Args:
        source: Material to duplicate (left untouched)
        atlas_textures: Composed atlas per channel; None or missing channels
            keep whatever the source had bound

    Returns:
        New material named Atlas_<source name>
    """
    atlas_mat = source.copy(name=f"Atlas_{source.name}")

    families = [STANDARD_FAMILY] + families_for_shader(source.shader)
    for channel, texture in atlas_textures.items():
        if texture is None:
            continue
        for family in families:
            prop = family.textures.get(channel)
            if prop:
                atlas_mat.set_texture(prop, texture)

    atlas_mat.set_color(MAIN_COLOR_PROPERTY, WHITE)

    logger.info(
        f"Created {atlas_mat.name} ({source.shader}), "
        f"naming families: {', '.join(f.name for f in families)}"
    )
    return atlas_mat
