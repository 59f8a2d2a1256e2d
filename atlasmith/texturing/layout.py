"""
Atlas layout calculation.

Every entry gets one cell of a uniform square grid. The atlas side is the next
power of two that fits the grid plus padding gutters, capped at the configured
maximum; when the cap applies all tiles shrink together, none are dropped.

    +---+-----+---+-----+---+
    | p |     | p |     | p |   p = padding gutter
    +---+-----+---+-----+---+
    | p | e2  | p | e3  | p |   row 1
    +---+-----+---+-----+---+
    | p | e0  | p | e1  | p |   row 0 (v = 0)
    +---+-----+---+-----+---+
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

from atlasmith.exceptions import LayoutError
from atlasmith.materials.model import MaterialEntry, Rect
from atlasmith.schema.settings import AtlasSettings

logger = logging.getLogger(__name__)

DEFAULT_TEXTURE_SIZE = 512
RECT_TOLERANCE = 1e-3


def next_power_of_2(n: int) -> int:
    """Return the next power of 2 >= n."""
    if n <= 0:
        return 1
    return 2 ** math.ceil(math.log2(n))


@dataclass
class AtlasLayout:
    atlas_size: int
    grid_size: int
    tile_size: int  # effective tile side in pixels
    padding: int
    rects: List[Rect]
    clamped: bool = False  # True when max_atlas_size forced smaller tiles


def calculate_layout(entries: Sequence[MaterialEntry], settings: AtlasSettings) -> AtlasLayout:
    """
    Compute the atlas size and assign every entry's atlas_rect.

    Raises:
        LayoutError: If there are no entries or the tiles don't fit at all
    """
    if settings.preserve_texel_density:
        # Tile sizes are not weighted yet; density mode uses the uniform grid.
        logger.debug("preserve_texel_density set; using uniform grid layout")

    layout = _calculate_grid_layout(entries, settings.padding, settings.max_atlas_size)

    for entry, rect in zip(entries, layout.rects):
        entry.atlas_rect = rect

    logger.info(
        f"Layout: {len(entries)} tiles in {layout.grid_size}x{layout.grid_size} grid, "
        f"{layout.tile_size}px tiles, atlas {layout.atlas_size}x{layout.atlas_size}"
        + (" (clamped to max size)" if layout.clamped else "")
    )
    return layout


def _calculate_grid_layout(entries: Sequence[MaterialEntry], padding: int, max_size: int) -> AtlasLayout:
    count = len(entries)
    if count == 0:
        raise LayoutError("Cannot lay out an atlas with no entries")

    grid_size = math.ceil(math.sqrt(count))

    # Largest main texture decides the tile size
    sizes = [
        max(e.main_texture.width, e.main_texture.height)
        for e in entries if e.main_texture is not None
    ]
    max_tex_size = max(sizes) if sizes else DEFAULT_TEXTURE_SIZE

    tile_size = min(max_tex_size, max_size // grid_size)
    atlas_size = next_power_of_2(grid_size * tile_size + (grid_size + 1) * padding)

    clamped = atlas_size > max_size
    if clamped:
        atlas_size = max_size

    rects = grid_rects(count, grid_size, atlas_size, padding)
    effective_tile = (atlas_size - (grid_size + 1) * padding) // grid_size

    return AtlasLayout(
        atlas_size=atlas_size,
        grid_size=grid_size,
        tile_size=effective_tile,
        padding=padding,
        rects=rects,
        clamped=clamped,
    )


def grid_rects(count: int, grid_size: int, atlas_size: int, padding: int) -> List[Rect]:
    """Normalized rects for count cells of a grid_size grid in an atlas_size atlas."""
    effective_tile = (atlas_size - (grid_size + 1) * padding) // grid_size
    if effective_tile < 1:
        raise LayoutError(
            f"{count} tiles with {padding}px padding do not fit in a "
            f"{atlas_size}x{atlas_size} atlas"
        )

    rects = []
    for i in range(count):
        row = i // grid_size
        col = i % grid_size
        x = col * (effective_tile + padding) + padding
        y = row * (effective_tile + padding) + padding
        rects.append(Rect(
            x=x / atlas_size,
            y=y / atlas_size,
            width=effective_tile / atlas_size,
            height=effective_tile / atlas_size,
        ))
    return rects


def validate_layout(entries: Sequence[MaterialEntry]) -> None:
    """
    Check that every entry has a rect inside [0, 1] and no two rects overlap.

    Raises:
        LayoutError: On the first violation found
    """
    for i, entry in enumerate(entries):
        r = entry.atlas_rect
        if r is None:
            raise LayoutError(f"Entry {i} has no atlas rect")
        if r.x < 0 or r.y < 0 or r.x_max > 1 + RECT_TOLERANCE or r.y_max > 1 + RECT_TOLERANCE:
            raise LayoutError(f"Entry {i} rect {r} lies outside the atlas")

    for i in range(len(entries)):
        for j in range(i + 1, len(entries)):
            if entries[i].atlas_rect.overlaps(entries[j].atlas_rect):
                raise LayoutError(f"Entries {i} and {j} overlap")
