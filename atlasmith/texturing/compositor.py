"""
Atlas texture composition.

One pass per channel: allocate the atlas buffer, then for every entry either
resample its texture into its tile or flat-fill the tile with its fallback
color, then bleed the tile's edge pixels into the padding gutter so filtering
and mip generation never pull in a neighbouring tile.
"""

import logging
from typing import Sequence

import numpy as np

from atlasmith.exceptions import TextureReadError
from atlasmith.materials.model import MaterialEntry, TextureChannel
from atlasmith.schema.settings import AtlasSettings
from atlasmith.texturing.pixels import BLACK, FLAT_NORMAL, WHITE, Color, PixelBuffer, Texture

logger = logging.getLogger(__name__)

BACKGROUND_COLORS = {
    TextureChannel.MAIN: BLACK,
    TextureChannel.NORMAL: FLAT_NORMAL,
    TextureChannel.EMISSION: BLACK,
    TextureChannel.OCCLUSION: BLACK,
}


def channel_fill_color(entry: MaterialEntry, channel: TextureChannel) -> Color:
    """Color used for a tile when the entry has no usable texture for channel."""
    if channel == TextureChannel.MAIN:
        return entry.main_color
    if channel == TextureChannel.NORMAL:
        return FLAT_NORMAL
    if channel == TextureChannel.EMISSION:
        return entry.emission_color
    return WHITE


def tile_pixel_rect(entry: MaterialEntry, atlas_size: int):
    """Destination (x, y, w, h) in pixels for an entry's normalized rect."""
    r = entry.atlas_rect
    return (
        int(round(r.x * atlas_size)),
        int(round(r.y * atlas_size)),
        int(round(r.width * atlas_size)),
        int(round(r.height * atlas_size)),
    )


def compose_atlas_texture(
    entries: Sequence[MaterialEntry],
    atlas_size: int,
    settings: AtlasSettings,
    channel: TextureChannel
) -> Texture:
    """
    Compose one channel's atlas.

    Args:
        entries: Entries with atlas_rect already assigned
        atlas_size: Atlas side length in pixels
        settings: Padding and filter mode come from here
        channel: Which texture channel to compose

    Returns:
        Readable atlas texture named Atlas_<Channel>
    """
    atlas = PixelBuffer.filled(atlas_size, atlas_size, BACKGROUND_COLORS[channel])

    for entry in entries:
        dst_x, dst_y, dst_w, dst_h = tile_pixel_rect(entry, atlas_size)
        if dst_w <= 0 or dst_h <= 0:
            logger.warning(f"Skipping empty tile for {entry.material.name}")
            continue

        source = _readable_pixels(entry, channel)
        if source is not None:
            blit_resized(atlas, source, dst_x, dst_y, dst_w, dst_h)
        else:
            atlas.fill_rect(dst_x, dst_y, dst_w, dst_h, channel_fill_color(entry, channel))

        if settings.padding > 0:
            fill_padding_border(atlas, dst_x, dst_y, dst_w, dst_h, settings.padding)

    name = f"Atlas_{channel.value.capitalize()}"
    logger.info(f"Composed {name} ({atlas_size}x{atlas_size}, {len(entries)} tiles)")
    return Texture.from_pixels(
        name,
        atlas,
        filter_mode=settings.filter_mode,
        mipmaps=True,
    )


def _readable_pixels(entry: MaterialEntry, channel: TextureChannel):
    texture = entry.texture_for(channel)
    if texture is None:
        return None
    try:
        return texture.get_pixels()
    except TextureReadError as e:
        logger.warning(f"{e}; using solid color for {entry.material.name} ({channel.value})")
        return None


def resample_bilinear(src: np.ndarray, dst_w: int, dst_h: int) -> np.ndarray:
    """
    Resize an (h, w, 4) array to (dst_h, dst_w, 4) with clamped bilinear sampling.

    Destination pixel x samples source coordinate (x / dst_w) * (src_w - 1).
    This is a plain resize, not a filtered downsample.
    """
    src_h, src_w = src.shape[:2]

    fx = np.arange(dst_w, dtype=np.float64) / dst_w * (src_w - 1)
    fy = np.arange(dst_h, dtype=np.float64) / dst_h * (src_h - 1)
    x0 = np.clip(np.floor(fx).astype(np.int64), 0, src_w - 1)
    y0 = np.clip(np.floor(fy).astype(np.int64), 0, src_h - 1)
    x1 = np.clip(x0 + 1, 0, src_w - 1)
    y1 = np.clip(y0 + 1, 0, src_h - 1)
    tx = (fx - x0).astype(np.float32)[np.newaxis, :, np.newaxis]
    ty = (fy - y0).astype(np.float32)[:, np.newaxis, np.newaxis]

    # Separable: interpolate along x for every source row, then along y
    src = np.asarray(src, dtype=np.float32)
    left = src[:, x0]
    rows = left + (src[:, x1] - left) * tx
    lower = rows[y0]
    lower += (rows[y1] - lower) * ty
    return lower


def blit_resized(dst: PixelBuffer, src: PixelBuffer, dst_x: int, dst_y: int, dst_w: int, dst_h: int) -> None:
    """Resample src into the (dst_x, dst_y, dst_w, dst_h) tile of dst, clipped to dst."""
    tile = resample_bilinear(src.data, dst_w, dst_h)

    x0, y0 = max(dst_x, 0), max(dst_y, 0)
    x1, y1 = min(dst_x + dst_w, dst.width), min(dst_y + dst_h, dst.height)
    if x1 <= x0 or y1 <= y0:
        return
    dst.data[y0:y1, x0:x1] = tile[y0 - dst_y:y1 - dst_y, x0 - dst_x:x1 - dst_x]


def fill_padding_border(tex: PixelBuffer, rx: int, ry: int, rw: int, rh: int, padding: int) -> None:
    """
    Copy a tile's outermost rows and columns outward by padding pixels.

    Rows go first (over the tile's width), then columns (over its height), so
    the diagonal corner blocks keep whatever was there before.
    """
    atlas_w, atlas_h = tex.width, tex.height
    data = tex.data
    cx0, cx1 = max(rx, 0), min(rx + rw, atlas_w)
    cy0, cy1 = max(ry, 0), min(ry + rh, atlas_h)
    if cx1 <= cx0 or cy1 <= cy0:
        return

    # Above and below
    top_row = data[cy1 - 1, cx0:cx1].copy()
    bottom_row = data[cy0, cx0:cx1].copy()
    data[cy1:min(cy1 + padding, atlas_h), cx0:cx1] = top_row
    data[max(cy0 - padding, 0):cy0, cx0:cx1] = bottom_row

    # Left and right
    left_col = data[cy0:cy1, cx0].copy()
    right_col = data[cy0:cy1, cx1 - 1].copy()
    data[cy0:cy1, max(cx0 - padding, 0):cx0] = left_col[:, np.newaxis]
    data[cy0:cy1, cx1:min(cx1 + padding, atlas_w)] = right_col[:, np.newaxis]
