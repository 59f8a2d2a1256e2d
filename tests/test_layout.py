"""
Tests for atlas layout calculation.
"""
import pytest

from atlasmith.exceptions import LayoutError
from atlasmith.materials.model import MaterialEntry, Rect, TextureChannel
from atlasmith.schema.settings import AtlasSettings
from atlasmith.texturing.layout import (
    calculate_layout,
    grid_rects,
    next_power_of_2,
    validate_layout,
)


def make_entries(tex_sizes, texture_factory, material_factory):
    entries = []
    for i, size in enumerate(tex_sizes):
        tex = None
        if size is not None:
            w, h = size if isinstance(size, tuple) else (size, size)
            tex = texture_factory(w, (1, 1, 1, 1), height=h)
        entry = MaterialEntry(
            material=material_factory(f"M{i}", (1, 1, 1, 1)),
            original_index=i,
            submesh_indices=[i],
        )
        entry.textures[TextureChannel.MAIN] = tex
        entries.append(entry)
    return entries


def assert_disjoint_and_inside(entries):
    for e in entries:
        r = e.atlas_rect
        assert r.x >= 0 and r.y >= 0
        assert r.x_max <= 1.001 and r.y_max <= 1.001
    for i in range(len(entries)):
        for j in range(i + 1, len(entries)):
            assert not entries[i].atlas_rect.overlaps(entries[j].atlas_rect), f"{i} overlaps {j}"


class TestNextPowerOfTwo:
    """Test power-of-two rounding"""

    @pytest.mark.parametrize("n,expected", [(0, 1), (1, 1), (2, 2), (3, 4), (1024, 1024), (1036, 2048), (2060, 4096)])
    def test_values(self, n, expected):
        """next_power_of_2 rounds up to the nearest power of two"""
        assert next_power_of_2(n) == expected


class TestGridLayout:
    """Test the uniform grid layout"""

    def test_two_small_textures_zero_padding(self, texture_factory, material_factory):
        """Two 64px textures share a 128px atlas side by side"""
        entries = make_entries([64, 64], texture_factory, material_factory)
        layout = calculate_layout(entries, AtlasSettings(padding=0))

        assert layout.atlas_size == 128
        assert layout.grid_size == 2
        assert layout.tile_size == 64
        assert entries[0].atlas_rect == Rect(0.0, 0.0, 0.5, 0.5)
        assert entries[1].atlas_rect == Rect(0.5, 0.0, 0.5, 0.5)

    def test_padding_offsets_tiles(self, texture_factory, material_factory):
        """Padding gutters surround every tile and the tile size absorbs rounding"""
        entries = make_entries([8, 8], texture_factory, material_factory)
        layout = calculate_layout(entries, AtlasSettings(padding=2))

        # 2*8 + 3*2 = 22 -> 32; effective tile = (32 - 6) // 2 = 13
        assert layout.atlas_size == 32
        assert layout.tile_size == 13
        assert entries[0].atlas_rect.x * 32 == pytest.approx(2)
        assert entries[1].atlas_rect.x * 32 == pytest.approx(17)
        assert entries[1].atlas_rect.width * 32 == pytest.approx(13)

    def test_default_tile_size_without_textures(self, texture_factory, material_factory):
        """Entries without main textures use 512px tiles"""
        entries = make_entries([None, None, None], texture_factory, material_factory)
        layout = calculate_layout(entries, AtlasSettings(padding=4))

        # grid 2: 2*512 + 3*4 = 1036 -> 2048
        assert layout.atlas_size == 2048
        assert_disjoint_and_inside(entries)

    def test_largest_texture_decides_tile_size(self, texture_factory, material_factory):
        """Non-square and mixed texture sizes use the largest dimension"""
        entries = make_entries([(512, 128), (128, 1024), None], texture_factory, material_factory)
        layout = calculate_layout(entries, AtlasSettings(padding=4))

        assert layout.atlas_size == 4096
        assert layout.tile_size == (4096 - 12) // 2

    def test_row_major_grid_order(self, texture_factory, material_factory):
        """Entry i sits at row i // grid, column i % grid"""
        entries = make_entries([32] * 5, texture_factory, material_factory)
        layout = calculate_layout(entries, AtlasSettings(padding=0))

        assert layout.grid_size == 3
        assert entries[3].atlas_rect.x == pytest.approx(0.0)
        assert entries[3].atlas_rect.y == pytest.approx(entries[0].atlas_rect.height)
        assert entries[4].atlas_rect.x == pytest.approx(entries[1].atlas_rect.x)

    @pytest.mark.parametrize("count", [2, 3, 4, 8, 16, 32])
    def test_rects_disjoint_and_in_bounds(self, count, texture_factory, material_factory):
        """Every layout produces disjoint rects inside the unit square"""
        entries = make_entries([32] * count, texture_factory, material_factory)
        layout = calculate_layout(entries, AtlasSettings())

        assert layout.atlas_size & (layout.atlas_size - 1) == 0
        assert_disjoint_and_inside(entries)
        validate_layout(entries)

    def test_texel_density_flag_keeps_uniform_grid(self, texture_factory, material_factory):
        """preserve_texel_density does not change the layout"""
        a = make_entries([1024, 128, 64], texture_factory, material_factory)
        b = make_entries([1024, 128, 64], texture_factory, material_factory)
        la = calculate_layout(a, AtlasSettings(preserve_texel_density=True))
        lb = calculate_layout(b, AtlasSettings(preserve_texel_density=False))

        assert la.atlas_size == lb.atlas_size
        assert [e.atlas_rect for e in a] == [e.atlas_rect for e in b]


class TestOverflow:
    """Test clamping to max_atlas_size"""

    def test_clamped_to_max_size(self, texture_factory, material_factory):
        """Large tiles shrink uniformly when the atlas would exceed the cap"""
        entries = make_entries([2048] * 4, texture_factory, material_factory)
        layout = calculate_layout(entries, AtlasSettings(max_atlas_size=2048, padding=4))

        assert layout.clamped
        assert layout.atlas_size == 2048
        assert layout.tile_size == (2048 - 12) // 2
        assert len(layout.rects) == 4
        assert_disjoint_and_inside(entries)

    def test_within_cap_is_not_clamped(self, texture_factory, material_factory):
        """Small layouts leave the clamp flag unset"""
        entries = make_entries([64, 64], texture_factory, material_factory)
        layout = calculate_layout(entries, AtlasSettings(max_atlas_size=1024))
        assert not layout.clamped
        assert layout.atlas_size <= 1024

    def test_padding_too_large_raises(self):
        """A grid whose gutters eat the whole atlas cannot be laid out"""
        with pytest.raises(LayoutError):
            grid_rects(count=16, grid_size=4, atlas_size=16, padding=4)

    def test_no_entries_raises(self):
        """Layout requires at least one entry"""
        with pytest.raises(LayoutError):
            calculate_layout([], AtlasSettings())


class TestValidateLayout:
    """Test layout validation"""

    def test_overlap_detected(self, texture_factory, material_factory):
        """Overlapping rects are rejected"""
        entries = make_entries([None, None], texture_factory, material_factory)
        entries[0].atlas_rect = Rect(0.0, 0.0, 0.6, 0.6)
        entries[1].atlas_rect = Rect(0.5, 0.5, 0.5, 0.5)
        with pytest.raises(LayoutError, match="overlap"):
            validate_layout(entries)

    def test_out_of_bounds_detected(self, texture_factory, material_factory):
        """Rects past the atlas edge are rejected"""
        entries = make_entries([None], texture_factory, material_factory)
        entries[0].atlas_rect = Rect(0.6, 0.0, 0.5, 0.5)
        with pytest.raises(LayoutError, match="outside"):
            validate_layout(entries)

    def test_shared_edges_allowed(self, texture_factory, material_factory):
        """Touching rects are not an overlap"""
        entries = make_entries([None, None], texture_factory, material_factory)
        entries[0].atlas_rect = Rect(0.0, 0.0, 0.5, 1.0)
        entries[1].atlas_rect = Rect(0.5, 0.0, 0.5, 1.0)
        validate_layout(entries)
