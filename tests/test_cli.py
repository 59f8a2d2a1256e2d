"""
Tests for atlasmith CLI

These tests verify the CLI command structure, error handling and a full
build against a small scene on disk.
"""

import json
from click.testing import CliRunner
from PIL import Image

from atlasmith.cli import cli


def write_scene(directory):
    Image.new("RGBA", (8, 8), (255, 0, 0, 255)).save(directory / "red.png")
    Image.new("RGBA", (8, 8), (0, 255, 0, 255)).save(directory / "green.png")
    scene = {
        "mesh": {
            "name": "Avatar",
            "vertices": [[0, 0, 0], [1, 0, 0], [0, 1, 0], [2, 0, 0], [3, 0, 0], [2, 1, 0]],
            "uv": [[0, 0], [1, 0], [0, 1], [0, 0], [1, 0], [0, 1]],
            "submeshes": [[0, 1, 2], [3, 4, 5]],
        },
        "materials": [
            {"name": "Skin", "textures": {"_MainTex": {"path": "red.png"}}},
            {"name": "Cloth", "textures": {"_MainTex": {"path": "green.png"}}},
        ],
    }
    path = directory / "avatar.json"
    path.write_text(json.dumps(scene))
    return path


class TestCLI:
    """Test CLI command structure and basic functionality"""

    def test_cli_help(self):
        """Test that CLI help works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'atlasmith' in result.output
        assert 'build' in result.output
        assert 'layout' in result.output

    def test_cli_version(self):
        """Test that version flag works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0

    def test_build_help(self):
        """Test that build command help works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['build', '--help'])
        assert result.exit_code == 0
        assert 'Build an atlas' in result.output
        assert '--output' in result.output
        assert '--max-size' in result.output
        assert '--padding' in result.output
        assert '--verbose' in result.output

    def test_build_missing_output(self, tmp_path):
        """Test that build command requires output flag"""
        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(write_scene(tmp_path))])
        assert result.exit_code != 0
        assert 'output' in result.output.lower() or 'required' in result.output.lower()

    def test_build_missing_scene(self, tmp_path):
        """Test that build handles a missing scene file"""
        runner = CliRunner()
        result = runner.invoke(cli, ['build', '/nonexistent/scene.json', '-o', str(tmp_path)])
        assert result.exit_code != 0
        assert 'not found' in result.output.lower()

    def test_build_invalid_max_size(self, tmp_path):
        """Test that max size must be one of the supported sizes"""
        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(write_scene(tmp_path)), '-o', str(tmp_path), '--max-size', '1000'])
        assert result.exit_code != 0

    def test_build_invalid_scene(self, tmp_path):
        """Test that a malformed scene is reported"""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"mesh": {"vertices": [[0, 0, 0]]}, "materials": []}))
        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(path), '-o', str(tmp_path / 'out')])
        assert result.exit_code == 1
        assert 'Invalid scene' in result.output

    def test_build_single_material_fails(self, tmp_path):
        """Test that a scene with one material reports the generation error"""
        Image.new("RGBA", (8, 8), (255, 0, 0, 255)).save(tmp_path / "red.png")
        path = tmp_path / "one.json"
        path.write_text(json.dumps({
            "mesh": {"vertices": [[0, 0, 0], [1, 0, 0], [0, 1, 0]], "uv": [[0, 0], [1, 0], [0, 1]],
                     "submeshes": [[0, 1, 2]]},
            "materials": [{"name": "Only", "textures": {"_MainTex": {"path": "red.png"}}}],
        }))
        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(path), '-o', str(tmp_path / 'out')])
        assert result.exit_code == 1
        assert 'nothing to atlas' in result.output

    def test_build_writes_atlas(self, tmp_path):
        """Test a full build writes the atlas files"""
        scene = write_scene(tmp_path)
        out = tmp_path / 'out'
        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(scene), '-o', str(out), '--padding', '2'])

        assert result.exit_code == 0, result.output
        assert 'Success' in result.output
        assert '2 materials -> 1' in result.output
        assert (out / 'Avatar_Atlas_Main.png').exists()
        assert (out / 'Avatar_Atlas_Mesh.json').exists()
        assert (out / 'Avatar_Atlas_Material.json').exists()

    def test_build_custom_name_verbose(self, tmp_path):
        """Test --name prefixes output files and -v prints a summary"""
        scene = write_scene(tmp_path)
        out = tmp_path / 'out'
        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(scene), '-o', str(out), '--name', 'hero', '-v'])

        assert result.exit_code == 0, result.output
        assert 'Atlas size:' in result.output
        assert (out / 'hero_Atlas_Main.png').exists()

    def test_layout_command(self, tmp_path):
        """Test layout prints the grid and one line per material"""
        runner = CliRunner()
        result = runner.invoke(cli, ['layout', str(write_scene(tmp_path)), '--padding', '0'])

        assert result.exit_code == 0, result.output
        assert 'Atlas: 16x16, grid 2x2, tile 8px' in result.output
        assert '[0] Skin' in result.output
        assert '[1] Cloth' in result.output

    def test_layout_invalid_scene(self, tmp_path):
        """Test that layout reports a malformed scene like build does"""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"mesh": {"vertices": [[0, 0, 0]]}, "materials": []}))
        runner = CliRunner()
        result = runner.invoke(cli, ['layout', str(path)])
        assert result.exit_code == 1
        assert 'Invalid scene' in result.output

    def test_layout_missing_scene(self):
        """Test layout handles a missing scene file"""
        runner = CliRunner()
        result = runner.invoke(cli, ['layout', '/nonexistent/scene.json'])
        assert result.exit_code == 1
        assert 'not found' in result.output.lower()
