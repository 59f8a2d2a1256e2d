"""
atlasmith CLI - Command-line interface for building material atlases
"""

import click
import logging
import sys
from pathlib import Path
from pydantic import ValidationError

from atlasmith import Atlasmith
from atlasmith.exceptions import AtlasError
from atlasmith.materials.collector import collect_material_entries
from atlasmith.persistence import load_scene
from atlasmith.schema.settings import AtlasSettings, FilterMode
from atlasmith.texturing.layout import calculate_layout
from atlasmith.texturing.provider import CPUTextureProvider

ATLAS_SIZES = ['256', '512', '1024', '2048', '4096', '8192']


@click.group()
@click.version_option(package_name='atlasmith')
def cli():
    """
    atlasmith - Merge a skinned mesh's materials into one texture atlas.

    Examples:
        atlasmith build avatar.json -o out/
        atlasmith layout avatar.json --max-size 2048
    """
    pass


@cli.command()
@click.argument('scene')
@click.option('-o', '--output', required=True, help='Output directory for atlas PNGs, mesh and material')
@click.option('--name', default=None, help='File name prefix (default: mesh name)')
@click.option('--max-size', type=click.Choice(ATLAS_SIZES), default='4096', show_default=True, help='Maximum atlas size')
@click.option('--padding', type=click.IntRange(0, 64), default=4, show_default=True, help='Edge bleed pixels per tile')
@click.option('--normal/--no-normal', default=True, show_default=True, help='Include normal map atlas')
@click.option('--emission/--no-emission', default=True, show_default=True, help='Include emission atlas')
@click.option('--occlusion/--no-occlusion', default=False, show_default=True, help='Include occlusion atlas')
@click.option('--filter-mode', type=click.Choice([m.value for m in FilterMode]), default='bilinear', show_default=True)
@click.option('--verbose', '-v', is_flag=True, help='Show detailed progress')
def build(scene, output, name, max_size, padding, normal, emission, occlusion, filter_mode, verbose):
    """
    Build an atlas for a scene file.

    Examples:
        atlasmith build avatar.json -o out/
        atlasmith build avatar.json -o out/ --max-size 2048 --padding 8 --no-emission
    """
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        if not Path(scene).exists():
            raise FileNotFoundError(f"Scene file not found: {scene}")

        settings = AtlasSettings(
            max_atlas_size=int(max_size),
            padding=padding,
            include_normal_map=normal,
            include_emission_map=emission,
            include_occlusion_map=occlusion,
            filter_mode=FilterMode(filter_mode),
        )
        am = Atlasmith(settings=settings)

        click.echo(f"Building atlas: {scene}")
        result = am.generate_from_scene(scene)

        if not result.success:
            click.secho(f"Error: {result.error_message}", fg='red', err=True)
            sys.exit(1)

        if verbose:
            click.echo(result.summary())

        written = result.save(output, name)
        if verbose:
            for path in written:
                click.echo(f"  wrote {path}")

        click.secho(
            f"✓ Success! {result.original_material_count} materials -> 1, "
            f"{result.atlas_size}x{result.atlas_size} atlas saved to {output}",
            fg='green'
        )

    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValidationError as e:
        click.secho(f"Invalid scene: {e}", fg='red', err=True)
        sys.exit(1)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Unexpected error: {e}", fg='red', err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


@cli.command()
@click.argument('scene')
@click.option('--max-size', type=click.Choice(ATLAS_SIZES), default='4096', show_default=True, help='Maximum atlas size')
@click.option('--padding', type=click.IntRange(0, 64), default=4, show_default=True, help='Edge bleed pixels per tile')
def layout(scene, max_size, padding):
    """
    Show the atlas layout for a scene without composing textures.

    Examples:
        atlasmith layout avatar.json
    """
    try:
        mesh, materials = load_scene(scene)
        settings = AtlasSettings(max_atlas_size=int(max_size), padding=padding)
        entries = collect_material_entries(materials, mesh, CPUTextureProvider())
        if not entries:
            raise ValueError("No valid materials found")
        result = calculate_layout(entries, settings)

        click.echo(f"Atlas: {result.atlas_size}x{result.atlas_size}, "
                   f"grid {result.grid_size}x{result.grid_size}, tile {result.tile_size}px")
        for entry in entries:
            r = entry.atlas_rect
            click.echo(f"  [{entry.original_index}] {entry.material.name}: "
                       f"x={r.x:.4f} y={r.y:.4f} w={r.width:.4f} h={r.height:.4f}")

    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValidationError as e:
        click.secho(f"Invalid scene: {e}", fg='red', err=True)
        sys.exit(1)
    except AtlasError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
