"""
texpack CLI - Command-line interface for packing texture atlases
"""

import logging
import os
import sys

import click
from pydantic import ValidationError

from texpack import __version__
from texpack.atlas.metadata import AtlasMetadata
from texpack.client import TexPacker, metadata_path_for
from texpack.exceptions import (
    AtlasIOError,
    HashCollisionError,
    InvalidInputError,
    MetadataFormatError,
    PackingInfeasibleError,
)
from texpack.hashing import format_key, normalize_path, path_hash
from texpack.schema.options import PackOptions, DEFAULT_MAX_SIZE, DEFAULT_SHRINK_STEP


def _fail(prefix: str, error) -> None:
    click.secho(f"{prefix}: {error}", fg='red', err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    texpack - Pack images into a texture atlas with a binary lookup table.

    Examples:
        texpack pack sprites/*.png -o atlas.png
        texpack inspect atlas.png.atlas
    """
    pass


@cli.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option('-o', '--output', default='out.png', show_default=True, help='Output atlas image (metadata goes to <output>.atlas)')
@click.option('--max-size', default=DEFAULT_MAX_SIZE, show_default=True, type=int, envvar='TEXPACK_MAX_SIZE',
              help='Max size (width/height) of output texture in pixels')
@click.option('--prefix', default=None, envvar='TEXPACK_PREFIX',
              help='Prefix to strip from file paths for hashing [default: current directory]')
@click.option('--step', default=DEFAULT_SHRINK_STEP, show_default=True, type=int,
              help='Pixels to shrink the canvas by per search trial')
@click.option('--verbose', '-v', is_flag=True, help='Show packing details')
def pack(files, output, max_size, prefix, step, verbose):
    """
    Pack image files into one atlas.

    Supported input formats: PNG, JPEG, GIF

    Examples:
        texpack pack a.png b.png -o atlas.png
        texpack pack icons/*.png -o ui.png --max-size 1024 --prefix icons
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s"
    )
    try:
        options = PackOptions(
            max_size=max_size,
            shrink_step=step,
            strip_prefix=prefix or os.getcwd()
        )
        packer = TexPacker(options)
        for path in files:
            if verbose:
                click.echo(f"Adding: {path}")
            packer.add(path)

        packed = packer.pack()
        packed.save(output)

        if verbose:
            click.echo(f"Atlas: {packed.canvas_size.width}x{packed.canvas_size.height}, {len(packed.metadata)} images")
        click.secho(f"✓ Success! Atlas saved to {output} ({metadata_path_for(output)})", fg='green')

    except ValidationError as e:
        _fail("Invalid options", e)
    except InvalidInputError as e:
        _fail("Invalid input", e)
    except HashCollisionError as e:
        _fail("Hash collision", e)
    except PackingInfeasibleError as e:
        _fail("Packing failed", e)
    except AtlasIOError as e:
        _fail("I/O error", e)
    except ValueError as e:
        _fail("Error", e)


@cli.command()
@click.argument('metadata_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--lookup', 'lookup_path', default=None, help='Logical path to look up instead of listing all entries')
def inspect(metadata_path, lookup_path):
    """
    Show the entries of a metadata file.

    Examples:
        texpack inspect atlas.png.atlas
        texpack inspect atlas.png.atlas --lookup sprites/player.png
    """
    try:
        with open(metadata_path, 'rb') as f:
            metadata = AtlasMetadata.read(f)
    except MetadataFormatError as e:
        _fail("Invalid metadata", e)
    except OSError as e:
        _fail("I/O error", e)

    if lookup_path is not None:
        relpath = normalize_path(lookup_path)
        rect = metadata.lookup(relpath)
        if rect is None:
            _fail("Not found", f"[{format_key(path_hash(relpath))}] {relpath}")
        click.echo(f"[{format_key(path_hash(relpath))}] {rect.x},{rect.y} {rect.width}x{rect.height}")
        return

    click.echo(f"{len(metadata)} entries")
    for entry in metadata:
        rect = entry.rect
        click.echo(f"[{format_key(entry.key)}] {rect.x},{rect.y} {rect.width}x{rect.height}")


@cli.command(name='hash')
@click.argument('paths', nargs=-1, required=True)
def hash_paths(paths):
    """
    Print the metadata key of each logical path.

    Example:
        texpack hash sprites/player.png
    """
    for path in paths:
        relpath = normalize_path(path)
        click.echo(f"{format_key(path_hash(relpath))}  {relpath}")


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
