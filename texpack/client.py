"""
Core texpack client API

Provides the TexPacker class for collecting image files and the PackedAtlas
class for writing the atlas image and its metadata side file.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from PIL import Image

from texpack.atlas.builder import AtlasBuilder
from texpack.atlas.imaging import composite, encode_atlas, image_size, load_image
from texpack.atlas.metadata import AtlasMetadata
from texpack.exceptions import AtlasIOError
from texpack.geometry import Size
from texpack.schema.options import PackOptions

logger = logging.getLogger(__name__)

METADATA_SUFFIX = '.atlas'

_FORMATS_BY_EXTENSION = {
    'png': 'PNG',
    'gif': 'GIF',
    'jpg': 'JPEG',
    'jpeg': 'JPEG',
    'webp': 'WEBP',
    'bmp': 'BMP',
    'tga': 'TGA',
}


def metadata_path_for(output_path: str) -> str:
    """Metadata is written next to the atlas as `<output>.atlas`."""
    return output_path + METADATA_SUFFIX


def _write_temp(out_path: str, payload: bytes) -> str:
    """Write `payload` to a new temporary file in the directory of `out_path`."""
    directory = os.path.dirname(os.path.abspath(out_path))
    fd, temp_path = tempfile.mkstemp(prefix='.texpack-', suffix='.tmp', dir=directory)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(payload)
    except OSError:
        Path(temp_path).unlink(missing_ok=True)
        raise
    return temp_path


@dataclass
class PackedAtlas:
    """
    A packed atlas ready to be written.

    Attributes:
        canvas_size: Atlas dimensions
        metadata: Key -> rect table
        image: Composited RGBA atlas
    """
    canvas_size: Size
    metadata: AtlasMetadata
    image: Image.Image

    def save(self, path: str, filetype: Optional[str] = None) -> None:
        """
        Write the atlas image to `path` and its metadata to `path + '.atlas'`.

        Args:
            path: Output image path
            filetype: Pillow format name. If None, inferred from file extension.

        Both payloads are encoded and written to temporary files beside the
        outputs, then moved into place. If any step fails, neither output is
        left behind.
        """
        if filetype is None:
            filetype = self._infer_filetype(path)

        image = self.image
        if filetype == 'JPEG':
            image = image.convert('RGB')
        image_bytes = encode_atlas(image, filetype)
        metadata_bytes = self.metadata.to_bytes()

        meta_path = metadata_path_for(path)
        outputs = ((path, image_bytes), (meta_path, metadata_bytes))
        staged = []
        placed = []
        out_path = path
        try:
            for out_path, payload in outputs:
                staged.append((out_path, _write_temp(out_path, payload)))
            for out_path, temp_path in staged:
                os.replace(temp_path, out_path)
                placed.append(out_path)
        except OSError as e:
            for _, temp_path in staged:
                Path(temp_path).unlink(missing_ok=True)
            for done in placed:
                Path(done).unlink(missing_ok=True)
            raise AtlasIOError(out_path, f"cannot write output ({e})") from e

        logger.info(f"Wrote {path} ({self.canvas_size.width}x{self.canvas_size.height}) and {meta_path}")

    @staticmethod
    def _infer_filetype(path: str) -> str:
        """Infer Pillow format from extension"""
        ext = path.split('.')[-1].lower()
        if ext in _FORMATS_BY_EXTENSION:
            return _FORMATS_BY_EXTENSION[ext]
        raise ValueError(
            f"Cannot infer filetype from extension: {ext}. "
            f"Supported: {', '.join('.' + e for e in _FORMATS_BY_EXTENSION)}"
        )


class TexPacker:
    """
    Collects image files and packs them into one atlas.

    Examples:
        >>> packer = TexPacker(max_size=1024)
        >>> packer.add("sprites/player.png")
        >>> packer.add("sprites/enemy.png")
        >>> packer.pack().save("atlas.png")   # writes atlas.png + atlas.png.atlas
    """

    def __init__(self, options: Optional[PackOptions] = None, **overrides):
        """
        Args:
            options: Packing options
            **overrides: PackOptions fields, applied on top of `options`
        """
        if options is None:
            options = PackOptions(**overrides)
        elif overrides:
            options = PackOptions(**{**options.model_dump(), **overrides})
        self.options = options
        self.builder = AtlasBuilder(options)

    def add(self, path: str) -> None:
        """Decode an image file and queue it for packing."""
        self.add_image(path, load_image(path))

    def add_image(self, path: str, image: Image.Image) -> None:
        """Queue an already decoded image under `path`."""
        self.builder.add(path, image_size(image), image)

    def pack(self) -> PackedAtlas:
        """
        Pack all queued images.

        Raises:
            InvalidInputError: Nothing to pack
            PackingInfeasibleError: Images exceed the configured bounds
        """
        result = self.builder.build()
        atlas = composite(result.canvas_size, result.instructions)
        return PackedAtlas(
            canvas_size=result.canvas_size,
            metadata=result.metadata,
            image=atlas
        )


def pack_files(
    paths: Iterable[str],
    output_path: str,
    options: Optional[PackOptions] = None
) -> PackedAtlas:
    """
    Pack image files into `output_path` and `output_path + '.atlas'`.

    Nothing is written unless every image loads and packing succeeds.

    Example:
        >>> pack_files(["a.png", "b.png"], "out.png", PackOptions(max_size=512))
    """
    packer = TexPacker(options)
    for path in paths:
        packer.add(path)
    packed = packer.pack()
    packed.save(output_path)
    return packed
