"""
Pillow-backed image collaborators: decoding inputs, compositing the atlas
and encoding it. The packing core never imports this module.
"""

import logging
from io import BytesIO
from typing import Iterable

from PIL import Image, UnidentifiedImageError

from texpack.atlas.builder import CompositeInstruction
from texpack.exceptions import AtlasIOError, InvalidInputError
from texpack.geometry import Size

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('PNG', 'JPEG', 'GIF')


def load_image(path: str) -> Image.Image:
    """
    Decode an input image into RGBA.

    Args:
        path: Image file path

    Returns:
        Fully loaded RGBA image

    Raises:
        AtlasIOError: File missing, unreadable or not an image
        InvalidInputError: Decodable, but not one of SUPPORTED_FORMATS
    """
    try:
        with Image.open(path) as img:
            fmt = img.format
            if fmt not in SUPPORTED_FORMATS:
                raise InvalidInputError(f"Unsupported input format {fmt}: {path}")
            rgba = img.convert('RGBA')
    except UnidentifiedImageError as e:
        raise AtlasIOError(path, "not a recognized image file") from e
    except OSError as e:
        raise AtlasIOError(path, f"cannot open input file ({e})") from e

    logger.debug(f"Loaded {path} ({fmt}, {rgba.width}x{rgba.height})")
    return rgba


def image_size(image: Image.Image) -> Size:
    return Size(image.width, image.height)


def composite(canvas_size: Size, instructions: Iterable[CompositeInstruction]) -> Image.Image:
    """
    Paste every source image at its destination rect on a transparent canvas.
    """
    atlas = Image.new('RGBA', (canvas_size.width, canvas_size.height), (0, 0, 0, 0))
    for instruction in instructions:
        source = instruction.pixel_source
        if source.mode != 'RGBA':
            source = source.convert('RGBA')
        atlas.paste(source, instruction.rect.to_box())
    return atlas


def encode_atlas(atlas: Image.Image, fmt: str = 'PNG') -> bytes:
    """Encode the composited atlas in memory."""
    buf = BytesIO()
    atlas.save(buf, format=fmt)
    return buf.getvalue()
