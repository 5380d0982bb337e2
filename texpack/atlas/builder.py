"""
Atlas builder.

Collects image descriptors, runs the canvas size search over their sizes,
and turns the placements into metadata entries plus compositing
instructions. Pixel data is never touched here: each descriptor carries an
opaque `pixel_source` that is handed back to the compositor untouched.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from texpack.atlas.metadata import AtlasMetadata, MetadataEntry
from texpack.exceptions import HashCollisionError, InvalidInputError, PackingInfeasibleError
from texpack.geometry import Rect, Size
from texpack.hashing import normalize_path, path_hash
from texpack.packing.search import minimize_fit
from texpack.schema.options import PackOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageDescriptor:
    """
    An accepted input image.

    Attributes:
        path: Normalized relative path (the string that gets hashed)
        key: 32-bit path hash
        size: Image size in pixels
        pixel_source: Opaque handle owned by the image loader
    """
    path: str
    key: int
    size: Size
    pixel_source: Any = None


@dataclass(frozen=True)
class CompositeInstruction:
    """Copy `pixel_source` into the atlas at `rect`."""
    pixel_source: Any
    rect: Rect


@dataclass
class AtlasResult:
    """
    Output of a successful build.

    Attributes:
        canvas_size: Atlas size chosen by the search
        metadata: Key -> rect table in insertion order
        instructions: Compositing work for the raster stage, in insertion order
    """
    canvas_size: Size
    metadata: AtlasMetadata
    instructions: List[CompositeInstruction]


class AtlasBuilder:
    """
    Single-use builder for one atlas.

    Example:
        >>> builder = AtlasBuilder(PackOptions(max_size=128))
        >>> _ = builder.add("icons/a.png", Size(64, 64))
        >>> _ = builder.add("icons/b.png", Size(32, 32))
        >>> result = builder.build()
        >>> result.metadata.entry_count
        2
    """

    def __init__(
        self,
        options: Optional[PackOptions] = None,
        hasher: Callable[[str], int] = path_hash
    ):
        self.options = options or PackOptions()
        self.hasher = hasher
        self._descriptors: List[ImageDescriptor] = []
        self._paths = set()
        self._keys: Dict[int, str] = {}

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def descriptors(self) -> Sequence[ImageDescriptor]:
        return tuple(self._descriptors)

    def add(self, path: str, size: Size, pixel_source: Any = None) -> ImageDescriptor:
        """
        Accept an image for packing.

        Args:
            path: Source path; made relative to options.strip_prefix before hashing
            size: Decoded image size
            pixel_source: Handle passed through to the compositing instructions

        Raises:
            InvalidInputError: Zero-area image or a path that was already added
            HashCollisionError: A different path already produced the same key
        """
        relpath = normalize_path(path, self.options.strip_prefix)

        if size.width <= 0 or size.height <= 0:
            raise InvalidInputError(f"Image {relpath} has zero area ({size.width}x{size.height})")
        if relpath in self._paths:
            raise InvalidInputError(f"Duplicate source image: {relpath}")

        key = self.hasher(relpath)
        if key in self._keys:
            raise HashCollisionError(self._keys[key], relpath, key)

        descriptor = ImageDescriptor(path=relpath, key=key, size=size, pixel_source=pixel_source)
        self._descriptors.append(descriptor)
        self._paths.add(relpath)
        self._keys[key] = relpath
        logger.debug(f"Added [{key:08x}] {relpath} ({size.width}x{size.height})")
        return descriptor

    def build(self) -> AtlasResult:
        """
        Pack every added image.

        Raises:
            InvalidInputError: Nothing was added
            PackingInfeasibleError: The images do not fit within options.max_bounds
        """
        if not self._descriptors:
            raise InvalidInputError("No input images were specified")

        max_bounds = self.options.max_bounds
        sizes = [d.size for d in self._descriptors]
        result = minimize_fit(max_bounds, sizes, self.options.shrink_step)
        if result is None:
            raise PackingInfeasibleError(max_bounds, len(sizes))

        entries = []
        instructions = []
        for descriptor, rect in zip(self._descriptors, result.placements):
            entries.append(MetadataEntry(descriptor.key, rect))
            instructions.append(CompositeInstruction(descriptor.pixel_source, rect))

        canvas = result.canvas_size
        logger.info(f"Packed {len(entries)} images into {canvas.width}x{canvas.height} atlas")
        return AtlasResult(
            canvas_size=canvas,
            metadata=AtlasMetadata(entries),
            instructions=instructions
        )
