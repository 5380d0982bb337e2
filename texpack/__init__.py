"""
texpack - Pack many small images into one texture atlas

Produces the atlas image plus a compact binary table mapping each source
image's path hash to its rectangle inside the atlas.
"""

from texpack.client import TexPacker, PackedAtlas, pack_files
from texpack.atlas import AtlasBuilder, AtlasMetadata
from texpack.hashing import path_hash
from texpack.schema import PackOptions

__version__ = "0.1.0"
__all__ = ["TexPacker", "PackedAtlas", "pack_files", "AtlasBuilder", "AtlasMetadata", "path_hash", "PackOptions"]
