"""
Binary atlas metadata.

Layout (big-endian):

    Entry Count        [4B]  u32
    Entry0             [12B] u32 path hash, u16 x, u16 y, u16 width, u16 height
    ...

Entries keep the input image order; they are not sorted by hash.
"""

import logging
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Iterator, List, Optional

from texpack.exceptions import MetadataFormatError
from texpack.geometry import Rect
from texpack.hashing import path_hash

logger = logging.getLogger(__name__)

HEADER = struct.Struct('>I')
ENTRY = struct.Struct('>IHHHH')

U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class MetadataEntry:
    """One image: its path key and where it sits in the atlas."""
    key: int
    rect: Rect

    def to_bytes(self) -> bytes:
        if not 0 <= self.key <= U32_MAX:
            raise ValueError(f"Key {self.key} does not fit in 32 bits")
        fields = (self.rect.x, self.rect.y, self.rect.width, self.rect.height)
        if any(not 0 <= v <= U16_MAX for v in fields):
            raise ValueError(f"Rect {fields} does not fit in 16-bit fields")
        return ENTRY.pack(self.key, *fields)


@dataclass(frozen=True)
class AtlasMetadata:
    """Key -> rect table written next to the atlas image."""
    entries: List[MetadataEntry] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    @property
    def byte_size(self) -> int:
        return HEADER.size + ENTRY.size * len(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[MetadataEntry]:
        return iter(self.entries)

    def to_bytes(self) -> bytes:
        if len(self.entries) > U32_MAX:
            raise ValueError(f"Too many entries: {len(self.entries)}")
        return HEADER.pack(len(self.entries)) + b''.join(e.to_bytes() for e in self.entries)

    def write(self, stream: BinaryIO) -> int:
        data = self.to_bytes()
        stream.write(data)
        return len(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "AtlasMetadata":
        """
        Parse a metadata blob.

        Raises:
            MetadataFormatError: If the blob is truncated or has trailing bytes
        """
        if len(data) < HEADER.size:
            raise MetadataFormatError(f"Metadata too short: {len(data)} bytes")
        (count,) = HEADER.unpack_from(data, 0)
        expected = HEADER.size + ENTRY.size * count
        if len(data) != expected:
            raise MetadataFormatError(
                f"Metadata declares {count} entries ({expected} bytes) but has {len(data)} bytes"
            )
        entries = []
        for offset in range(HEADER.size, expected, ENTRY.size):
            key, x, y, w, h = ENTRY.unpack_from(data, offset)
            entries.append(MetadataEntry(key, Rect.from_xywh(x, y, w, h)))
        return cls(entries)

    @classmethod
    def read(cls, stream: BinaryIO) -> "AtlasMetadata":
        return cls.from_bytes(stream.read())

    def find(self, key: int) -> Optional[Rect]:
        for entry in self.entries:
            if entry.key == key:
                return entry.rect
        return None

    def lookup(self, relative_path: str, hasher: Callable[[str], int] = path_hash) -> Optional[Rect]:
        """
        Find an image's rect by its logical path, as a runtime loader would.

        Args:
            relative_path: Path normalized the same way it was at pack time
            hasher: Key function; must match the one used at pack time
        """
        return self.find(hasher(relative_path))
