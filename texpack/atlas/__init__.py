"""
Atlas assembly: the builder, the binary metadata format and the Pillow
collaborators for decoding, compositing and encoding.
"""
from .builder import AtlasBuilder, AtlasResult, CompositeInstruction, ImageDescriptor
from .metadata import AtlasMetadata, MetadataEntry

__all__ = [
    'AtlasBuilder',
    'AtlasResult',
    'CompositeInstruction',
    'ImageDescriptor',
    'AtlasMetadata',
    'MetadataEntry',
]
