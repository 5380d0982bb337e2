"""
Path hashing for atlas metadata keys.

Keys are 32-bit FNV-1a digests of the UTF-8 encoded relative path. The runtime
loader hashes requested paths with the same function, so the algorithm and
its width are part of the metadata wire contract.
"""

import os

FNV32_OFFSET_BASIS = 0x811C9DC5
FNV32_PRIME = 0x01000193
HASH_MASK = 0xFFFFFFFF


def path_hash(relative_path: str) -> int:
    """
    Hash a normalized relative path to a 32-bit unsigned key.

    Args:
        relative_path: Path already made relative to the caller's root and
                       normalized (see normalize_path)

    Returns:
        Unsigned 32-bit integer key

    Example:
        >>> f"{path_hash('foobar'):08x}"
        'bf9cf968'
    """
    value = FNV32_OFFSET_BASIS
    for byte in relative_path.encode('utf-8', 'surrogateescape'):
        value ^= byte
        value = (value * FNV32_PRIME) & HASH_MASK
    return value


def normalize_path(path: str, prefix: str = None) -> str:
    """
    Make `path` relative to `prefix` and use forward slashes.

    Case is left untouched. No filesystem access happens here beyond what
    os.path does with the strings themselves.
    """
    if prefix:
        path = os.path.relpath(path, prefix)
    else:
        path = os.path.normpath(path)
    return path.replace(os.sep, '/').replace('\\', '/')


def format_key(key: int) -> str:
    """Render a key the way error messages and the CLI print it."""
    return f"{key:08x}"
