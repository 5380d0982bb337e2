"""Custom exceptions for atlas packing"""

from texpack.hashing import format_key


class TexPackError(Exception):
    """Base exception for texpack errors"""
    pass


class InvalidInputError(TexPackError):
    """Rejected input image (zero area, duplicate path, nothing to pack)"""
    pass


class HashCollisionError(TexPackError):
    """Two distinct paths produced the same metadata key"""

    def __init__(self, first_path: str, second_path: str, key: int):
        self.first_path = first_path
        self.second_path = second_path
        self.key = key
        super().__init__(
            "Hash conflict detected between the following files:\n"
            f"    [{format_key(key)}] {first_path}\n"
            f"    [{format_key(key)}] {second_path}"
        )


class PackingInfeasibleError(TexPackError):
    """No canvas up to the configured bounds fits every image"""

    def __init__(self, max_bounds, count: int):
        self.max_bounds = max_bounds
        self.count = count
        super().__init__(
            f"Couldn't pack all {count} images in {max_bounds.width}x{max_bounds.height} bounds"
        )


class AtlasIOError(TexPackError):
    """Decode, encode or write failure at the file boundary"""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class MetadataFormatError(TexPackError, ValueError):
    """Malformed metadata blob"""
    pass
