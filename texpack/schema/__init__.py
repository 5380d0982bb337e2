"""Configuration schema definitions."""
from .options import PackOptions, MAX_DIMENSION, DEFAULT_MAX_SIZE, DEFAULT_SHRINK_STEP

__all__ = [
    "PackOptions",
    "MAX_DIMENSION",
    "DEFAULT_MAX_SIZE",
    "DEFAULT_SHRINK_STEP",
]
