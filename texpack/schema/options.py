"""
Packing options.

MAX_DIMENSION comes from the metadata format: origins and sizes are stored
as u16, so no canvas axis may exceed 65535 pixels.
"""

from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from texpack.geometry import Size

MAX_DIMENSION = 0xFFFF
DEFAULT_MAX_SIZE = 4096
DEFAULT_SHRINK_STEP = 128


class PackOptions(BaseModel):
    """
    Configuration for one atlas build.

    Per-axis limits fall back to max_size when unset.
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    max_size: int = Field(DEFAULT_MAX_SIZE, ge=1, le=MAX_DIMENSION, description="Max width/height of the atlas in pixels.")
    max_width: Optional[int] = Field(None, ge=1, le=MAX_DIMENSION, description="Width limit overriding max_size.")
    max_height: Optional[int] = Field(None, ge=1, le=MAX_DIMENSION, description="Height limit overriding max_size.")
    shrink_step: int = Field(DEFAULT_SHRINK_STEP, ge=1, description="Pixels removed from an axis per search trial.")
    strip_prefix: Optional[str] = Field(None, description="Prefix stripped from image paths before hashing.")

    @field_validator('strip_prefix')
    @classmethod
    def validate_prefix(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @property
    def max_bounds(self) -> Size:
        return Size(self.max_width or self.max_size, self.max_height or self.max_size)
