"""
Integer geometry primitives shared by the packer, the search and the metadata writer.

All coordinates use a top-left origin; a Rect covers the half-open ranges
[x, x + width) and [y, y + height).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    """Width/height pair in pixels."""
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def __iter__(self):
        yield self.width
        yield self.height


@dataclass(frozen=True)
class Point:
    """Top-left anchored position in pixels."""
    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle placed on a canvas.

    Attributes:
        origin: Top-left corner
        size: Extent from the origin
    """
    origin: Point
    size: Size

    @classmethod
    def from_xywh(cls, x: int, y: int, width: int, height: int) -> "Rect":
        return cls(Point(x, y), Size(width, height))

    @property
    def x(self) -> int:
        return self.origin.x

    @property
    def y(self) -> int:
        return self.origin.y

    @property
    def width(self) -> int:
        return self.size.width

    @property
    def height(self) -> int:
        return self.size.height

    @property
    def right(self) -> int:
        return self.origin.x + self.size.width

    @property
    def bottom(self) -> int:
        return self.origin.y + self.size.height

    @property
    def area(self) -> int:
        return self.size.area

    def contains(self, other: "Rect") -> bool:
        """True if `other` lies entirely inside this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersection_area(self, other: "Rect") -> int:
        overlap_w = min(self.right, other.right) - max(self.x, other.x)
        overlap_h = min(self.bottom, other.bottom) - max(self.y, other.y)
        if overlap_w <= 0 or overlap_h <= 0:
            return 0
        return overlap_w * overlap_h

    def intersects(self, other: "Rect") -> bool:
        return self.intersection_area(other) > 0

    def fits_within(self, canvas: Size) -> bool:
        """True if the rectangle lies inside [0, canvas.width) x [0, canvas.height)."""
        return (
            self.x >= 0
            and self.y >= 0
            and self.right <= canvas.width
            and self.bottom <= canvas.height
        )

    def to_box(self):
        """(left, upper, right, lower) tuple as Pillow expects it."""
        return (self.x, self.y, self.right, self.bottom)
