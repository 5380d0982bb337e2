"""
Next-fit shelf packing.

Rectangles go left to right on the current shelf, tallest first; a rectangle
that does not fit the shelf's remaining width opens a new shelf below it.
Shelves are never revisited, so the stack height can only stay the same or
drop as the canvas gets wider. That makes the verdict monotonic: if a canvas
fails, every canvas no larger in either axis fails too.
"""

from typing import List, Optional, Sequence, Tuple

from texpack.geometry import Rect, Size


def shelf_order(sizes: Sequence[Size]) -> List[int]:
    """Decreasing height, ties by decreasing width, then input order."""
    return sorted(
        range(len(sizes)),
        key=lambda i: (-sizes[i].height, -sizes[i].width, i)
    )


class ShelfPacker:
    """Packs rectangles row by row, keeping only the open shelf."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.shelf_y = 0
        self.shelf_height = 0
        self.cursor_x = 0

    def pack(self, width: int, height: int) -> Optional[Tuple[int, int]]:
        """Try to pack a rect. Returns (x, y) or None if it fails."""
        if width > self.width:
            return None

        if self.cursor_x + width > self.width:
            self.shelf_y += self.shelf_height
            self.cursor_x = 0
            self.shelf_height = 0

        if self.shelf_height == 0:
            self.shelf_height = height
        if self.shelf_y + self.shelf_height > self.height:
            return None

        x, y = self.cursor_x, self.shelf_y
        self.cursor_x += width
        return x, y


def shelf_pack(canvas_size: Size, sizes: Sequence[Size]) -> Optional[List[Rect]]:
    """Shelves as rows. Placements index-aligned with `sizes`, or None."""
    packer = ShelfPacker(canvas_size.width, canvas_size.height)
    placements: List[Optional[Rect]] = [None] * len(sizes)
    for index in shelf_order(sizes):
        size = sizes[index]
        pos = packer.pack(size.width, size.height)
        if pos is None:
            return None
        placements[index] = Rect.from_xywh(pos[0], pos[1], size.width, size.height)
    return placements


def shelf_pack_columns(canvas_size: Size, sizes: Sequence[Size]) -> Optional[List[Rect]]:
    """Shelves as columns: the row packing of the transposed problem."""
    transposed = shelf_pack(
        Size(canvas_size.height, canvas_size.width),
        [Size(s.height, s.width) for s in sizes]
    )
    if transposed is None:
        return None
    return [Rect.from_xywh(r.y, r.x, r.height, r.width) for r in transposed]
