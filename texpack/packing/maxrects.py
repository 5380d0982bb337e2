"""
MaxRects rectangle packer.

Places rectangles into a fixed-size canvas:
- larger rectangles first (area, then longest side)
- best-area-fit over the free list, ties on leftover perimeter, then first found
- the free list holds maximal free rectangles: every free rectangle the
  placement overlaps is split into the strips left, right, above and below it
- free rectangles contained in another one are pruned after every insertion

Rotation is never attempted. A packer instance owns its free list and is
meant for exactly one attempt.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from texpack.geometry import Point, Rect, Size
from texpack.packing.shelf import shelf_pack, shelf_pack_columns

logger = logging.getLogger(__name__)


def placement_order(sizes: Sequence[Size]) -> List[int]:
    """
    Indices of `sizes` in the order they get placed.

    Decreasing area, ties by decreasing longest side, then input order.
    """
    return sorted(
        range(len(sizes)),
        key=lambda i: (-sizes[i].area, -max(sizes[i].width, sizes[i].height), i)
    )


def split_free_rect(free: Rect, used: Rect) -> List[Rect]:
    """
    Parts of `free` not covered by `used`, as maximal strips.

    Strips overlap each other; each one spans the full extent of `free`
    along the cut. When `used` sits at the top-left corner of `free` this
    leaves a right strip of full free height and a bottom strip of full
    free width.
    """
    if not free.intersects(used):
        return [free]

    pieces = []
    if used.x > free.x:
        pieces.append(Rect.from_xywh(free.x, free.y, used.x - free.x, free.height))
    if used.right < free.right:
        pieces.append(Rect.from_xywh(used.right, free.y, free.right - used.right, free.height))
    if used.y > free.y:
        pieces.append(Rect.from_xywh(free.x, free.y, free.width, used.y - free.y))
    if used.bottom < free.bottom:
        pieces.append(Rect.from_xywh(free.x, used.bottom, free.width, free.bottom - used.bottom))
    return pieces


class MaxRectsPacker:
    """
    Packs rectangles into a single canvas.

    Example:
        >>> packer = MaxRectsPacker(Size(128, 128))
        >>> rects = packer.attempt([Size(32, 32), Size(64, 64)])
        >>> rects[1]
        Rect(origin=Point(x=0, y=0), size=Size(width=64, height=64))
    """

    def __init__(self, canvas_size: Size):
        self.canvas_size = canvas_size
        self.free_rects: List[Rect] = []
        self.used_rects: List[Rect] = []
        if canvas_size.width > 0 and canvas_size.height > 0:
            self.free_rects.append(Rect(Point(0, 0), canvas_size))

    def attempt(self, sizes: Sequence[Size]) -> Optional[List[Rect]]:
        """
        Place every size or none of them.

        Args:
            sizes: Rectangle sizes in the caller's order

        Returns:
            Placements index-aligned with `sizes`, or None if any size
            does not fit
        """
        placements: List[Optional[Rect]] = [None] * len(sizes)
        for index in placement_order(sizes):
            rect = self.insert(sizes[index])
            if rect is None:
                return None
            placements[index] = rect
        return placements

    def insert(self, size: Size) -> Optional[Rect]:
        """Place one rectangle, updating the free list. None if it does not fit."""
        if size.width <= 0 or size.height <= 0:
            return None

        best_index = self._find_best_fit(size)
        if best_index is None:
            return None

        placed = Rect(self.free_rects[best_index].origin, size)
        free_rects = []
        for free in self.free_rects:
            free_rects.extend(split_free_rect(free, placed))
        self.free_rects = free_rects
        self._prune()
        self.used_rects.append(placed)
        return placed

    def _find_best_fit(self, size: Size) -> Optional[int]:
        best_index = None
        best_score: Optional[Tuple[int, int]] = None
        for index, free in enumerate(self.free_rects):
            if size.width > free.width or size.height > free.height:
                continue
            leftover_w = free.width - size.width
            leftover_h = free.height - size.height
            score = (free.area - size.area, 2 * (leftover_w + leftover_h))
            # Strict comparison keeps the first found on ties
            if best_score is None or score < best_score:
                best_index, best_score = index, score
        return best_index

    def _prune(self) -> None:
        """Drop free rectangles fully contained in another free rectangle."""
        rects = self.free_rects
        i = 0
        while i < len(rects):
            removed = False
            j = i + 1
            while j < len(rects):
                if rects[j].contains(rects[i]):
                    del rects[i]
                    removed = True
                    break
                if rects[i].contains(rects[j]):
                    del rects[j]
                else:
                    j += 1
            if not removed:
                i += 1


def attempt(canvas_size: Size, sizes: Sequence[Size]) -> Optional[List[Rect]]:
    """
    Run one packing attempt on a fresh canvas.

    Whether the attempt succeeds is decided by shelf packing (rows or
    columns), which never succeeds on a canvas after failing on a larger
    one. When it succeeds, the MaxRects layout is returned if MaxRects also
    places everything, otherwise the shelf layout.

    Returns:
        Placements index-aligned with `sizes`, or None
    """
    if canvas_size.width <= 0 or canvas_size.height <= 0:
        return None
    if any(size.width <= 0 or size.height <= 0 for size in sizes):
        return None

    fallback = shelf_pack(canvas_size, sizes)
    if fallback is None:
        fallback = shelf_pack_columns(canvas_size, sizes)
    if fallback is None:
        logger.debug(f"{len(sizes)} rects do not fit {canvas_size.width}x{canvas_size.height}")
        return None

    placements = MaxRectsPacker(canvas_size).attempt(sizes)
    if placements is None:
        logger.debug(f"MaxRects missed a fit on {canvas_size.width}x{canvas_size.height}, using shelves")
        return fallback
    return placements
