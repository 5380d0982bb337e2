"""
Canvas size search.

Starts from the maximum bounds and greedily shrinks each axis by a fixed
step while everything still fits. Cheap and always safe, not optimal.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from texpack.geometry import Rect, Size
from texpack.packing.maxrects import attempt
from texpack.schema.options import DEFAULT_SHRINK_STEP

logger = logging.getLogger(__name__)


@dataclass
class PackResult:
    """
    Successful packing of every input.

    Attributes:
        canvas_size: Chosen canvas
        placements: Rects index-aligned with the input sizes
    """
    canvas_size: Size
    placements: List[Rect]


def _try_size(canvas_size: Size, sizes: Sequence[Size]) -> Optional[List[Rect]]:
    if canvas_size.width < 1 or canvas_size.height < 1:
        return None
    return attempt(canvas_size, sizes)


def minimize_fit(
    max_bounds: Size,
    sizes: Sequence[Size],
    step: int = DEFAULT_SHRINK_STEP
) -> Optional[PackResult]:
    """
    Find a small canvas, no larger than `max_bounds`, that fits every size.

    Args:
        max_bounds: Largest allowed canvas
        sizes: Rectangle sizes in caller order
        step: Amount each axis shrinks per trial

    Returns:
        PackResult for the last canvas that packed, or None if nothing fits
        even at `max_bounds`
    """
    if step <= 0:
        raise ValueError(f"Shrink step must be positive, got {step}")

    placements = _try_size(max_bounds, sizes)
    if placements is None:
        logger.debug(f"{len(sizes)} rects do not fit in {max_bounds.width}x{max_bounds.height}")
        return None

    canvas = max_bounds
    trials = 1
    shrunk, shrink_x, shrink_y = True, True, True
    while shrunk:
        shrunk = False
        if shrink_x:
            trial = Size(canvas.width - step, canvas.height)
            trial_placements = _try_size(trial, sizes)
            trials += 1
            if trial_placements is not None:
                canvas, placements, shrunk = trial, trial_placements, True
            else:
                shrink_x = False

        if shrink_y:
            trial = Size(canvas.width, canvas.height - step)
            trial_placements = _try_size(trial, sizes)
            trials += 1
            if trial_placements is not None:
                canvas, placements, shrunk = trial, trial_placements, True
            else:
                shrink_y = False

    logger.debug(f"Settled on {canvas.width}x{canvas.height} after {trials} packing attempts")
    return PackResult(canvas_size=canvas, placements=placements)
