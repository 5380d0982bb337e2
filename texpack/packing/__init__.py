"""
Rectangle packing: the MaxRects packer, the shelf packer that decides
feasibility, and the canvas size search driving them.
"""
from .maxrects import MaxRectsPacker, attempt, placement_order, split_free_rect
from .shelf import ShelfPacker, shelf_pack, shelf_pack_columns
from .search import PackResult, minimize_fit

__all__ = [
    'MaxRectsPacker',
    'attempt',
    'placement_order',
    'split_free_rect',
    'ShelfPacker',
    'shelf_pack',
    'shelf_pack_columns',
    'PackResult',
    'minimize_fit',
]
