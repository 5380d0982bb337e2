"""
texpack Advanced Example

Drives the packing core directly: sizes and opaque handles go in, placements
and a metadata blob come out, and compositing is left to the caller.
"""

from texpack import AtlasBuilder, PackOptions
from texpack.packing import minimize_fit
from texpack.geometry import Size

# Search only: which canvas do these sizes need?
sizes = [Size(64, 64), Size(32, 32), Size(16, 16)]
result = minimize_fit(Size(512, 512), sizes, step=32)
print(f"Canvas: {result.canvas_size.width}x{result.canvas_size.height}")
for size, rect in zip(sizes, result.placements):
    print(f"  {size.width}x{size.height} -> ({rect.x}, {rect.y})")

# Full build with handles owned by some other decoder
builder = AtlasBuilder(PackOptions(max_size=256, shrink_step=16))
builder.add("fonts/glyphs.bin", Size(128, 32), pixel_source="glyph-buffer-0")
builder.add("ui/cursor.bin", Size(12, 20), pixel_source="cursor-buffer")
atlas = builder.build()

print("\n--- Compositing instructions ---")
for instruction in atlas.instructions:
    print(f"  {instruction.pixel_source} -> {instruction.rect.to_box()}")

blob = atlas.metadata.to_bytes()
print(f"\nMetadata: {len(blob)} bytes, {atlas.metadata.entry_count} entries")
