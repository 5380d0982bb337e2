"""
texpack Quick Start Example

Packs every PNG in a directory into one atlas and looks one sprite up again.
"""

import glob
import os
import sys

from texpack import TexPacker, AtlasMetadata

sprite_dir = sys.argv[1] if len(sys.argv) > 1 else "sprites"

packer = TexPacker(max_size=2048, strip_prefix=sprite_dir)
for path in sorted(glob.glob(f"{sprite_dir}/**/*.png", recursive=True)):
    packer.add(path)

packed = packer.pack()
os.makedirs("output", exist_ok=True)
packed.save("output/atlas.png")
print(f"✅ Saved {packed.canvas_size.width}x{packed.canvas_size.height} atlas to output/atlas.png")

# What a runtime loader does with the side file
with open("output/atlas.png.atlas", "rb") as f:
    metadata = AtlasMetadata.read(f)
for entry in metadata:
    print(f"[{entry.key:08x}] {entry.rect.x},{entry.rect.y} {entry.rect.width}x{entry.rect.height}")
