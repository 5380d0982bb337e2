"""
Tests for the Pillow collaborators and the TexPacker client
"""
import os
import tempfile

import numpy as np
import pytest
from PIL import Image

from texpack import TexPacker, PackOptions, pack_files, path_hash
from texpack.atlas.builder import CompositeInstruction
from texpack.atlas.imaging import composite, load_image
from texpack.atlas.metadata import AtlasMetadata
from texpack.client import PackedAtlas, metadata_path_for
from texpack.exceptions import AtlasIOError, InvalidInputError, PackingInfeasibleError
from texpack.geometry import Rect, Size


def solid(width, height, color):
    return Image.new('RGBA', (width, height), color)


def write_image(directory, name, width, height, color, fmt='PNG'):
    path = os.path.join(directory, name)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    img = solid(width, height, color)
    if fmt == 'JPEG':
        img = img.convert('RGB')
    img.save(path, format=fmt)
    return path


class TestImaging:
    """Decoding and compositing"""

    def test_load_converts_to_rgba(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_image(tmpdir, "a.jpg", 8, 4, (255, 0, 0, 255), fmt='JPEG')
            img = load_image(path)
            assert img.mode == 'RGBA'
            assert img.size == (8, 4)

    def test_missing_file(self):
        with pytest.raises(AtlasIOError) as exc_info:
            load_image("/nonexistent/file.png")
        assert exc_info.value.path == "/nonexistent/file.png"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_not_an_image(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "notes.png")
            with open(path, 'w') as f:
                f.write("not an image")
            with pytest.raises(AtlasIOError, match="notes.png"):
                load_image(path)

    def test_unsupported_format(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_image(tmpdir, "a.bmp", 4, 4, (0, 0, 0, 255), fmt='BMP')
            with pytest.raises(InvalidInputError, match="BMP"):
                load_image(path)

    def test_composite_places_pixels(self):
        red = solid(4, 4, (255, 0, 0, 255))
        blue = solid(2, 3, (0, 0, 255, 255))
        atlas = composite(Size(8, 8), [
            CompositeInstruction(red, Rect.from_xywh(0, 0, 4, 4)),
            CompositeInstruction(blue, Rect.from_xywh(4, 0, 2, 3)),
        ])
        pixels = np.array(atlas)
        assert pixels.shape == (8, 8, 4)
        assert (pixels[0:4, 0:4] == [255, 0, 0, 255]).all()
        assert (pixels[0:3, 4:6] == [0, 0, 255, 255]).all()
        assert (pixels[4:, :, 3] == 0).all()


class TestTexPacker:
    """High level packing of image files"""

    def test_option_overrides(self):
        packer = TexPacker(PackOptions(max_size=256), shrink_step=32)
        assert packer.options.max_size == 256
        assert packer.options.shrink_step == 32

    def test_pack_in_memory_images(self):
        packer = TexPacker(max_size=128)
        packer.add_image("big.png", solid(64, 64, (255, 0, 0, 255)))
        packer.add_image("small.png", solid(16, 16, (0, 255, 0, 255)))
        packed = packer.pack()

        assert packed.image.size == (packed.canvas_size.width, packed.canvas_size.height)
        pixels = np.array(packed.image)
        rect = packed.metadata.lookup("small.png")
        region = pixels[rect.y:rect.bottom, rect.x:rect.right]
        assert (region == [0, 255, 0, 255]).all()

    def test_save_writes_image_and_metadata(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            a = write_image(tmpdir, "sprites/a.png", 64, 64, (255, 0, 0, 255))
            b = write_image(tmpdir, "sprites/b.png", 32, 32, (0, 255, 0, 255))
            c = write_image(tmpdir, "sprites/c.gif", 16, 16, (0, 0, 255, 255), fmt='GIF')
            out = os.path.join(tmpdir, "atlas.png")

            packed = pack_files([a, b, c], out, PackOptions(max_size=128, strip_prefix=tmpdir))

            assert os.path.exists(out)
            assert os.path.getsize(metadata_path_for(out)) == 40
            with open(metadata_path_for(out), 'rb') as f:
                metadata = AtlasMetadata.read(f)
            assert metadata == packed.metadata
            assert [e.key for e in metadata] == [
                path_hash("sprites/a.png"), path_hash("sprites/b.png"), path_hash("sprites/c.gif")
            ]
            with Image.open(out) as atlas:
                assert atlas.size == (packed.canvas_size.width, packed.canvas_size.height)

    def test_infeasible_writes_nothing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            big = write_image(tmpdir, "big.png", 200, 200, (255, 0, 0, 255))
            out = os.path.join(tmpdir, "atlas.png")
            with pytest.raises(PackingInfeasibleError):
                pack_files([big], out, PackOptions(max_size=128))
            assert not os.path.exists(out)
            assert not os.path.exists(metadata_path_for(out))

    def test_missing_input_writes_nothing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            good = write_image(tmpdir, "good.png", 8, 8, (255, 0, 0, 255))
            out = os.path.join(tmpdir, "atlas.png")
            with pytest.raises(AtlasIOError):
                pack_files([good, os.path.join(tmpdir, "missing.png")], out)
            assert not os.path.exists(out)

    def test_failed_metadata_write_leaves_no_image(self):
        """A blocked side file removes the atlas image and every temporary file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            packer = TexPacker(max_size=64)
            packer.add_image("a.png", solid(8, 8, (255, 0, 0, 255)))
            packed = packer.pack()
            out = os.path.join(tmpdir, "atlas.png")
            os.mkdir(metadata_path_for(out))

            with pytest.raises(AtlasIOError) as exc_info:
                packed.save(out)

            assert exc_info.value.path == metadata_path_for(out)
            assert not os.path.exists(out)
            assert os.listdir(tmpdir) == ["atlas.png.atlas"]

    def test_save_replaces_existing_outputs(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            out = os.path.join(tmpdir, "atlas.png")
            for name in (out, metadata_path_for(out)):
                with open(name, 'wb') as f:
                    f.write(b"stale")
            packer = TexPacker(max_size=64)
            packer.add_image("a.png", solid(8, 8, (255, 0, 0, 255)))
            packer.pack().save(out)

            assert os.path.getsize(metadata_path_for(out)) == 16
            with Image.open(out) as atlas:
                assert atlas.format == 'PNG'
            assert sorted(os.listdir(tmpdir)) == ["atlas.png", "atlas.png.atlas"]

    def test_duplicate_input(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_image(tmpdir, "a.png", 8, 8, (255, 0, 0, 255))
            packer = TexPacker(strip_prefix=tmpdir)
            packer.add(path)
            with pytest.raises(InvalidInputError):
                packer.add(path)

    def test_jpeg_output(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            packer = TexPacker(max_size=64)
            packer.add_image("a.png", solid(8, 8, (255, 0, 0, 255)))
            out = os.path.join(tmpdir, "atlas.jpg")
            packer.pack().save(out)
            with Image.open(out) as atlas:
                assert atlas.format == 'JPEG'

    def test_unknown_output_extension(self):
        with pytest.raises(ValueError):
            PackedAtlas._infer_filetype("atlas.xyz")
