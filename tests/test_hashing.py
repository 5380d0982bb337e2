"""
Tests for path hashing
"""
import subprocess
import sys

import pytest
from texpack.hashing import path_hash, normalize_path, format_key


class TestPathHash:
    """FNV-1a 32-bit path keys"""

    @pytest.mark.parametrize("text,expected", [
        ("", 0x811C9DC5),
        ("a", 0xE40C292C),
        ("foobar", 0xBF9CF968),
    ])
    def test_known_vectors(self, text, expected):
        """Published FNV-1a 32 test vectors"""
        assert path_hash(text) == expected

    def test_repeatable(self):
        """Same path always gives the same key"""
        assert path_hash("sprites/player.png") == path_hash("sprites/player.png")

    def test_stable_across_processes(self):
        """Keys do not depend on per-process hash seeds"""
        code = "from texpack.hashing import path_hash; print(path_hash('sprites/player.png'))"
        out = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, check=True)
        assert int(out.stdout.strip()) == path_hash("sprites/player.png")

    def test_fits_in_32_bits(self):
        for path in ["x", "a/b/c.png", "ünïcødé/名前.png", "x" * 1000]:
            assert 0 <= path_hash(path) <= 0xFFFFFFFF

    def test_case_sensitive(self):
        """Case normalization is left to the caller"""
        assert path_hash("Player.png") != path_hash("player.png")

    def test_known_collision(self):
        """costarring/liquid is a documented FNV-1a 32 collision"""
        assert path_hash("costarring") == path_hash("liquid") == 0x5E4DAA9D

    def test_format_key(self):
        assert format_key(0xAB) == "000000ab"


class TestNormalizePath:
    """Relative path normalization before hashing"""

    def test_strips_prefix(self):
        assert normalize_path("/assets/sprites/a.png", "/assets") == "sprites/a.png"

    def test_no_prefix_keeps_relative_path(self):
        assert normalize_path("sprites/./a.png") == "sprites/a.png"

    def test_backslashes(self):
        assert normalize_path("sprites\\ui\\a.png") == "sprites/ui/a.png"

    def test_relative_input_with_prefix(self):
        """Relative inputs resolve against the working directory like the prefix does"""
        import os
        cwd = os.getcwd()
        assert normalize_path("sprites/a.png", cwd) == "sprites/a.png"
