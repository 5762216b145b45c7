#!/usr/bin/env python3
"""
Tests for the binary content heuristic
"""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.treeconcat_core.binary_detection import is_binary_content, is_binary_file


class TestBinaryContent(unittest.TestCase):
    """Classification of raw samples"""

    def test_empty_sample_is_text(self):
        self.assertFalse(is_binary_content(b""))

    def test_printable_ascii_is_text(self):
        sample = (b"hello world\tline\r\n" * 40)[:512]
        self.assertFalse(is_binary_content(sample))

    def test_many_control_bytes_is_binary(self):
        sample = b"\x00" * 159 + b"a" * 353  # 31% non-text
        self.assertTrue(is_binary_content(sample))

    def test_exactly_at_threshold_is_text(self):
        sample = b"\x01" * 3 + b"a" * 7  # 30% non-text
        self.assertFalse(is_binary_content(sample))

    def test_high_bytes_count_as_non_text(self):
        self.assertTrue(is_binary_content(bytes(range(128, 256))))

    def test_custom_threshold(self):
        sample = b"\x00" + b"a" * 9
        self.assertTrue(is_binary_content(sample, threshold=0.05))


class TestBinaryFile(unittest.TestCase):
    """Sampling from files"""

    def setUp(self):
        import tempfile
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_empty_file_is_text(self):
        path = self.root / "empty"
        path.write_bytes(b"")
        self.assertFalse(is_binary_file(path))

    def test_only_first_sample_is_inspected(self):
        path = self.root / "mixed"
        path.write_bytes(b"a" * 512 + b"\x00" * 4096)
        self.assertFalse(is_binary_file(path))
        self.assertTrue(is_binary_file(path, sample_size=4096))

    def test_binary_file(self):
        path = self.root / "blob.bin"
        path.write_bytes(bytes(range(256)) * 4)
        self.assertTrue(is_binary_file(path))

    def test_missing_file_raises(self):
        with self.assertRaises(OSError):
            is_binary_file(self.root / "missing")


if __name__ == '__main__':
    unittest.main()
