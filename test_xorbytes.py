from __future__ import annotations

import os
import unittest

from xorstripe.constants import XOR_VECTOR_THRESHOLD
from xorstripe.xorbytes import is_zero, xor_all, xor_into


def _slow_xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


class XorBytesTests(unittest.TestCase):
    def test_small_and_vectorized_paths_agree(self):
        for size in (1, XOR_VECTOR_THRESHOLD - 1, XOR_VECTOR_THRESHOLD, 3 * XOR_VECTOR_THRESHOLD + 7):
            a = os.urandom(size)
            b = os.urandom(size)
            dest = bytearray(a)
            xor_into(dest, b)
            self.assertEqual(_slow_xor(a, b), bytes(dest), f"size={size}")

    def test_shorter_source_only_touches_prefix(self):
        dest = bytearray(b"\xff\xff\xff")
        xor_into(dest, b"\x0f")
        self.assertEqual(b"\xf0\xff\xff", bytes(dest))

    def test_longer_source_rejected(self):
        with self.assertRaises(ValueError):
            xor_into(bytearray(2), b"abc")

    def test_xor_all_self_inverse(self):
        for size in (16, 4096):
            a = os.urandom(size)
            self.assertTrue(is_zero(xor_all([a, a], size)))
            self.assertEqual(a, xor_all([a], size))
        self.assertEqual(bytes(8), xor_all([], 8))

    def test_is_zero(self):
        self.assertTrue(is_zero(b""))
        self.assertFalse(is_zero(b"\x00\x01"))
        self.assertFalse(is_zero(bytes(5000) + b"\x01"))


if __name__ == "__main__":
    unittest.main()
