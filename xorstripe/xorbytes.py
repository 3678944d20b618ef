"""Byte-wise XOR helpers.

XOR is addition in GF(2^8), so these are the only field operations a single
parity stripe needs. Buffers of ``XOR_VECTOR_THRESHOLD`` bytes or more are
combined through NumPy; shorter ones use a plain loop.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .constants import XOR_VECTOR_THRESHOLD


def xor_into(dest: bytearray, src: bytes) -> None:
    """XOR ``src`` into ``dest`` in place over ``len(src)`` bytes."""
    if len(src) > len(dest):
        raise ValueError(f"source buffer ({len(src)} bytes) longer than destination ({len(dest)} bytes)")
    if len(src) >= XOR_VECTOR_THRESHOLD:
        darr = np.frombuffer(memoryview(dest), dtype=np.uint8)
        sarr = np.frombuffer(src, dtype=np.uint8)
        n = len(sarr)
        darr[:n] ^= sarr
        return
    for i, b in enumerate(src):
        dest[i] ^= b


def xor_all(buffers: Iterable[bytes], size: int) -> bytes:
    """Return the XOR of every buffer, starting from ``size`` zero bytes."""
    acc = bytearray(size)
    for buf in buffers:
        xor_into(acc, buf)
    return bytes(acc)


def is_zero(buf: bytes) -> bool:
    if len(buf) >= XOR_VECTOR_THRESHOLD:
        return not np.frombuffer(buf, dtype=np.uint8).any()
    return not any(buf)
