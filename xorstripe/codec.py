"""Single-parity (RAID-5 style) XOR erasure codec.

A stripe is ``num_chunks`` equally sized data chunks plus one parity chunk
holding their byte-wise XOR. Because ``A ^ B ^ B == A`` and XOR is associative
and commutative, XOR-ing every member of a healthy stripe together yields zero,
so any single missing member equals the XOR of all the others.

Example:
    encoded = encode(b"HELLO WORLD", 3)
    assert recover_chunk(encoded, 1) == encoded.data_chunks[1]
    assert decode(encoded, 11) == b"HELLO WORLD"
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Iterable, Tuple

from .constants import MIN_CHUNKS, PAD_BYTE
from .errors import EmptyInput, InvalidChunkCount, InvalidChunkIndex, InvalidSize
from .xorbytes import is_zero, xor_all, xor_into


@dataclass(frozen=True)
class EncodedSet:
    """Result of one :func:`encode` call.

    Chunks are stored as ``bytes`` inside tuples and the dataclass is frozen,
    so a set cannot be modified after construction. Producing different chunks
    means encoding again.
    """

    data_chunks: Tuple[bytes, ...]
    parity_chunk: bytes
    chunk_size: int

    def __post_init__(self):
        data_chunks = tuple(bytes(c) for c in self.data_chunks)
        parity_chunk = bytes(self.parity_chunk)
        if self.chunk_size < 0:
            raise InvalidSize(self.chunk_size, 0, f"chunk size must be non-negative (got {self.chunk_size})")
        if not data_chunks:
            raise InvalidSize(0, 0, "an encoded set needs at least one data chunk")
        for idx, chunk in enumerate(data_chunks):
            if len(chunk) != self.chunk_size:
                raise InvalidSize(
                    len(chunk),
                    self.chunk_size,
                    f"data chunk {idx} is {len(chunk)} bytes, expected {self.chunk_size}",
                )
        if len(parity_chunk) != self.chunk_size:
            raise InvalidSize(
                len(parity_chunk),
                self.chunk_size,
                f"parity chunk is {len(parity_chunk)} bytes, expected {self.chunk_size}",
            )
        object.__setattr__(self, "data_chunks", data_chunks)
        object.__setattr__(self, "parity_chunk", parity_chunk)

    @property
    def num_chunks(self) -> int:
        return len(self.data_chunks)

    @property
    def total_chunks(self) -> int:
        """Data chunks plus the parity chunk."""
        return self.num_chunks + 1

    @property
    def stored_size(self) -> int:
        """Bytes held by the data chunks, padding included."""
        return self.num_chunks * self.chunk_size

    @property
    def overhead_percent(self) -> float:
        return 100.0 / self.num_chunks


def check_index(encoded: EncodedSet, index: int) -> int:
    """Return ``index`` as a plain int in ``[0, num_chunks)``.

    Any integer type (``numpy.int64`` included) is accepted; ``bool`` is not.
    """
    # bool is an int subclass but never a meaningful chunk index
    if isinstance(index, bool):
        raise InvalidChunkIndex(index, encoded.num_chunks)
    try:
        value = operator.index(index)
    except TypeError:
        raise InvalidChunkIndex(index, encoded.num_chunks) from None
    if value < 0 or value >= encoded.num_chunks:
        raise InvalidChunkIndex(value, encoded.num_chunks)
    return value


def _split(data: bytes, num_chunks: int, chunk_size: int) -> Tuple[bytes, ...]:
    chunks = []
    for i in range(num_chunks):
        start = i * chunk_size
        piece = data[start : start + chunk_size]
        # Chunks past the end of the data are made entirely of padding
        chunks.append(piece + bytes([PAD_BYTE]) * (chunk_size - len(piece)))
    return tuple(chunks)


def generate_parity(chunks: Iterable[bytes], chunk_size: int) -> bytes:
    """XOR all chunks together into a new parity chunk."""
    return xor_all(chunks, chunk_size)


def encode(data: bytes, num_chunks: int) -> EncodedSet:
    """Split ``data`` into ``num_chunks`` zero-padded chunks and add XOR parity.

    Args:
        data: Non-empty bytes-like input.
        num_chunks: Number of data chunks, at least 2. There is no upper limit.

    Raises:
        EmptyInput: ``data`` is empty.
        InvalidChunkCount: ``num_chunks`` is below 2 or not an integer.
    """
    data = bytes(data)
    if not data:
        raise EmptyInput()
    if isinstance(num_chunks, bool):
        raise InvalidChunkCount(num_chunks, MIN_CHUNKS)
    try:
        num_chunks = operator.index(num_chunks)
    except TypeError:
        raise InvalidChunkCount(
            num_chunks, MIN_CHUNKS, f"number of chunks must be an integer (got {num_chunks!r})"
        ) from None
    if num_chunks < MIN_CHUNKS:
        raise InvalidChunkCount(num_chunks, MIN_CHUNKS)
    chunk_size = -(-len(data) // num_chunks)
    data_chunks = _split(data, num_chunks, chunk_size)
    parity_chunk = generate_parity(data_chunks, chunk_size)
    return EncodedSet(data_chunks=data_chunks, parity_chunk=parity_chunk, chunk_size=chunk_size)


def encode_file(path: str, num_chunks: int) -> Tuple[EncodedSet, int]:
    """Encode a whole file; returns the set and the original byte count."""
    with open(path, "rb") as fh:
        data = fh.read()
    return encode(data, num_chunks), len(data)


def recover_chunk(encoded: EncodedSet, lost_index: int) -> bytes:
    """Rebuild data chunk ``lost_index`` from the other chunks and parity.

    The set itself is only read, so repeated calls return identical bytes.

    Raises:
        InvalidChunkIndex: ``lost_index`` is outside ``[0, num_chunks)``,
            negative indices included.
    """
    lost_index = check_index(encoded, lost_index)
    acc = bytearray(encoded.parity_chunk)
    for idx, chunk in enumerate(encoded.data_chunks):
        if idx == lost_index:
            continue
        xor_into(acc, chunk)
    return bytes(acc)


def recover_parity(encoded: EncodedSet, missing: Iterable[int] = ()) -> bytes:
    """Recompute the parity chunk from the data chunks.

    ``missing`` lists data chunk indices the caller no longer has. Parity
    needs every data chunk, so any entry raises :class:`InvalidChunkIndex`.
    """
    for index in missing:
        index = check_index(encoded, index)
        raise InvalidChunkIndex(
            index,
            encoded.num_chunks,
            f"data chunk {index} is missing; parity needs all {encoded.num_chunks} data chunks",
        )
    return generate_parity(encoded.data_chunks, encoded.chunk_size)


def decode(encoded: EncodedSet, original_size: int) -> bytes:
    """Concatenate the data chunks and drop the trailing padding.

    Raises:
        InvalidSize: ``original_size`` is negative or larger than
            ``num_chunks * chunk_size``.
    """
    if original_size < 0 or original_size > encoded.stored_size:
        raise InvalidSize(original_size, encoded.stored_size)
    return b"".join(encoded.data_chunks)[:original_size]


def verify_parity(encoded: EncodedSet) -> bool:
    """True when the XOR of every data chunk and the parity chunk is zero."""
    acc = bytearray(encoded.parity_chunk)
    for chunk in encoded.data_chunks:
        xor_into(acc, chunk)
    return is_zero(bytes(acc))
