from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .codec import EncodedSet, check_index, generate_parity
from .constants import PARITY
from .errors import InvalidChunkIndex, InvalidSize, UnrecoverableLoss
from .xorbytes import xor_into

Member = Union[int, str]


@dataclass
class DamagedStripe:
    """A stripe with some members gone.

    Lost data chunks are ``None`` in ``data_chunks``; a lost parity chunk is a
    ``None`` ``parity_chunk``. Built by :func:`damage` or by a caller holding
    whatever chunks survived.
    """

    data_chunks: List[Optional[bytes]] = field(default_factory=list)
    parity_chunk: Optional[bytes] = None
    chunk_size: int = 0


def damage(encoded: EncodedSet, *lost: Member) -> DamagedStripe:
    """Copy ``encoded`` into a :class:`DamagedStripe` with members dropped.

    Each entry of ``lost`` is a data chunk index or :data:`PARITY`. The source
    set is left untouched.
    """
    data_chunks: List[Optional[bytes]] = list(encoded.data_chunks)
    parity_chunk: Optional[bytes] = encoded.parity_chunk
    for member in lost:
        if isinstance(member, str):
            if member != PARITY:
                raise InvalidChunkIndex(member, encoded.num_chunks)
            parity_chunk = None
            continue
        data_chunks[check_index(encoded, member)] = None
    return DamagedStripe(data_chunks=data_chunks, parity_chunk=parity_chunk, chunk_size=encoded.chunk_size)


def missing_members(stripe: DamagedStripe) -> List[Member]:
    missing: List[Member] = [idx for idx, chunk in enumerate(stripe.data_chunks) if chunk is None]
    if stripe.parity_chunk is None:
        missing.append(PARITY)
    return missing


def _check_lengths(stripe: DamagedStripe) -> None:
    for idx, chunk in enumerate(stripe.data_chunks):
        if chunk is not None and len(chunk) != stripe.chunk_size:
            raise InvalidSize(
                len(chunk),
                stripe.chunk_size,
                f"data chunk {idx} is {len(chunk)} bytes, expected {stripe.chunk_size}",
            )
    if stripe.parity_chunk is not None and len(stripe.parity_chunk) != stripe.chunk_size:
        raise InvalidSize(
            len(stripe.parity_chunk),
            stripe.chunk_size,
            f"parity chunk is {len(stripe.parity_chunk)} bytes, expected {stripe.chunk_size}",
        )


def repair(stripe: DamagedStripe) -> EncodedSet:
    """Fill in at most one missing member and return the complete set.

    A lost data chunk is the XOR of the surviving data chunks and parity; a
    lost parity chunk is the XOR of all data chunks.

    Raises:
        UnrecoverableLoss: two or more members are missing.
        InvalidSize: a surviving member has the wrong length.
    """
    _check_lengths(stripe)
    missing = missing_members(stripe)
    if len(missing) > 1:
        raise UnrecoverableLoss(missing)
    if not missing:
        return EncodedSet(
            data_chunks=tuple(stripe.data_chunks),
            parity_chunk=stripe.parity_chunk,
            chunk_size=stripe.chunk_size,
        )
    target = missing[0]
    if target == PARITY:
        data_chunks = tuple(stripe.data_chunks)
        parity = generate_parity(data_chunks, stripe.chunk_size)
        return EncodedSet(data_chunks=data_chunks, parity_chunk=parity, chunk_size=stripe.chunk_size)
    acc = bytearray(stripe.parity_chunk)
    for chunk in stripe.data_chunks:
        if chunk is not None:
            xor_into(acc, chunk)
    data_chunks = list(stripe.data_chunks)
    data_chunks[target] = bytes(acc)
    return EncodedSet(data_chunks=tuple(data_chunks), parity_chunk=stripe.parity_chunk, chunk_size=stripe.chunk_size)
