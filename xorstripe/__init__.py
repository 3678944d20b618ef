"""
xorstripe: single-parity (RAID-5 style) XOR erasure coding.

Features:

- Split bytes into N equal, zero-padded data chunks plus one XOR parity chunk.
- Recover any single lost data chunk, or rebuild a lost parity chunk.
- Reassemble the original bytes from the data chunks.
- Repair a damaged stripe with at most one missing member; two losses are
  reported as unrecoverable, which is the hard limit of single parity.
- Binary/ASCII chunk dumps and a CLI with an interactive recovery demo.

Encoded sets are immutable values: every operation only reads its inputs and
returns fresh bytes, so sets can be shared freely between threads.
"""

__version__ = "0.1"

from .codec import (
    EncodedSet,
    decode,
    encode,
    encode_file,
    recover_chunk,
    recover_parity,
    verify_parity,
)
from .constants import PARITY
from .errors import (
    EmptyInput,
    ErrorKind,
    InvalidChunkCount,
    InvalidChunkIndex,
    InvalidSize,
    UnrecoverableLoss,
    XorStripeError,
)
from .stripe import DamagedStripe, damage, missing_members, repair

__all__ = [
    "EncodedSet",
    "encode",
    "encode_file",
    "recover_chunk",
    "recover_parity",
    "decode",
    "verify_parity",
    "PARITY",
    "DamagedStripe",
    "damage",
    "missing_members",
    "repair",
    "ErrorKind",
    "XorStripeError",
    "EmptyInput",
    "InvalidChunkCount",
    "InvalidChunkIndex",
    "InvalidSize",
    "UnrecoverableLoss",
]
