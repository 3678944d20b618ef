from __future__ import annotations

from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    EMPTY_INPUT = auto()
    INVALID_CHUNK_COUNT = auto()
    INVALID_CHUNK_INDEX = auto()
    INVALID_SIZE = auto()
    UNRECOVERABLE_LOSS = auto()


class XorStripeError(Exception):
    """Base class for xorstripe errors.

    Every subclass carries a ``kind`` so callers can dispatch on the failing
    condition instead of on the exception class.
    """

    kind: ErrorKind


class EmptyInput(XorStripeError):
    kind = ErrorKind.EMPTY_INPUT

    def __init__(self, message: str = "input data cannot be empty"):
        super().__init__(message)


class InvalidChunkCount(XorStripeError):
    kind = ErrorKind.INVALID_CHUNK_COUNT

    def __init__(self, num_chunks: object, minimum: int, reason: Optional[str] = None):
        self.num_chunks = num_chunks
        self.minimum = minimum
        if reason is None:
            reason = f"number of chunks must be at least {minimum} (got {num_chunks})"
        super().__init__(reason)


class InvalidChunkIndex(XorStripeError):
    kind = ErrorKind.INVALID_CHUNK_INDEX

    def __init__(self, index: object, num_chunks: int, reason: Optional[str] = None):
        self.index = index
        self.num_chunks = num_chunks
        if reason is None:
            reason = f"chunk index {index!r} is out of bounds (0..{num_chunks - 1})"
        super().__init__(reason)


class InvalidSize(XorStripeError):
    kind = ErrorKind.INVALID_SIZE

    def __init__(self, size: int, limit: int, reason: Optional[str] = None):
        self.size = size
        self.limit = limit
        if reason is None:
            reason = f"size {size} is out of range (0..{limit})"
        super().__init__(reason)


class UnrecoverableLoss(XorStripeError):
    kind = ErrorKind.UNRECOVERABLE_LOSS

    def __init__(self, missing: list):
        self.missing = list(missing)
        super().__init__(
            f"{len(self.missing)} stripe members missing {self.missing}; "
            "single XOR parity recovers at most one"
        )
