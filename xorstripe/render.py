from __future__ import annotations

from typing import List

from .codec import EncodedSet, recover_chunk
from .constants import ASCII_PLACEHOLDER, ASCII_PRINTABLE_MAX, ASCII_PRINTABLE_MIN


def byte_to_binary(b: int) -> str:
    return f"{b:08b}"


def chunk_to_binary(chunk: bytes) -> str:
    return " ".join(byte_to_binary(b) for b in chunk)


def _printable(b: int) -> bool:
    return ASCII_PRINTABLE_MIN <= b <= ASCII_PRINTABLE_MAX


def chunk_to_ascii(chunk: bytes) -> str:
    """Render printable ASCII as-is and every other byte as '.'."""
    return "".join(chr(b) if _printable(b) else ASCII_PLACEHOLDER for b in chunk)


def describe_encoding(encoded: EncodedSet, original: bytes) -> List[str]:
    """Report lines showing each chunk, the parity chunk and storage totals."""
    lines = [
        "Encoding Process:",
        "-----------------",
        f"Original Data: {chunk_to_ascii(original)!r} ({len(original)} bytes)",
        "",
    ]
    for idx, chunk in enumerate(encoded.data_chunks):
        lines.append(f"Chunk {idx}: {chunk_to_ascii(chunk)!r}  ({len(chunk)} bytes)")
        lines.append(f"  Binary: {chunk_to_binary(chunk)}")
    lines += [
        "",
        "Parity Chunk (XOR of all chunks):",
        f"  Binary: {chunk_to_binary(encoded.parity_chunk)}",
        f"  ASCII:  {chunk_to_ascii(encoded.parity_chunk)!r}",
        "",
        f"Total storage: {encoded.total_chunks} chunks (original {encoded.num_chunks} + 1 parity)",
        f"Storage overhead: {encoded.overhead_percent:.1f}%",
    ]
    return lines


def describe_recovery(encoded: EncodedSet, lost_index: int) -> List[str]:
    """Walk through recovering ``lost_index``; the last line says whether it matched.

    Raises InvalidChunkIndex for an out-of-range index, like recover_chunk.
    """
    recovered = recover_chunk(encoded, lost_index)
    original = encoded.data_chunks[lost_index]
    others = [idx for idx in range(encoded.num_chunks) if idx != lost_index]
    lines = [
        "Recovery Demonstration:",
        "-----------------------",
        f"Simulating loss of Chunk {lost_index}...",
        "",
        "Recovery calculation:",
        "  " + "".join(f"Chunk{idx} XOR " for idx in others) + "Parity",
    ]
    if recovered:
        terms = "".join(f"{byte_to_binary(encoded.data_chunks[idx][0])} XOR " for idx in others)
        lines.append(f"  = {terms}{byte_to_binary(encoded.parity_chunk[0])} (first byte)")
        first = recovered[0]
        if _printable(first):
            lines.append(f"  = {byte_to_binary(first)} (ASCII: '{chr(first)}')")
        else:
            lines.append(f"  = {byte_to_binary(first)}")
    lines += ["", f"Recovered Chunk {lost_index}: {chunk_to_ascii(recovered)!r}"]
    if recovered == original:
        lines.append("SUCCESS: recovery matches original chunk.")
    else:
        lines.append("FAILURE: recovery does not match.")
    return lines
