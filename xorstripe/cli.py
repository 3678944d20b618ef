from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Tuple

from xorstripe.codec import EncodedSet, decode, encode, encode_file, verify_parity
from xorstripe.constants import DEFAULT_DEMO_DATA, DEFAULT_NUM_CHUNKS, DEMO_MAX_CHUNKS, MIN_CHUNKS, PARITY
from xorstripe.errors import XorStripeError
from xorstripe.render import describe_encoding, describe_recovery
from xorstripe.stripe import damage, missing_members, repair


def _load_input(data: Optional[str]) -> bytes:
    """Pick the input bytes: the positional argument, then stdin.

    Falls back to the demo text when stdin is a terminal or empty.
    """
    if data is not None:
        return data.encode("utf-8")
    if sys.stdin is not None and not sys.stdin.isatty():
        raw = sys.stdin.buffer.read()
        if raw:
            return raw
    return DEFAULT_DEMO_DATA.encode("utf-8")


def _member(value: str):
    """argparse type for --lose: a data chunk index or 'parity'."""
    if value.strip().lower() == PARITY:
        return PARITY
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a chunk index or '{PARITY}', got {value!r}")


def _print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)


def _encode_input(data: Optional[bytes], num_chunks: int, path: Optional[str] = None) -> Tuple[EncodedSet, bytes]:
    """Encode ``data``, or the file at ``path`` when one is given.

    Returns the set and the original bytes it was built from.
    """
    if path:
        encoded, size = encode_file(path, num_chunks)
        return encoded, decode(encoded, size)
    return encode(data, num_chunks), data


def cmd_encode(data: Optional[bytes], num_chunks: int, *, path: Optional[str] = None) -> bool:
    """Encode ``data`` and print the chunk/parity report.

    Args:
        data: Input bytes (non-empty); ignored when ``path`` is given.
        num_chunks: Number of data chunks to split into.
        path: Optional file to encode instead of ``data``.
    """
    encoded, data = _encode_input(data, num_chunks, path)
    _print_lines(describe_encoding(encoded, data))
    ok = verify_parity(encoded)
    print(f"Parity check: {'OK' if ok else 'FAIL'}")
    return ok


def cmd_recover(
    data: Optional[bytes], num_chunks: int, lose: Optional[List[int]] = None, *, path: Optional[str] = None
) -> bool:
    """Simulate losing each listed chunk (all of them by default) and recover it.

    Returns False if any recovered chunk differs from the original.
    """
    encoded, _data = _encode_input(data, num_chunks, path)
    indices = list(lose) if lose else list(range(encoded.num_chunks))
    ok = True
    for idx in indices:
        print()
        lines = describe_recovery(encoded, idx)
        _print_lines(lines)
        if lines[-1].startswith("FAILURE"):
            ok = False
    print()
    print(f"Recovered {len(indices)} chunk(s): {'OK' if ok else 'FAIL'}")
    return ok


def _stripe_summary(encoded: EncodedSet) -> str:
    return f"{encoded.num_chunks} data chunk(s) + 1 parity, {encoded.chunk_size} byte(s) each"


def cmd_repair(data: Optional[bytes], num_chunks: int, lose: List, *, path: Optional[str] = None) -> bool:
    """Drop the listed stripe members, repair the stripe and check the result.

    Losing more than one member raises UnrecoverableLoss.
    """
    encoded, data = _encode_input(data, num_chunks, path)
    print(f"Stripe: {_stripe_summary(encoded)}")
    stripe = damage(encoded, *lose)
    print(f"Lost members: {missing_members(stripe)}")
    repaired = repair(stripe)
    same = repaired == encoded
    restored = decode(repaired, len(data)) == data
    print(f"Repaired stripe matches original: {'yes' if same else 'no'}")
    print(f"Decoded data matches input: {'yes' if restored else 'no'}")
    return same and restored


def _prompt(message: str) -> Optional[str]:
    try:
        return input(message)
    except EOFError:
        return None


def cmd_demo(num_chunks: Optional[int] = None) -> bool:
    """Interactive walk-through: encode, recover every chunk, then recover on request."""
    print("Erasure Coding: XOR-Based Parity")
    print()
    text = _prompt(f'Enter your data (or press Enter for default "{DEFAULT_DEMO_DATA}"): ')
    if not text or not text.strip():
        text = DEFAULT_DEMO_DATA
    if num_chunks is None:
        num_chunks = DEFAULT_NUM_CHUNKS
        answer = _prompt(f"Number of data chunks ({MIN_CHUNKS}-{DEMO_MAX_CHUNKS}, default {DEFAULT_NUM_CHUNKS}): ")
        if answer and answer.strip():
            try:
                parsed = int(answer.strip())
            except ValueError:
                parsed = None
            if parsed is not None and MIN_CHUNKS <= parsed <= DEMO_MAX_CHUNKS:
                num_chunks = parsed
    print()

    data = text.encode("utf-8")
    encoded = encode(data, num_chunks)
    _print_lines(describe_encoding(encoded, data))

    print()
    print("Testing Recovery for All Chunks")
    for idx in range(encoded.num_chunks):
        print()
        _print_lines(describe_recovery(encoded, idx))

    print()
    print("Interactive Recovery Mode")
    last = encoded.num_chunks - 1
    while True:
        print()
        choice = _prompt(f"Which chunk would you like to simulate losing? (0-{last}, or 'q' to quit): ")
        if choice is None:
            print()
            break
        choice = choice.strip()
        if choice in ("q", "quit"):
            break
        try:
            index = int(choice)
        except ValueError:
            index = -1
        if not 0 <= index <= last:
            print(f"Invalid choice. Please enter a number between 0 and {last}.")
            continue
        _print_lines(describe_recovery(encoded, index))

    print()
    print("Key Takeaways")
    _print_lines(
        [
            "- XOR is its own inverse: A ^ B ^ B == A",
            "- Order does not matter: A ^ B ^ C == C ^ A ^ B",
            "- Any single lost chunk can be recovered",
            f"- Storage overhead: 1 parity chunk for {encoded.num_chunks} data chunks",
            "- Two lost chunks cannot be recovered with a single parity chunk",
        ]
    )
    return True


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("data", nargs="?", help="Input text (default: read stdin, else the demo text)")
    parser.add_argument("--file", help="Read input bytes from this file instead")
    parser.add_argument(
        "--chunks",
        "-n",
        type=int,
        default=DEFAULT_NUM_CHUNKS,
        help=f"Number of data chunks (default {DEFAULT_NUM_CHUNKS}, minimum {MIN_CHUNKS})",
    )


def _source(args: argparse.Namespace) -> Optional[bytes]:
    # --file is read by encode_file, so stdin is left alone
    if args.file:
        return None
    return _load_input(args.data)


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(prog="xorstripe", description="Single XOR parity erasure coding")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_encode = sub.add_parser("encode", help="Split input into chunks and show the XOR parity")
    _add_input_args(ap_encode)

    ap_recover = sub.add_parser("recover", help="Simulate losing data chunks and recover them")
    _add_input_args(ap_recover)
    ap_recover.add_argument(
        "--lose",
        type=int,
        action="append",
        help="Data chunk index to lose (repeatable; default: every chunk in turn)",
    )

    ap_repair = sub.add_parser("repair", help="Drop stripe members, repair, and check the data decodes")
    _add_input_args(ap_repair)
    ap_repair.add_argument(
        "--lose",
        type=_member,
        action="append",
        required=True,
        help=f"Data chunk index or '{PARITY}' to drop (repeatable; more than one is unrecoverable)",
    )

    ap_demo = sub.add_parser("demo", help="Interactive encoding and recovery walk-through")
    ap_demo.add_argument("--chunks", "-n", type=int, help="Skip the chunk count prompt")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "encode":
            success = cmd_encode(_source(args), args.chunks, path=args.file)
        elif args.cmd == "recover":
            success = cmd_recover(_source(args), args.chunks, lose=args.lose, path=args.file)
        elif args.cmd == "repair":
            success = cmd_repair(_source(args), args.chunks, args.lose, path=args.file)
        elif args.cmd == "demo":
            success = cmd_demo(args.chunks)
        else:
            raise RuntimeError("Unknown command")
    except (XorStripeError, OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
