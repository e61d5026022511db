"""Calldata merging under a replacement pattern.

A replacement pattern is a byte mask the same length as the calldata:
0xff marks a byte the counterparty may supply, 0x00 pins it. Any other mask
value is rejected.
"""
from src.wm_common.constants import FIXED_BYTE, REPLACEABLE_BYTE
from src.wm_common.errors import CalldataMismatchError, InvalidFieldError


def _check_lengths(target: bytes, replacement: bytes, mask: bytes) -> None:
    if not (len(target) == len(replacement) == len(mask)):
        raise InvalidFieldError(
            "calldata",
            f"length mismatch: target={len(target)} replacement={len(replacement)} "
            f"mask={len(mask)}",
        )


def guarded_replace(target: bytes, replacement: bytes, mask: bytes) -> bytes:
    """Take replaceable bytes from ``replacement``; every pinned byte of
    ``replacement`` must equal ``target``'s, else CalldataMismatchError at the
    first offending offset."""
    _check_lengths(target, replacement, mask)
    out = bytearray(target)
    for i, m in enumerate(mask):
        if m == REPLACEABLE_BYTE:
            out[i] = replacement[i]
        elif m == FIXED_BYTE:
            if replacement[i] != target[i]:
                raise CalldataMismatchError(i, target[i], replacement[i])
        else:
            raise InvalidFieldError("replacement_pattern", f"byte {i} is 0x{m:02x}")
    return bytes(out)


def apply_replacement_pattern(target: bytes, replacement: bytes, mask: bytes) -> bytes:
    """The exchange's own unguarded replace: (target & ~mask) | (replacement & mask)."""
    _check_lengths(target, replacement, mask)
    return bytes((t & ~m & 0xFF) | (r & m) for t, r, m in zip(target, replacement, mask))


def first_difference(a: bytes, b: bytes) -> int | None:
    """Offset of the first differing byte, or None if equal."""
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            return i
    if len(a) != len(b):
        return min(len(a), len(b))
    return None
