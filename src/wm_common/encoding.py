"""Hex, address and integer coercion for wire values.

All wire-level byte strings are 0x-prefixed hex; all integers travel as
decimal strings so they survive JSON without precision loss.
"""

from decimal import Decimal, InvalidOperation

from eth_utils import decode_hex, encode_hex, is_address, is_hex

from src.wm_common.constants import MAX_UINT256
from src.wm_common.errors import InvalidFieldError


def hex_to_bytes(field: str, value: str) -> bytes:
    if not isinstance(value, str) or not value.startswith("0x") or not is_hex(value):
        raise InvalidFieldError(field, f"expected 0x-prefixed hex, got {value!r}")
    if len(value) % 2:
        raise InvalidFieldError(field, "hex string has odd length")
    return decode_hex(value)


def bytes_to_hex(value: bytes) -> str:
    return encode_hex(value)


def normalize_address(field: str, value: str) -> str:
    """Return the lowercase form of a 20-byte hex address."""
    if not isinstance(value, str) or not is_address(value):
        raise InvalidFieldError(field, f"not an address: {value!r}")
    return value.lower()


def parse_uint(field: str, value: int | str, max_value: int = MAX_UINT256) -> int:
    """Parse a decimal string (or int) into an exact non-negative integer.

    Fractional values are rejected rather than truncated.
    """
    if isinstance(value, bool):
        raise InvalidFieldError(field, "boolean is not a number")
    if isinstance(value, int):
        parsed = value
    else:
        try:
            dec = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidFieldError(field, f"not a decimal number: {value!r}") from None
        if not dec.is_finite() or dec != dec.to_integral_value():
            raise InvalidFieldError(field, f"not an integer: {value!r}")
        parsed = int(dec)
    if not (0 <= parsed <= max_value):
        raise InvalidFieldError(field, f"{parsed} out of range [0, {max_value}]")
    return parsed
