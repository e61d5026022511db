"""Order salt generation.

A salt only has to make otherwise-identical orders hash differently. It is
drawn uniformly from [0, 10**77), which is the range the reference client's
pseudo-random salt covers and fits comfortably in a uint256.
"""

import secrets

_SALT_DIGITS = 77
_SALT_BOUND = 10**_SALT_DIGITS


def generate_salt() -> int:
    """Return a fresh random salt."""
    return secrets.randbelow(_SALT_BOUND)
