"""Clock utilities.

The engine itself never reads the clock; only the service layer calls this
and passes the result down as an explicit ``at_time``.
"""

import time


def unix_now() -> int:
    """Return the current unix time in whole seconds."""
    return int(time.time())
