"""Human-readable ages for planting and watering timestamps."""

import time

# (unit, seconds per unit, units before rolling to the next)
_UNITS = (
    ("second", 1, 60),
    ("minute", 60, 60),
    ("hour", 3600, 24),
    ("day", 86400, 30),
    ("month", 86400 * 30, 12),
)


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def format_distance_to_now(timestamp_ms: int, now_ms: int | None = None) -> str:
    """
    Describe how long ago a timestamp was, e.g. "3 minutes".

    Months are 30 days and years 365 days. Future timestamps read as
    "0 seconds".
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    seconds = max(0, (now_ms - timestamp_ms) // 1000)

    for unit, size, limit in _UNITS:
        n = seconds // size
        if n < limit:
            return _plural(n, unit)
    # 360 to 364 days are past 12 months but short of a full year
    return _plural(max(1, seconds // (86400 * 365)), "year")
