import time


def monotonic_usec() -> int:
    """Current CLOCK_MONOTONIC reading in microseconds.

    This is the clock systemd uses for the ``*TimestampMonotonic`` unit
    properties.
    """
    return time.clock_gettime_ns(time.CLOCK_MONOTONIC) // 1_000
