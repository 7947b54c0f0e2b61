from datetime import timedelta
from typing import Final

_UNITS: Final[tuple[tuple[str, int], ...]] = (
    ('w', 7 * 24 * 3600),
    ('d', 24 * 3600),
    ('h', 3600),
    ('min', 60),
    ('s', 1),
)


def format_duration(duration: timedelta) -> str:
    """Format a duration the way systemctl does (e.g. '2d 3h 4min 5s').
    """
    remaining = max(int(duration.total_seconds()), 0)
    if remaining == 0:
        return '0s'

    parts = []
    for suffix, seconds in _UNITS:
        amount, remaining = divmod(remaining, seconds)
        if amount:
            parts.append(f'{amount}{suffix}')

    return ' '.join(parts)
