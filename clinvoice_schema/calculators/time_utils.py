"""Time calculation utilities for the billing system.

This module provides low-level utilities for time calculations including:
- Whole seconds elapsed between two timestamps
- Converting seconds to (unrounded) decimal hours
- Rounding timestamps to a job's increment
"""

import datetime as dt
from decimal import Decimal

SECONDS_PER_HOUR = Decimal(3600)


def elapsed_seconds(time_begin: dt.datetime, time_end: dt.datetime) -> int:
    """Calculate the whole seconds elapsed from ``time_begin`` to ``time_end``.

    Fractions of a second are truncated toward zero. The result is negative
    when ``time_end`` precedes ``time_begin``.

    Example:
        >>> elapsed_seconds(dt.datetime(2023, 6, 15, 2, 0), dt.datetime(2023, 6, 15, 2, 30))
        1800
    """
    return int((time_end - time_begin).total_seconds())


def seconds_to_decimal_hours(seconds: int) -> Decimal:
    """Convert seconds to decimal hours without rounding.

    Example:
        >>> seconds_to_decimal_hours(1800)
        Decimal('0.5')
        >>> seconds_to_decimal_hours(5400)
        Decimal('1.5')
    """
    return Decimal(seconds) / SECONDS_PER_HOUR


def round_to_increment(when: dt.datetime, increment: dt.timedelta) -> dt.datetime:
    """Round a timestamp to the nearest multiple of ``increment``.

    Multiples are counted from midnight UTC, so a 15 minute increment rounds
    to :00, :15, :30 and :45, and a 7 minute increment to 00:07, 00:14 and so
    on through the day. Exact midpoints round up. A zero increment
    leaves the timestamp unchanged.

    Args:
        when: Timezone-aware timestamp to round
        increment: Granularity to round to

    Returns:
        The rounded timestamp

    Example:
        >>> round_to_increment(
        ...     dt.datetime(2023, 6, 15, 11, 14, tzinfo=dt.timezone.utc),
        ...     dt.timedelta(minutes=15),
        ... ).time()
        datetime.time(11, 15)
    """
    if not increment:
        return when
    midnight = when.astimezone(dt.timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    offset = when - midnight
    steps = (offset + increment / 2) // increment
    return midnight + steps * increment
