from __future__ import annotations

from datetime import datetime, timezone

# Time conversion constants
SECONDS_PER_MINUTE = 60
MINUTE_PER_HOUR = 60
HOUR_PER_DAY = 24
DAY_PER_WEEK = 7
DAY_PER_MONTH = 30
MONTH_PER_YEAR = 12
SECONDS_PER_HOUR = SECONDS_PER_MINUTE * MINUTE_PER_HOUR
SECONDS_PER_DAY = SECONDS_PER_HOUR * HOUR_PER_DAY
SECONDS_PER_WEEK = SECONDS_PER_DAY * DAY_PER_WEEK
SECONDS_PER_MONTH = SECONDS_PER_DAY * DAY_PER_MONTH
SECONDS_PER_YEAR = SECONDS_PER_MONTH * MONTH_PER_YEAR

# (upper bound in seconds, phrase, divisor). A divisor of 0 means the phrase
# is used as-is; otherwise "{n}" is filled with seconds // divisor.
_MAGNITUDES: list[tuple[int, str, int]] = [
    (1, "now", 0),
    (2, "1 second {dir}", 0),
    (SECONDS_PER_MINUTE, "{n} seconds {dir}", 1),
    (2 * SECONDS_PER_MINUTE, "1 minute {dir}", 0),
    (SECONDS_PER_HOUR, "{n} minutes {dir}", SECONDS_PER_MINUTE),
    (2 * SECONDS_PER_HOUR, "1 hour {dir}", 0),
    (SECONDS_PER_DAY, "{n} hours {dir}", SECONDS_PER_HOUR),
    (2 * SECONDS_PER_DAY, "1 day {dir}", 0),
    (SECONDS_PER_WEEK, "{n} days {dir}", SECONDS_PER_DAY),
    (2 * SECONDS_PER_WEEK, "1 week {dir}", 0),
    (SECONDS_PER_MONTH, "{n} weeks {dir}", SECONDS_PER_WEEK),
    (2 * SECONDS_PER_MONTH, "1 month {dir}", 0),
    (SECONDS_PER_YEAR, "{n} months {dir}", SECONDS_PER_MONTH),
    (SECONDS_PER_YEAR * 3 // 2, "1 year {dir}", 0),
    (2 * SECONDS_PER_YEAR, "2 years {dir}", 0),
]
_LONG_TIME = 37 * SECONDS_PER_YEAR


def format_time_ago(seconds: int) -> str:
    """Convert a number of seconds to a human-readable relative phrase.

    Negative values describe a moment in the future.

    Args:
        seconds: Number of seconds ago.

    Returns:
        Human-readable time string (e.g., "2 hours ago", "3 days from now").
    """
    direction = "ago"
    if seconds < 0:
        direction = "from now"
        seconds = -seconds
    for bound, phrase, divisor in _MAGNITUDES:
        if seconds < bound:
            n = seconds // divisor if divisor else 0
            return phrase.format(n=n, dir=direction)
    if seconds < _LONG_TIME:
        return f"{seconds // SECONDS_PER_YEAR} years {direction}"
    return f"a long while {direction}"


def time_ago(moment: datetime, now: datetime | None = None) -> str:
    """Describe `moment` relative to `now` (defaults to the current UTC time)."""
    if now is None:
        now = datetime.now(timezone.utc)
    return format_time_ago(int((now - moment).total_seconds()))
