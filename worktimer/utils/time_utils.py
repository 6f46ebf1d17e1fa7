"""Time formatting utilities."""

from datetime import timedelta

EXPIRED = "EXPIRED"


def format_time_left(remaining: timedelta) -> str:
    """Format a countdown as [Dd ]HH:MM:SS.

    Examples:
        1h 1m 1s -> "01:01:01"
        25h -> "1d 01:00:00"
        zero or negative -> "EXPIRED"
    """
    if remaining <= timedelta(0):
        return EXPIRED

    total_seconds = int(remaining.total_seconds())
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    clock = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days > 0:
        return f"{days}d {clock}"
    return clock


def format_duration_hours(hours: float) -> str:
    """Format a fractional number of hours.

    Examples:
        2 -> "2 hours"
        1 -> "1 hour"
        1.5 -> "1 hour and 30 minutes"
    """
    whole_hours = int(hours)
    minutes = round((hours - whole_hours) * 60)
    if minutes == 60:
        whole_hours += 1
        minutes = 0

    text = f"{whole_hours} hour{'s' if whole_hours != 1 else ''}"
    if minutes > 0:
        text += f" and {minutes} minute{'s' if minutes != 1 else ''}"
    return text
