"""Human-readable formatting of play time."""


def format_play_time(seconds: int, fmt: str = "short") -> str:
    """Format seconds into a readable time string.

    Args:
        seconds: Total seconds
        fmt: 'short' (MM:SS, total minutes), 'long' (1h 23m) or
            'verbose' (1 hour 23 minutes)

    Returns:
        Formatted time string
    """
    seconds = int(seconds)
    hours = seconds // 3600
    minutes_in_hour = (seconds % 3600) // 60
    total_minutes = seconds // 60
    secs = seconds % 60

    if fmt == "long":
        if hours > 0:
            return f"{hours}h {minutes_in_hour}m"
        return f"{total_minutes}m"

    if fmt == "verbose":
        parts = []
        if hours > 0:
            parts.append(f"{hours} {'hour' if hours == 1 else 'hours'}")
        if minutes_in_hour > 0:
            parts.append(f"{minutes_in_hour} {'minute' if minutes_in_hour == 1 else 'minutes'}")
        if seconds < 60 or (hours == 0 and minutes_in_hour == 0):
            parts.append(f"{secs} {'second' if secs == 1 else 'seconds'}")
        return " ".join(parts)

    return f"{total_minutes}:{secs:02d}"


def format_minutes(minutes: int, fmt: str = "short") -> str:
    """format_play_time for whole game minutes."""
    return format_play_time(int(minutes) * 60, fmt)
