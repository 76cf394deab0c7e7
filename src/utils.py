"""Shared utilities used across the smart queue."""

from datetime import datetime


def clamp01(value: float) -> float:
    """Clamp a value into the closed interval [0, 1].

    Examples:
        >>> clamp01(1.3)
        1.0
        >>> clamp01(-0.2)
        0.0
    """
    return min(max(value, 0.0), 1.0)


def format_time_ago(created_at: datetime, now: datetime) -> str:
    """Render a wait time the way the queue board shows it.

    Examples:
        >>> format_time_ago(datetime(2025, 3, 15, 9, 0), datetime(2025, 3, 15, 9, 45))
        '45m ago'
        >>> format_time_ago(datetime(2025, 3, 15, 9, 0), datetime(2025, 3, 15, 12, 10))
        '3h ago'
    """
    minutes = int((now - created_at).total_seconds() // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"
