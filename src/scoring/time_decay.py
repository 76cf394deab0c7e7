"""Wait-time decay applied to stored priority scores."""

from datetime import datetime

# (max hours waited, factor); anything longer gets FINAL_DECAY
DECAY_STEPS: list[tuple[float, float]] = [
    (1.0, 1.0),
    (2.0, 0.8),
    (4.0, 0.6),
]
FINAL_DECAY = 0.4

SECONDS_PER_HOUR = 3600.0


def hours_since(created_at: datetime, now: datetime) -> float:
    """Hours elapsed between two instants; never negative."""
    return max((now - created_at).total_seconds() / SECONDS_PER_HOUR, 0.0)


def calculate_time_decay(hours: float) -> float:
    """Step decay factor for a wait of ``hours``. Breakpoints are inclusive."""
    for max_hours, factor in DECAY_STEPS:
        if hours <= max_hours:
            return factor
    return FINAL_DECAY


def adjusted_score(score: float, created_at: datetime, now: datetime) -> float:
    """Current queue score: the stored score scaled by the wait-time decay."""
    return score * calculate_time_decay(hours_since(created_at, now))
