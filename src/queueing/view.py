"""
Queue board view: scoring on read, sort keys, priority filter, summary.

Sorting and filtering are display-only and sit on top of the optimizer.
Sorting by ``score`` keeps the optimizer's interleaved order rather than
re-sorting by raw score.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from src.queueing.optimizer import QueueTier, get_tier, optimize_queue
from src.schemas.customer_schema import (
    CustomerRecord,
    CustomerStatus,
    PriorityLevel,
    ScoredCustomer,
)
from src.scoring.score_calculator import get_priority_level
from src.scoring.time_decay import adjusted_score

logger = logging.getLogger(__name__)

SORT_KEYS = ("score", "wait_time", "name")
ALL_PRIORITIES = "all"


@dataclass(frozen=True)
class QueueSummary:
    """Header figures for the queue board."""

    total: int
    high_priority: int
    average_wait_minutes: float
    waiting: int
    scheduled: int


def score_customer(record: CustomerRecord, now: datetime) -> ScoredCustomer:
    """Attach the read-time adjusted score and the priority label."""
    return ScoredCustomer(
        **record.model_dump(exclude={"adjusted_score", "priority_level"}),
        adjusted_score=adjusted_score(record.score, record.created_at, now),
        priority_level=get_priority_level(record.score),
    )


def _parse_priority_filter(priority_filter: str) -> Optional[PriorityLevel]:
    if priority_filter == ALL_PRIORITIES:
        return None
    try:
        return PriorityLevel(priority_filter)
    except ValueError:
        valid = [ALL_PRIORITIES] + [p.value for p in PriorityLevel]
        raise ValueError(
            f"Unknown priority filter {priority_filter!r}. Valid: {valid}"
        ) from None


def build_queue(
    records: Iterable[CustomerRecord],
    now: datetime,
    sort_by: str = "score",
    priority_filter: str = ALL_PRIORITIES,
    include_scheduled: bool = False,
) -> list[ScoredCustomer]:
    """
    Build the ordered queue as the board displays it.

    Args:
        records: Stored customer records.
        now: Read time used for wait-time decay.
        sort_by: ``"score"`` (optimizer order), ``"wait_time"`` or ``"name"``.
        priority_filter: ``"all"`` or a priority label such as ``"Critical"``.
        include_scheduled: Keep customers who already have an appointment.

    Raises:
        ValueError: On an unknown sort key or priority filter.
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key {sort_by!r}. Valid: {list(SORT_KEYS)}")
    level = _parse_priority_filter(priority_filter)

    scored = [
        score_customer(record, now)
        for record in records
        if include_scheduled or record.status == CustomerStatus.WAITING
    ]
    queue = optimize_queue(scored)

    if level is not None:
        queue = [c for c in queue if c.priority_level == level]

    if sort_by == "wait_time":
        queue = sorted(queue, key=lambda c: c.created_at)
    elif sort_by == "name":
        queue = sorted(queue, key=lambda c: c.name.lower())
    logger.debug(
        "Queue built: %d customers (sort=%s, filter=%s)", len(queue), sort_by, priority_filter
    )
    return queue


def summarize_queue(customers: Sequence[ScoredCustomer], now: datetime) -> QueueSummary:
    """Totals, high-priority count and average wait for the board header."""
    total = len(customers)
    wait_minutes = sum((now - c.created_at).total_seconds() / 60 for c in customers)
    return QueueSummary(
        total=total,
        high_priority=sum(1 for c in customers if get_tier(c.adjusted_score) == QueueTier.HIGH),
        average_wait_minutes=wait_minutes / total if total else 0.0,
        waiting=sum(1 for c in customers if c.status == CustomerStatus.WAITING),
        scheduled=sum(1 for c in customers if c.status == CustomerStatus.SCHEDULED),
    )
