"""
Queue ordering that keeps high-priority customers from bunching up.

Customers are sorted by adjusted score and split into three tiers. High
and medium tiers are interleaved one-for-one so two purchase-ready
customers are not seated back-to-back while medium customers are waiting;
the low tier always goes last. Tier order and within-tier score order are
preserved. This is a heuristic, not an optimal schedule.
"""

import logging
from enum import Enum
from typing import Sequence

from src.config import settings
from src.schemas.customer_schema import ScoredCustomer

logger = logging.getLogger(__name__)


class QueueTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def get_tier(score: float) -> QueueTier:
    """Tier for an adjusted score: high above 0.6, low at or below 0.3."""
    if score > settings.queue.high_tier_threshold:
        return QueueTier.HIGH
    if score > settings.queue.low_tier_threshold:
        return QueueTier.MEDIUM
    return QueueTier.LOW


def _interleave(
    first: Sequence[ScoredCustomer], second: Sequence[ScoredCustomer]
) -> list[ScoredCustomer]:
    merged: list[ScoredCustomer] = []
    for index in range(max(len(first), len(second))):
        if index < len(first):
            merged.append(first[index])
        if index < len(second):
            merged.append(second[index])
    return merged


def optimize_queue(customers: Sequence[ScoredCustomer]) -> list[ScoredCustomer]:
    """
    Order customers for service.

    Args:
        customers: Customers with ``adjusted_score`` already computed.

    Returns:
        A new list; the input and its entries are not modified.
    """
    ranked = sorted(customers, key=lambda c: c.adjusted_score, reverse=True)

    tiers: dict[QueueTier, list[ScoredCustomer]] = {tier: [] for tier in QueueTier}
    for customer in ranked:
        tiers[get_tier(customer.adjusted_score)].append(customer)

    ordered = _interleave(tiers[QueueTier.HIGH], tiers[QueueTier.MEDIUM])
    ordered.extend(tiers[QueueTier.LOW])

    logger.debug(
        "Optimized queue: %d high, %d medium, %d low",
        len(tiers[QueueTier.HIGH]), len(tiers[QueueTier.MEDIUM]), len(tiers[QueueTier.LOW]),
    )
    return ordered
