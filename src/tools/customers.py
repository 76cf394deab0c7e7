"""
In-memory customer store.

Stands in for the showroom database: customers keyed by an incrementing
id, created from a submitted intake, read back newest first, and updated
only through the visit lifecycle (waiting -> scheduled).
"""

import itertools
from datetime import datetime, timedelta
from typing import Optional

from src.intake.lifecycle import VisitLifecycle
from src.logging_context import get_customer_logger, set_customer_id
from src.schemas.customer_schema import CustomerRecord, CustomerStatus
from src.schemas.intake_schema import IntakeResponse
from src.scoring.intent_classifier import classify_intent
from src.scoring.score_calculator import compute_score

logger = get_customer_logger(__name__)

_customers: dict[int, CustomerRecord] = {}
_lifecycles: dict[int, VisitLifecycle] = {}
_ids = itertools.count(1)

# Demo customers, with minutes since arrival
SAMPLE_CUSTOMERS: list[tuple[dict, int]] = [
    (
        {
            "name": "John Smith",
            "raw_input": "I'm looking to buy a new SUV today and wanted to check out options",
            "visit_reason": "purchase",
            "needs_financing": True,
            "will_finalize_paperwork": True,
            "wants_warranty": True,
            "wants_test_drive": True,
            "wants_multiple_cars": True,
            "has_trade_in": False,
            "urgency_level": "high",
            "preferred_timeframe": "today",
        },
        30,
    ),
    (
        {
            "name": "Sarah Johnson",
            "raw_input": "I need to get my oil changed and brakes checked",
            "visit_reason": "browsing",
            "wants_warranty": False,
            "has_trade_in": False,
            "urgency_level": "medium",
            "preferred_timeframe": "this week",
        },
        15,
    ),
    (
        {
            "name": "Mike Davis",
            "raw_input": "Just browsing around, might be interested in trading in my car",
            "visit_reason": "trade_in",
            "needs_appraisal": True,
            "wants_warranty": False,
            "has_trade_in": True,
            "urgency_level": "low",
            "preferred_timeframe": "this month",
        },
        45,
    ),
    (
        {
            "name": "Lisa Chen",
            "raw_input": "I need to buy a car urgently for work, budget around $25k",
            "visit_reason": "test_drive",
            "needs_financing": True,
            "will_finalize_paperwork": True,
            "wants_warranty": True,
            "wants_test_drive": True,
            "urgency_level": "high",
            "preferred_timeframe": "today",
        },
        5,
    ),
]


def create_customer(
    intake: IntakeResponse,
    now: Optional[datetime] = None,
    policy: Optional[str] = None,
) -> CustomerRecord:
    """Classify and score an intake, then add the customer to the queue."""
    intent_type, time_allocation = classify_intent(intake, policy)
    customer_id = next(_ids)
    record = CustomerRecord(
        **intake.model_dump(),
        id=customer_id,
        intent_type=intent_type,
        time_allocation=time_allocation,
        score=compute_score(intake),
        created_at=now or datetime.now(),
        status=CustomerStatus.WAITING,
    )
    _customers[customer_id] = record
    _lifecycles[customer_id] = VisitLifecycle()

    set_customer_id(customer_id)
    logger.info(
        "Customer added: %s (%s, %s, score=%.2f)",
        record.name, intent_type.value, time_allocation.value, record.score,
    )
    return record


def get_customer(customer_id: int) -> Optional[CustomerRecord]:
    """Retrieve a customer by id. Returns None if not found."""
    return _customers.get(customer_id)


def list_customers() -> list[CustomerRecord]:
    """All customers, most recent arrival first."""
    return sorted(_customers.values(), key=lambda c: c.created_at, reverse=True)


def update_status(customer_id: int, status: CustomerStatus) -> CustomerRecord:
    """
    Move a customer to a new status through the visit lifecycle.

    Raises:
        KeyError: If the customer does not exist.
        InvalidTransitionError: If the lifecycle does not allow the move.
    """
    if customer_id not in _customers:
        raise KeyError(f"Customer {customer_id} not found")

    set_customer_id(customer_id)
    _lifecycles[customer_id].transition_to(CustomerStatus(status))
    record = _customers[customer_id].model_copy(update={"status": CustomerStatus(status)})
    _customers[customer_id] = record
    logger.info("Customer %s status updated to %s", customer_id, record.status.value)
    return record


def seed_sample_customers(now: Optional[datetime] = None) -> list[CustomerRecord]:
    """Load the demo customers with staggered arrival times."""
    now = now or datetime.now()
    return [
        create_customer(IntakeResponse(**data), now=now - timedelta(minutes=minutes_ago))
        for data, minutes_ago in SAMPLE_CUSTOMERS
    ]


def reset() -> None:
    """Clear all customers. Used by test fixtures for isolation."""
    global _ids
    _customers.clear()
    _lifecycles.clear()
    _ids = itertools.count(1)
