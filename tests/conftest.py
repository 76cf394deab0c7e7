"""Shared test fixtures and helpers."""

from datetime import datetime, timedelta
from typing import Any, Optional

import pytest

from src.intake.lifecycle import VisitLifecycle
from src.intake.wizard import IntakeWizard
from src.schemas.customer_schema import (
    CustomerRecord,
    CustomerStatus,
    IntentType,
    PriorityLevel,
    ScoredCustomer,
    TimeAllocation,
)
from src.schemas.intake_schema import IntakeResponse
from src.tools import appointments, customers

NOW = datetime(2025, 3, 15, 8, 0)


@pytest.fixture(autouse=True)
def reset_stores():
    customers.reset()
    appointments.reset()
    yield
    customers.reset()
    appointments.reset()


@pytest.fixture
def wizard():
    return IntakeWizard()


@pytest.fixture
def lifecycle():
    return VisitLifecycle()


def make_intake(**overrides: Any) -> IntakeResponse:
    """Helper to create an IntakeResponse; every question unanswered by default."""
    data: dict[str, Any] = {"name": "Test Customer"}
    data.update(overrides)
    return IntakeResponse(**data)


def make_record(
    customer_id: int = 1,
    score: float = 0.5,
    minutes_ago: float = 0,
    name: str = "",
    intent_type: IntentType = IntentType.OTHER,
    time_allocation: TimeAllocation = TimeAllocation.STANDARD,
    status: CustomerStatus = CustomerStatus.WAITING,
    now: datetime = NOW,
    **intake_fields: Any,
) -> CustomerRecord:
    """Helper to create a stored customer record with a fixed score."""
    return CustomerRecord(
        name=name or f"Customer {customer_id}",
        id=customer_id,
        intent_type=intent_type,
        time_allocation=time_allocation,
        score=score,
        created_at=now - timedelta(minutes=minutes_ago),
        status=status,
        **intake_fields,
    )


def make_scored(
    customer_id: int,
    adjusted: float,
    score: Optional[float] = None,
    minutes_ago: float = 0,
    name: str = "",
) -> ScoredCustomer:
    """Helper to create a queue entry with an explicit adjusted score."""
    return ScoredCustomer(
        name=name or f"Customer {customer_id}",
        id=customer_id,
        intent_type=IntentType.OTHER,
        time_allocation=TimeAllocation.STANDARD,
        score=adjusted if score is None else score,
        created_at=NOW - timedelta(minutes=minutes_ago),
        adjusted_score=adjusted,
        priority_level=PriorityLevel.MEDIUM,
    )
