"""Customer records and their derived, per-read queue view."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from src.schemas.intake_schema import IntakeResponse


class IntentType(str, Enum):
    PURCHASE = "purchase"
    TRADE_IN = "trade-in"
    BROWSING = "browsing"
    SERVICE = "service"
    OTHER = "other"


class TimeAllocation(str, Enum):
    SHORT = "short"
    STANDARD = "standard"
    EXTENDED = "extended"


class CustomerStatus(str, Enum):
    WAITING = "waiting"
    SCHEDULED = "scheduled"


class PriorityLevel(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    VERY_LOW = "Very Low"


class CustomerRecord(IntakeResponse):
    """Customer as held by the store: the intake plus values fixed at intake time."""

    id: int
    intent_type: IntentType
    time_allocation: TimeAllocation
    score: float = Field(ge=0.0, le=1.0)
    created_at: datetime
    status: CustomerStatus = CustomerStatus.WAITING


class ScoredCustomer(CustomerRecord):
    """
    A customer as seen by the queue at a given instant.

    ``adjusted_score`` depends on the read time and is never stored;
    ``priority_level`` is derived from the base ``score``.
    """

    adjusted_score: float = Field(ge=0.0, le=1.0)
    priority_level: PriorityLevel
