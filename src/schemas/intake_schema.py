"""Intake data models validated at the wizard / API boundary."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator


class VisitReason(str, Enum):
    TEST_DRIVE = "test_drive"
    PURCHASE = "purchase"
    TRADE_IN = "trade_in"
    BROWSING = "browsing"


class UrgencyLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Timeframe(str, Enum):
    TODAY = "today"
    THIS_WEEK = "this week"
    THIS_MONTH = "this month"
    NO_RUSH = "no rush"


class IntakeResponse(BaseModel):
    """
    A submitted intake questionnaire.

    Yes/no fields are tri-state: ``True``, ``False`` or ``None`` when the
    wizard skipped the question. Only real booleans are accepted so that a
    stray ``"no"`` or ``0`` cannot masquerade as an answer.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    raw_input: str = ""
    visit_reason: Optional[VisitReason] = None
    needs_financing: Optional[StrictBool] = None
    will_finalize_paperwork: Optional[StrictBool] = None
    needs_appraisal: Optional[StrictBool] = None
    wants_warranty: Optional[StrictBool] = None
    wants_test_drive: Optional[StrictBool] = None
    wants_multiple_cars: Optional[StrictBool] = None
    has_trade_in: Optional[StrictBool] = None
    urgency_level: Optional[UrgencyLevel] = None
    preferred_timeframe: Optional[Timeframe] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("visit_reason", mode="before")
    @classmethod
    def _single_visit_reason(cls, value: Any) -> Any:
        # Stored records keep the reason as a one-element list.
        if isinstance(value, (list, tuple)):
            if len(value) > 1:
                raise ValueError("only one visit reason is supported per intake")
            return value[0] if value else None
        return value
