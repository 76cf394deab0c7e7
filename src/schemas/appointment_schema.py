"""Appointment slot and booking data models."""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.schemas.customer_schema import IntentType, TimeAllocation
from src.schemas.intake_schema import VisitReason


class AppointmentSlot(BaseModel):
    """Candidate time slot, regenerated for every scheduling view."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    duration_minutes: int
    period: str
    availability: float
    raw_weight: float
    is_recommended: bool = False
    is_available: bool = False
    has_conflict: bool = False


class Appointment(BaseModel):
    """Booked appointment. Entries in the log are never modified."""

    model_config = ConfigDict(frozen=True)

    id: str
    customer_id: int
    customer_name: str
    chosen_time: datetime
    duration_minutes: int
    intent_type: IntentType
    time_allocation: TimeAllocation
    visit_reason: Optional[VisitReason] = None
    needs_financing: Optional[bool] = None
    will_finalize_paperwork: Optional[bool] = None
    needs_appraisal: Optional[bool] = None
    wants_warranty: Optional[bool] = None
    wants_test_drive: Optional[bool] = None
    wants_multiple_cars: Optional[bool] = None
    has_trade_in: Optional[bool] = None
    created_at: datetime

    @property
    def end_time(self) -> datetime:
        return self.chosen_time + timedelta(minutes=self.duration_minutes)
