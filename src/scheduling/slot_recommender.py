"""
Appointment slot recommendations for a single showroom day.

Candidate slots sit on a fixed half-hour grid across business hours. Each
slot gets a weight starting at 1.0:

    +0.30  Critical/High priority customer, slot before 14:00
    +0.20  purchase intent          -0.20  browsing intent
    +0.10  wants a test drive       +0.15  wants to try multiple cars
    +0.20  needs financing          +0.15  trade-in with appraisal

The reported ``availability`` is capped at 1.0 with no floor. Slot
classification reads the uncapped ``raw_weight``: above 1.2 is recommended,
above 0.5 is available, anything else is limited. Slots overlapping an
existing appointment are weighted 0.0. This is a best-effort check against
the appointments handed in, not a calendar guarantee.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from src.config import settings
from src.schemas.appointment_schema import Appointment, AppointmentSlot
from src.schemas.customer_schema import (
    CustomerRecord,
    IntentType,
    PriorityLevel,
    TimeAllocation,
)
from src.scoring.score_calculator import get_priority_level

logger = logging.getLogger(__name__)

BASE_WEIGHT = 1.0
MAX_AVAILABILITY = 1.0
CONFLICT_WEIGHT = 0.0

PRIORITY_WINDOW_BONUS = 0.30
PRIORITY_WINDOW_LEVELS = (PriorityLevel.CRITICAL, PriorityLevel.HIGH)

INTENT_ADJUSTMENTS: dict[IntentType, float] = {
    IntentType.PURCHASE: 0.20,
    IntentType.BROWSING: -0.20,
}

SERVICE_NEED_BONUSES: dict[str, float] = {
    "wants_test_drive": 0.10,
    "wants_multiple_cars": 0.15,
    "needs_financing": 0.20,
}
TRADE_IN_APPRAISAL_BONUS = 0.15

APPOINTMENT_DURATIONS: dict[TimeAllocation, int] = {
    TimeAllocation.SHORT: 20,
    TimeAllocation.STANDARD: 45,
    TimeAllocation.EXTENDED: 90,
}
DEFAULT_DURATION_MINUTES = 30

NOON_HOUR = 12
EXTENDED_MIN_MINUTES = 90
STANDARD_MIN_MINUTES = 30
MAX_EXTENDED_PER_PERIOD = 2
LONG_APPOINTMENT_MINUTES = 45


def get_appointment_duration(time_allocation: Optional[TimeAllocation]) -> int:
    """Appointment length in minutes for a time allocation bucket."""
    return APPOINTMENT_DURATIONS.get(time_allocation, DEFAULT_DURATION_MINUTES)


def _period(start: datetime) -> str:
    return "morning" if start.hour < NOON_HOUR else "afternoon"


def generate_time_slots(day: date, now: Optional[datetime] = None) -> list[datetime]:
    """Slot start times across business hours, skipping past slots on ``now``'s day."""
    dealership = settings.dealership
    start = datetime.combine(day, time(hour=dealership.open_hour))
    if dealership.close_hour >= 24:
        close = datetime.combine(day + timedelta(days=1), time())
    else:
        close = datetime.combine(day, time(hour=dealership.close_hour))
    step = timedelta(minutes=dealership.slot_interval_minutes)

    slots: list[datetime] = []
    current = start
    while current < close:
        if now is None or current.date() != now.date() or current >= now:
            slots.append(current)
        current += step
    return slots


def has_conflict(
    start: datetime, duration_minutes: int, existing: Sequence[Appointment]
) -> bool:
    """True if ``[start, start + duration)`` overlaps any existing appointment."""
    end = start + timedelta(minutes=duration_minutes)
    return any(start < apt.end_time and end > apt.chosen_time for apt in existing)


def _slot_weight(customer: CustomerRecord, start: datetime, level: PriorityLevel) -> float:
    weight = BASE_WEIGHT

    if level in PRIORITY_WINDOW_LEVELS and start.hour < settings.scheduling.priority_window_end_hour:
        weight += PRIORITY_WINDOW_BONUS

    weight += INTENT_ADJUSTMENTS.get(customer.intent_type, 0.0)

    for name, bonus in SERVICE_NEED_BONUSES.items():
        if getattr(customer, name) is True:
            weight += bonus
    if customer.has_trade_in is True and customer.needs_appraisal is True:
        weight += TRADE_IN_APPRAISAL_BONUS

    return weight


def recommend_slots(
    customer: CustomerRecord,
    day: date,
    existing_appointments: Sequence[Appointment] = (),
    now: Optional[datetime] = None,
) -> list[AppointmentSlot]:
    """
    Weight every candidate slot on ``day`` for ``customer``.

    Args:
        customer: Stored or scored customer record.
        day: The showroom day to schedule on.
        existing_appointments: Bookings already on the calendar.
        now: Current time; slots earlier than this on the same day are dropped.

    Returns:
        Slots in chronological order.
    """
    if now is None:
        now = datetime.now()

    level = get_priority_level(customer.score)
    duration = get_appointment_duration(customer.time_allocation)
    scheduling = settings.scheduling

    slots: list[AppointmentSlot] = []
    for start in generate_time_slots(day, now):
        conflict = has_conflict(start, duration, existing_appointments)
        raw_weight = CONFLICT_WEIGHT if conflict else _slot_weight(customer, start, level)
        slots.append(
            AppointmentSlot(
                start=start,
                end=start + timedelta(minutes=duration),
                duration_minutes=duration,
                period=_period(start),
                availability=min(raw_weight, MAX_AVAILABILITY),
                raw_weight=raw_weight,
                is_recommended=raw_weight > scheduling.recommended_threshold,
                is_available=raw_weight > scheduling.available_threshold,
                has_conflict=conflict,
            )
        )

    logger.debug(
        "Recommended %d of %d slots for customer %s on %s",
        sum(1 for s in slots if s.is_recommended), len(slots), customer.id, day.isoformat(),
    )
    return slots


def preferred_period(
    time_allocation: Optional[TimeAllocation], existing: Sequence[Appointment]
) -> Optional[str]:
    """
    Half of the day that avoids clustering similar appointments.

    Extended visits steer away from a half already holding more than two
    extended appointments. Standard visits go to whichever half has fewer
    standard appointments (morning on a tie). Short visits have no period
    preference; they are steered into gaps with ``gap_slots`` instead.
    """
    if time_allocation == TimeAllocation.EXTENDED:
        extended = [a for a in existing if a.duration_minutes >= EXTENDED_MIN_MINUTES]
        afternoon = sum(1 for a in extended if a.chosen_time.hour >= NOON_HOUR)
        morning = len(extended) - afternoon
        if afternoon > MAX_EXTENDED_PER_PERIOD:
            return "morning"
        if morning > MAX_EXTENDED_PER_PERIOD:
            return "afternoon"
        return None

    if time_allocation == TimeAllocation.STANDARD:
        standard = [
            a for a in existing
            if STANDARD_MIN_MINUTES <= a.duration_minutes < EXTENDED_MIN_MINUTES
        ]
        morning = sum(1 for a in standard if a.chosen_time.hour < NOON_HOUR)
        afternoon = len(standard) - morning
        return "afternoon" if morning > afternoon else "morning"

    return None


def gap_slots(
    slots: Sequence[AppointmentSlot], existing: Sequence[Appointment]
) -> list[AppointmentSlot]:
    """
    Slots that fit in a gap around a longer appointment, for short visits.

    A slot qualifies when it ends by the start of, or starts at or after the
    end of, some appointment of 45 minutes or more. Falls back to all of
    ``slots`` when none qualify.
    """
    long_appointments = [
        a for a in existing if a.duration_minutes >= LONG_APPOINTMENT_MINUTES
    ]
    gaps = [
        slot for slot in slots
        if any(
            slot.end <= apt.chosen_time or slot.start >= apt.end_time
            for apt in long_appointments
        )
    ]
    return gaps or list(slots)
