"""
Append-only appointment log.

Booking an appointment records it here and moves the customer from
``waiting`` to ``scheduled``. Entries are never changed or removed outside
of ``reset()``.
"""

import uuid
from datetime import date, datetime, time
from typing import Optional

from src.logging_context import get_customer_logger, set_customer_id
from src.scheduling.slot_recommender import get_appointment_duration
from src.schemas.appointment_schema import Appointment
from src.schemas.customer_schema import CustomerStatus, IntentType, TimeAllocation
from src.tools import customers

logger = get_customer_logger(__name__)

_appointments: list[Appointment] = []

# Demo bookings: (name, hour, minute, time allocation)
SAMPLE_APPOINTMENTS: list[tuple[str, int, int, TimeAllocation]] = [
    ("John Smith", 10, 0, TimeAllocation.EXTENDED),
    ("Sarah Johnson", 11, 30, TimeAllocation.STANDARD),
    ("Mike Davis", 14, 0, TimeAllocation.SHORT),
    ("Lisa Chen", 15, 30, TimeAllocation.EXTENDED),
]


def schedule_appointment(
    customer_id: int, chosen_time: datetime, now: Optional[datetime] = None
) -> Appointment:
    """
    Book a customer into a slot.

    Raises:
        KeyError: If the customer does not exist.
        InvalidTransitionError: If the customer is already scheduled.
        ValidationError: If the booking fields are malformed.
    """
    set_customer_id(customer_id)
    customer = customers.get_customer(customer_id)
    if customer is None:
        raise KeyError(f"Customer {customer_id} not found")

    appointment = Appointment(
        id=f"APT-{uuid.uuid4().hex[:6].upper()}",
        customer_id=customer_id,
        customer_name=customer.name,
        chosen_time=chosen_time,
        duration_minutes=get_appointment_duration(customer.time_allocation),
        intent_type=customer.intent_type,
        time_allocation=customer.time_allocation,
        visit_reason=customer.visit_reason,
        needs_financing=customer.needs_financing,
        will_finalize_paperwork=customer.will_finalize_paperwork,
        needs_appraisal=customer.needs_appraisal,
        wants_warranty=customer.wants_warranty,
        wants_test_drive=customer.wants_test_drive,
        wants_multiple_cars=customer.wants_multiple_cars,
        has_trade_in=customer.has_trade_in,
        created_at=now or datetime.now(),
    )
    # Built first: a rejected booking must leave the customer waiting
    customers.update_status(customer_id, CustomerStatus.SCHEDULED)
    _appointments.append(appointment)
    logger.info(
        "Appointment %s booked for %s at %s (%d min)",
        appointment.id, customer.name, appointment.chosen_time.isoformat(), appointment.duration_minutes,
    )
    return appointment


def list_appointments(day: Optional[date] = None) -> list[Appointment]:
    """Booked appointments in start order, optionally for a single day."""
    selected = [a for a in _appointments if day is None or a.chosen_time.date() == day]
    return sorted(selected, key=lambda a: a.chosen_time)


def sample_appointments(day: date) -> list[Appointment]:
    """Demo calendar for ``day``. Not written to the log."""
    return [
        Appointment(
            id=f"APT-SAMPLE{index}",
            customer_id=0,
            customer_name=name,
            chosen_time=datetime.combine(day, time(hour=hour, minute=minute)),
            duration_minutes=get_appointment_duration(allocation),
            intent_type=IntentType.OTHER,
            time_allocation=allocation,
            created_at=datetime.combine(day, time()),
        )
        for index, (name, hour, minute, allocation) in enumerate(SAMPLE_APPOINTMENTS, start=1)
    ]


def reset() -> None:
    """Clear the log. Used by test fixtures for isolation."""
    _appointments.clear()
