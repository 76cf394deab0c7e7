"""Tests for intake and appointment data models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.schemas.appointment_schema import Appointment
from src.schemas.customer_schema import IntentType, TimeAllocation
from src.schemas.intake_schema import IntakeResponse, VisitReason
from tests.conftest import make_intake, make_record


class TestIntakeResponse:
    def test_unanswered_fields_default_to_none(self):
        intake = make_intake()
        assert intake.needs_financing is None
        assert intake.visit_reason is None
        assert intake.raw_input == ""

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="blank"):
            IntakeResponse(name="   ")

    @pytest.mark.parametrize("value", ["no", 0, 1, "yes"])
    def test_non_boolean_answers_rejected(self, value):
        with pytest.raises(ValidationError):
            make_intake(needs_financing=value)

    def test_single_element_reason_list_unwrapped(self):
        assert make_intake(visit_reason=["trade_in"]).visit_reason == VisitReason.TRADE_IN

    def test_empty_reason_list_is_unanswered(self):
        assert make_intake(visit_reason=[]).visit_reason is None

    def test_multiple_reasons_rejected(self):
        with pytest.raises(ValidationError, match="only one visit reason"):
            make_intake(visit_reason=["purchase", "trade_in"])

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            make_intake(favourite_colour="red")

    def test_frozen(self):
        intake = make_intake()
        with pytest.raises(ValidationError):
            intake.name = "Other"


class TestCustomerRecord:
    def test_score_must_be_in_unit_interval(self):
        with pytest.raises(ValidationError):
            make_record(score=1.2)

    def test_defaults_to_waiting(self):
        assert make_record().status.value == "waiting"


class TestAppointment:
    def test_end_time(self):
        appointment = Appointment(
            id="APT-000001",
            customer_id=1,
            customer_name="Ann Lee",
            chosen_time=datetime(2025, 3, 15, 16, 30),
            duration_minutes=90,
            intent_type=IntentType.PURCHASE,
            time_allocation=TimeAllocation.EXTENDED,
            created_at=datetime(2025, 3, 15, 8, 0),
        )
        assert appointment.end_time == datetime(2025, 3, 15, 18, 0)
