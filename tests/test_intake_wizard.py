"""Tests for the intake wizard: parsing, conditional steps and navigation."""

import pytest

from src.intake.wizard import STEP_DEFINITIONS, IntakeWizard, StepKind
from src.schemas.intake_schema import Timeframe, UrgencyLevel, VisitReason


def answer_all(wizard: IntakeWizard, answers: list[str]) -> None:
    for value in answers:
        ok, message = wizard.answer(value)
        assert ok, message


def visible_fields(wizard: IntakeWizard) -> list[str]:
    return [s.field for s in wizard.visible_steps()]


class TestStepDefinitions:
    def test_fields_are_unique(self):
        fields = [s.field for s in STEP_DEFINITIONS]
        assert len(fields) == len(set(fields))

    def test_choice_steps_have_choices(self):
        for step in STEP_DEFINITIONS:
            if step.kind == StepKind.CHOICE:
                assert step.choices

    def test_starts_with_name(self, wizard):
        assert wizard.current_step().field == "name"
        assert wizard.progress() == (1, 7)


class TestParsing:
    def test_name_too_short_rejected(self, wizard):
        ok, message = wizard.answer("J")
        assert not ok
        assert "isn't a valid answer" in message
        assert wizard.current_step().field == "name"

    def test_name_is_stripped(self, wizard):
        answer_all(wizard, ["  Jane Doe  "])
        assert wizard.answers["name"] == "Jane Doe"

    def test_optional_text_may_be_empty(self, wizard):
        answer_all(wizard, ["Jane Doe", ""])
        assert wizard.current_step().field == "visit_reason"

    @pytest.mark.parametrize("raw", ["purchase", "Purchase", "2"])
    def test_choice_by_value_label_or_number(self, wizard, raw):
        answer_all(wizard, ["Jane Doe", "", raw])
        assert wizard.answers["visit_reason"] == VisitReason.PURCHASE.value

    def test_choice_label_with_hyphen(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "Trade-in"])
        assert wizard.answers["visit_reason"] == VisitReason.TRADE_IN.value

    def test_unknown_choice_rejected(self, wizard):
        answer_all(wizard, ["Jane Doe", ""])
        ok, _ = wizard.answer("lease")
        assert not ok
        assert "visit_reason" not in wizard.answers

    @pytest.mark.parametrize("raw,expected", [("yes", True), ("Y", True), ("nope", False), (False, False)])
    def test_yes_no_words(self, wizard, raw, expected):
        answer_all(wizard, ["Jane Doe", "", "browsing"])
        ok, _ = wizard.answer(raw)
        assert ok
        assert wizard.answers["has_trade_in"] is expected

    def test_yes_no_rejects_other_words(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "browsing"])
        ok, _ = wizard.answer("maybe")
        assert not ok


class TestConditionalSteps:
    def test_browsing_skips_purchase_questions(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "browsing", "no", "low", "no rush"])
        assert wizard.is_complete()
        intake = wizard.build_response()
        assert intake.needs_financing is None
        assert intake.wants_test_drive is None
        assert intake.will_finalize_paperwork is None
        assert intake.has_trade_in is False
        assert intake.urgency_level == UrgencyLevel.LOW
        assert intake.preferred_timeframe == Timeframe.NO_RUSH

    def test_trade_in_asks_for_appraisal(self, wizard):
        answer_all(wizard, ["Mike Davis", "", "trade_in", "yes"])
        assert wizard.current_step().field == "needs_appraisal"

    def test_trade_in_vehicle_on_other_visit_asks_for_appraisal(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "purchase"])
        assert "needs_appraisal" not in visible_fields(wizard)
        answer_all(wizard, ["yes"])
        assert wizard.current_step().field == "needs_appraisal"

    def test_multiple_cars_only_after_test_drive_yes(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "test_drive", "no", "no"])
        assert "wants_multiple_cars" not in visible_fields(wizard)
        assert wizard.current_step().field == "needs_financing"

    def test_paperwork_follows_financing_on_test_drive(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "test_drive", "no", "yes", "no"])
        assert "will_finalize_paperwork" not in visible_fields(wizard)
        answer_all(wizard, ["yes"])
        assert wizard.current_step().field == "will_finalize_paperwork"

    def test_full_buyer_intake(self, wizard):
        answer_all(
            wizard,
            ["Lisa Chen", "Need a car", "test drive", "no", "yes", "yes", "yes", "yes",
             "no", "high", "today"],
        )
        intake = wizard.build_response()
        assert intake.visit_reason == VisitReason.TEST_DRIVE
        assert intake.wants_multiple_cars is True
        assert intake.needs_financing is True
        assert intake.will_finalize_paperwork is True
        assert intake.wants_warranty is False
        assert intake.needs_appraisal is None


class TestNavigation:
    def test_back_returns_to_previous_step(self, wizard):
        answer_all(wizard, ["Jane Doe", ""])
        assert wizard.back().field == "raw_input"

    def test_back_on_first_step_stays(self, wizard):
        assert wizard.back().field == "name"

    def test_back_from_finished_goes_to_last_step(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "browsing", "no", "low", "no rush"])
        assert wizard.back().field == "preferred_timeframe"
        assert not wizard.is_complete()

    def test_changing_reason_clears_dependent_answers(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "test_drive", "no", "yes", "yes", "yes"])
        for _ in range(5):
            wizard.back()
        assert wizard.current_step().field == "visit_reason"

        answer_all(wizard, ["browsing"])
        assert "wants_test_drive" not in wizard.answers
        assert "wants_multiple_cars" not in wizard.answers
        assert "needs_financing" not in wizard.answers
        assert wizard.answers["has_trade_in"] is False

    def test_progress_tracks_visible_steps(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "purchase"])
        assert wizard.progress() == (4, 10)


class TestCompletion:
    def test_incomplete_build_raises(self, wizard):
        answer_all(wizard, ["Jane Doe"])
        with pytest.raises(ValueError, match="Intake incomplete"):
            wizard.build_response()

    def test_answer_after_completion(self, wizard):
        answer_all(wizard, ["Jane Doe", "", "browsing", "no", "low", "no rush"])
        ok, message = wizard.answer("extra")
        assert not ok
        assert message == "The intake is already complete."
