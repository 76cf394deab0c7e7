"""
Step-by-step intake wizard with conditional questions.

Steps form a fixed, ordered list. Each step may carry a guard over the
answers collected so far; a step whose guard fails is skipped and its field
stays unanswered (``None``), which scoring treats differently from "no".
Guards only look at earlier steps, so the question graph is acyclic.

Usage:
    wizard = IntakeWizard()
    ok, msg = wizard.answer("Jane Doe")
    ...
    if wizard.is_complete():
        intake = wizard.build_response()
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from src.schemas.intake_schema import IntakeResponse, Timeframe, UrgencyLevel, VisitReason

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MAX_TEXT_LENGTH = 500

YES_WORDS = frozenset({"yes", "y", "yeah", "yep", "true", "sure"})
NO_WORDS = frozenset({"no", "n", "nope", "nah", "false"})

Answers = dict[str, Any]


class StepKind(str, Enum):
    """How a step's answer is entered and validated."""

    TEXT = "text"
    CHOICE = "choice"
    YES_NO = "yes_no"


@dataclass(frozen=True)
class Choice:
    value: str
    label: str
    description: str = ""


@dataclass(frozen=True)
class StepDefinition:
    """Schema for a single wizard question."""

    field: str
    title: str
    question: str
    kind: StepKind
    description: str = ""
    choices: tuple[Choice, ...] = ()
    required: bool = True
    guard: Optional[Callable[[Answers], bool]] = None
    min_length: int = 0


def _reason_in(*reasons: VisitReason) -> Callable[[Answers], bool]:
    values = {r.value for r in reasons}
    return lambda answers: answers.get("visit_reason") in values


def _show_appraisal(answers: Answers) -> bool:
    return answers.get("visit_reason") == VisitReason.TRADE_IN.value or answers.get("has_trade_in") is True


def _show_test_drive(answers: Answers) -> bool:
    return answers.get("visit_reason") != VisitReason.BROWSING.value


def _show_multiple_cars(answers: Answers) -> bool:
    return answers.get("wants_test_drive") is True


def _show_paperwork(answers: Answers) -> bool:
    return answers.get("visit_reason") == VisitReason.PURCHASE.value or answers.get("needs_financing") is True


STEP_DEFINITIONS: list[StepDefinition] = [
    StepDefinition(
        field="name",
        title="Welcome",
        question="What's your name?",
        kind=StepKind.TEXT,
        min_length=MIN_NAME_LENGTH,
    ),
    StepDefinition(
        field="raw_input",
        title="Your Visit",
        question="What brings you in today?",
        kind=StepKind.TEXT,
        description="e.g. 'I'm looking to buy a new SUV today'",
        required=False,
    ),
    StepDefinition(
        field="visit_reason",
        title="Visit Reason",
        question="Which best describes your visit?",
        kind=StepKind.CHOICE,
        choices=(
            Choice(VisitReason.TEST_DRIVE.value, "Test drive", "Try a vehicle on the road"),
            Choice(VisitReason.PURCHASE.value, "Purchase", "Ready to buy"),
            Choice(VisitReason.TRADE_IN.value, "Trade-in", "Trade in my current vehicle"),
            Choice(VisitReason.BROWSING.value, "Browsing", "Just looking around"),
        ),
    ),
    StepDefinition(
        field="has_trade_in",
        title="Trade-In",
        question="Do you have a vehicle to trade in?",
        kind=StepKind.YES_NO,
        description="We can help you with the trade-in process",
    ),
    StepDefinition(
        field="needs_appraisal",
        title="Appraisal",
        question="Do you need an appraisal for your current vehicle?",
        kind=StepKind.YES_NO,
        description="We can evaluate your current vehicle's trade-in value",
        guard=_show_appraisal,
    ),
    StepDefinition(
        field="wants_test_drive",
        title="Test Drive",
        question="Would you like to test drive a vehicle today?",
        kind=StepKind.YES_NO,
        guard=_show_test_drive,
    ),
    StepDefinition(
        field="wants_multiple_cars",
        title="Multiple Vehicles",
        question="Do you want to test drive multiple vehicles?",
        kind=StepKind.YES_NO,
        description="Compare different models and options",
        guard=_show_multiple_cars,
    ),
    StepDefinition(
        field="needs_financing",
        title="Financing",
        question="Do you need financing for your purchase?",
        kind=StepKind.YES_NO,
        guard=_reason_in(VisitReason.PURCHASE, VisitReason.TEST_DRIVE),
    ),
    StepDefinition(
        field="will_finalize_paperwork",
        title="Paperwork",
        question="Are you planning to finalize paperwork today?",
        kind=StepKind.YES_NO,
        guard=_show_paperwork,
    ),
    StepDefinition(
        field="wants_warranty",
        title="Warranty",
        question="Are you interested in an extended warranty?",
        kind=StepKind.YES_NO,
        guard=_reason_in(VisitReason.PURCHASE, VisitReason.TEST_DRIVE),
    ),
    StepDefinition(
        field="urgency_level",
        title="Urgency",
        question="How urgent is your need?",
        kind=StepKind.CHOICE,
        choices=(
            Choice(UrgencyLevel.HIGH.value, "Very urgent", "Need immediate assistance today"),
            Choice(UrgencyLevel.MEDIUM.value, "Somewhat urgent", "Would like to handle this soon"),
            Choice(UrgencyLevel.LOW.value, "Not urgent", "Just exploring options"),
        ),
    ),
    StepDefinition(
        field="preferred_timeframe",
        title="Timeline",
        question="What's your preferred timeframe?",
        kind=StepKind.CHOICE,
        choices=(
            Choice(Timeframe.TODAY.value, "Today", "Need to complete this today"),
            Choice(Timeframe.THIS_WEEK.value, "This week", "Within the next few days"),
            Choice(Timeframe.THIS_MONTH.value, "This month", "Within the next few weeks"),
            Choice(Timeframe.NO_RUSH.value, "No rush", "No specific timeline"),
        ),
    ),
]


def _normalize_key(value: str) -> str:
    return " ".join(value.lower().replace("_", " ").replace("-", " ").split())


@dataclass
class IntakeWizard:
    """
    Walks a customer through the intake questions.

    All state lives on the instance: the answers collected so far and the
    field of the step currently on screen (``None`` once past the last step).
    """

    steps: list[StepDefinition] = field(default_factory=lambda: list(STEP_DEFINITIONS))
    answers: Answers = field(default_factory=dict)
    position: Optional[str] = None

    def __post_init__(self) -> None:
        if self.position is None and self.steps:
            self.position = self.steps[0].field

    def _get_definition(self, name: str) -> StepDefinition:
        for step in self.steps:
            if step.field == name:
                return step
        raise ValueError(f"Unknown step: {name}")

    def visible_steps(self) -> list[StepDefinition]:
        """Steps whose guards pass for the current answers."""
        return [s for s in self.steps if s.guard is None or s.guard(self.answers)]

    def current_step(self) -> Optional[StepDefinition]:
        if self.position is None:
            return None
        return self._get_definition(self.position)

    def progress(self) -> tuple[int, int]:
        """(1-based index of the current step, number of visible steps)."""
        visible = self.visible_steps()
        if self.position is None:
            return len(visible), len(visible)
        names = [s.field for s in visible]
        return names.index(self.position) + 1, len(visible)

    def _parse(self, step: StepDefinition, raw: Any) -> tuple[bool, Any]:
        if step.kind == StepKind.YES_NO:
            if isinstance(raw, bool):
                return True, raw
            word = str(raw).strip().lower()
            if word in YES_WORDS:
                return True, True
            if word in NO_WORDS:
                return True, False
            return False, None

        if step.kind == StepKind.CHOICE:
            key = _normalize_key(str(raw))
            for index, choice in enumerate(step.choices, start=1):
                if key in (_normalize_key(choice.value), _normalize_key(choice.label), str(index)):
                    return True, choice.value
            return False, None

        text = str(raw).strip()
        if len(text) > MAX_TEXT_LENGTH:
            return False, None
        if step.required and len(text) < max(step.min_length, 1):
            return False, None
        return True, text

    def _prune_hidden_answers(self) -> None:
        # Repeat until stable: clearing one answer can hide a dependent step.
        while True:
            visible = {s.field for s in self.visible_steps()}
            hidden = [name for name in self.answers if name not in visible]
            if not hidden:
                return
            for name in hidden:
                logger.debug("Clearing answer for skipped step '%s'", name)
                del self.answers[name]

    def answer(self, raw: Any) -> tuple[bool, str]:
        """
        Record an answer for the current step and advance.

        Returns:
            (success, message). On failure the wizard stays on the same step.
        """
        step = self.current_step()
        if step is None:
            return False, "The intake is already complete."

        ok, value = self._parse(step, raw)
        if not ok:
            logger.debug("Step '%s' rejected answer %r", step.field, raw)
            return False, f"'{raw}' isn't a valid answer to: {step.question}"

        self.answers[step.field] = value
        self._prune_hidden_answers()

        visible = [s.field for s in self.visible_steps()]
        index = visible.index(step.field)
        self.position = visible[index + 1] if index + 1 < len(visible) else None
        return True, f"Got {step.title.lower()}: {value}"

    def back(self) -> Optional[StepDefinition]:
        """Return to the previous visible step."""
        visible = [s.field for s in self.visible_steps()]
        if self.position is None:
            self.position = visible[-1] if visible else None
        else:
            index = visible.index(self.position)
            if index > 0:
                self.position = visible[index - 1]
        return self.current_step()

    def missing_steps(self) -> list[StepDefinition]:
        """Visible required steps without an answer."""
        return [
            s for s in self.visible_steps()
            if s.required and s.field not in self.answers
        ]

    def is_complete(self) -> bool:
        return self.position is None and not self.missing_steps()

    def build_response(self) -> IntakeResponse:
        """
        Turn the collected answers into a validated intake response.

        Raises:
            ValueError: If required steps are still unanswered.
        """
        missing = self.missing_steps()
        if missing:
            names = ", ".join(s.title.lower() for s in missing)
            raise ValueError(f"Intake incomplete, missing: {names}")
        return IntakeResponse(**self.answers)
