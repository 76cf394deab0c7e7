"""
Offline console demo: showroom intake, live queue and slot booking.

Walks a customer through the intake wizard, adds them to the queue next to
the sample customers, prints the optimized queue board and the slot
recommendations, then books the chosen slot. No server or browser needed.

Usage:
    python console_demo.py
    python console_demo.py --scenario buyer
    python console_demo.py --scenario browser
"""

import argparse
import sys
from datetime import datetime
from typing import Optional

from src.config import settings
from src.intake.wizard import IntakeWizard, StepKind
from src.queueing.optimizer import get_tier
from src.queueing.view import build_queue, summarize_queue
from src.scheduling.slot_recommender import gap_slots, preferred_period, recommend_slots
from src.schemas.appointment_schema import AppointmentSlot
from src.schemas.customer_schema import CustomerRecord, CustomerStatus, TimeAllocation
from src.scoring.intent_classifier import get_intent_breakdown
from src.tools import appointments, customers
from src.utils import format_time_ago

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ConsoleSession:
    """Runs one intake-to-appointment visit in the terminal."""

    # Pre-scripted scenarios for --scenario flag: wizard answers, then slot choice
    SCENARIOS: dict[str, list[str]] = {
        "buyer": [
            "Lisa Chen",
            "I need a car for work this week, budget around $25k",
            "test drive",
            "no",
            "yes",
            "no",
            "yes",
            "yes",
            "no",
            "high",
            "today",
            "1",
        ],
        "browser": [
            "Tom Rivers",
            "Just having a look at the new hatchbacks",
            "browsing",
            "no",
            "low",
            "no rush",
            "1",
        ],
        "trade_in": [
            "Mike Davis",
            "Thinking of trading in my sedan",
            "trade-in",
            "yes",
            "yes",
            "no",
            "medium",
            "this week",
            "2",
        ],
    }

    MAX_SLOTS_SHOWN = 8

    def __init__(self, now: Optional[datetime] = None, seed: bool = True) -> None:
        self.now = now or datetime.now()
        self.wizard = IntakeWizard()
        self.customer: Optional[CustomerRecord] = None
        self.slots: list[AppointmentSlot] = []
        if seed and not customers.list_customers():
            customers.seed_sample_customers(self.now)

    def host_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[Host]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  SMART QUEUE - {title}{RESET}")
        print(f"{BOLD}  Dealership: {settings.dealership.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def ask_current_step(self) -> None:
        step = self.wizard.current_step()
        if step is None:
            return
        index, total = self.wizard.progress()
        self.host_say(f"Step {index} of {total}: {step.question}")
        if step.description:
            self.system_log(step.description)
        if step.kind == StepKind.CHOICE:
            for number, choice in enumerate(step.choices, start=1):
                self.system_log(f"{number}. {choice.label} - {choice.description}")
        elif step.kind == StepKind.YES_NO:
            self.system_log("yes / no")

    def handle_input(self, text: str) -> None:
        """Route one line of input to the wizard or the slot picker."""
        if self.customer is None:
            if text.lower() == "back":
                self.wizard.back()
            else:
                ok, message = self.wizard.answer(text)
                if not ok:
                    self.host_say(message)
                    self.ask_current_step()
                    return
                self.system_log(message)

            if self.wizard.is_complete():
                self._submit_intake()
            else:
                self.ask_current_step()
            return

        self._book_slot(text)

    def _submit_intake(self) -> None:
        intake = self.wizard.build_response()
        self.customer = customers.create_customer(intake, now=self.now)
        breakdown = get_intent_breakdown(intake)
        self.host_say(f"Thanks {self.customer.name}, you're in the queue.")
        self.system_log(
            f"Intent: {breakdown.intent_type.value} ({breakdown.confidence} confidence), "
            f"time: {breakdown.time_allocation.value}, score: {self.customer.score:.2f}"
        )
        self.print_queue()
        self.print_slots()

    def print_queue(self) -> None:
        queue = build_queue(customers.list_customers(), self.now)
        summary = summarize_queue(queue, self.now)
        print(f"\n{BOLD}Queue{RESET}  total={summary.total}  high={summary.high_priority}  "
              f"avg wait={round(summary.average_wait_minutes)}m")
        for position, entry in enumerate(queue, start=1):
            colour = YELLOW if entry.id == getattr(self.customer, "id", None) else ""
            print(
                f"{colour}  #{position:<2} {entry.name:<16} {entry.intent_type.value:<9} "
                f"{entry.priority_level.value:<9} {round(entry.adjusted_score * 100):>3}% "
                f"[{get_tier(entry.adjusted_score).value}] "
                f"{format_time_ago(entry.created_at, self.now)}{RESET}"
            )

    def print_slots(self) -> None:
        assert self.customer is not None
        existing = appointments.sample_appointments(self.now.date()) + appointments.list_appointments(
            self.now.date()
        )
        available = [
            s for s in recommend_slots(self.customer, self.now.date(), existing, now=self.now)
            if s.is_available
        ]
        if self.customer.time_allocation == TimeAllocation.SHORT:
            available = gap_slots(available, existing)
        self.slots = available[: self.MAX_SLOTS_SHOWN]

        if not self.slots:
            self.host_say("All time slots are booked for today. Please check with the front desk.")
            return

        period = preferred_period(self.customer.time_allocation, existing)
        if period:
            self.system_log(f"Suggested: {period} to avoid clustering similar appointments")
        self.host_say("Pick a time slot:")
        for number, slot in enumerate(self.slots, start=1):
            marker = f"{GREEN}recommended{RESET}" if slot.is_recommended else ""
            print(f"  {number}. {slot.start:%H:%M} ({slot.duration_minutes} min) {marker}")

    def _book_slot(self, text: str) -> None:
        choice = int(text) if text.isdigit() else 0
        if not 1 <= choice <= len(self.slots):
            self.host_say(f"Please pick a number between 1 and {len(self.slots)}.")
            return
        slot = self.slots[choice - 1]
        appointment = appointments.schedule_appointment(self.customer.id, slot.start, now=self.now)
        self.host_say(
            f"Appointment {appointment.id} booked for {appointment.customer_name} at "
            f"{appointment.chosen_time:%H:%M} ({appointment.duration_minutes} minutes)."
        )

    def is_finished(self) -> bool:
        return self.customer is not None and (
            not self.slots or customers.get_customer(self.customer.id).status == CustomerStatus.SCHEDULED
        )

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        self.ask_current_step()
        for step in steps:
            if self.is_finished():
                break
            print(f"\n{BLUE}[Customer] {RESET}{step}")
            self.handle_input(step)
        self._finish()

    def run(self) -> None:
        self._banner("Console Demo (type 'back' to go back, 'quit' to exit)")
        self.ask_current_step()

        while not self.is_finished():
            user_input = input(f"\n{BLUE}[Customer] {RESET}").strip()
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            self.handle_input(user_input)
        self._finish()

    def _finish(self) -> None:
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Visit complete.{RESET}")
        if self.customer is not None:
            self.print_queue()
        print(f"{BOLD}{'=' * 60}{RESET}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Smart queue console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        help="Auto-play a scripted visit instead of reading from stdin",
    )
    args = parser.parse_args(argv)

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main(sys.argv[1:])
