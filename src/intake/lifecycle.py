"""
Visit lifecycle state machine.

A customer enters the queue as ``waiting`` and moves to ``scheduled`` once,
when an appointment is booked. Every transition must be listed explicitly;
anything else is rejected with the set of triggers that would be valid.

Usage:
    lifecycle = VisitLifecycle()
    lifecycle.transition(LifecycleTrigger.APPOINTMENT_BOOKED)
    assert lifecycle.current_state == CustomerStatus.SCHEDULED
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from src.schemas.customer_schema import CustomerStatus

logger = logging.getLogger(__name__)


class LifecycleTrigger(str, Enum):
    """Events that move a visit between states."""
    APPOINTMENT_BOOKED = "appointment_booked"


@dataclass(frozen=True)
class Transition:
    """A single valid state transition."""
    from_state: CustomerStatus
    to_state: CustomerStatus
    trigger: LifecycleTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: CustomerStatus
    entered_at: datetime
    trigger: Optional[LifecycleTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class VisitLifecycle:
    """Deterministic waiting -> scheduled lifecycle for one customer visit."""

    TRANSITIONS: list[Transition] = [
        Transition(CustomerStatus.WAITING, CustomerStatus.SCHEDULED,
                   LifecycleTrigger.APPOINTMENT_BOOKED),
    ]

    TRIGGER_FOR_TARGET: dict[CustomerStatus, LifecycleTrigger] = {
        t.to_state: t.trigger for t in TRANSITIONS
    }

    def __init__(self, state: CustomerStatus = CustomerStatus.WAITING) -> None:
        self._current_state = state
        self._history: list[StateEntry] = [
            StateEntry(state=state, entered_at=datetime.now())
        ]

    @property
    def current_state(self) -> CustomerStatus:
        return self._current_state

    def transition(self, trigger: LifecycleTrigger) -> CustomerStatus:
        """
        Execute a state transition.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state
                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(),
                    trigger=trigger,
                ))
                logger.debug(
                    "Visit transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def transition_to(self, target: CustomerStatus) -> CustomerStatus:
        """Move to ``target`` using the trigger that leads there."""
        trigger = self.TRIGGER_FOR_TARGET.get(target)
        if trigger is None:
            raise InvalidTransitionError(
                f"No transition leads to '{target.value}' from '{self._current_state.value}'"
            )
        return self.transition(trigger)

    def get_valid_triggers(self) -> list[LifecycleTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        return list(self._history)

    def is_terminal(self) -> bool:
        return not self.get_valid_triggers()
