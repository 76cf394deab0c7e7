from src.intake.lifecycle import (
    InvalidTransitionError,
    LifecycleTrigger,
    VisitLifecycle,
)
from src.intake.wizard import IntakeWizard, StepDefinition, StepKind

__all__ = [
    "IntakeWizard",
    "StepDefinition",
    "StepKind",
    "VisitLifecycle",
    "LifecycleTrigger",
    "InvalidTransitionError",
]
