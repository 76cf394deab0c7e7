from src.scoring.intent_classifier import (
    IntentBreakdown,
    calculate_intent_type,
    calculate_time_allocation,
    classify_intent,
    get_intent_breakdown,
)
from src.scoring.score_calculator import (
    calculate_intent_score,
    compute_score,
    get_priority_level,
)
from src.scoring.time_decay import adjusted_score, calculate_time_decay, hours_since

__all__ = [
    "IntentBreakdown",
    "classify_intent",
    "calculate_intent_type",
    "calculate_time_allocation",
    "get_intent_breakdown",
    "calculate_intent_score",
    "compute_score",
    "get_priority_level",
    "adjusted_score",
    "calculate_time_decay",
    "hours_since",
]
