from src.scheduling.slot_recommender import (
    gap_slots,
    generate_time_slots,
    get_appointment_duration,
    has_conflict,
    preferred_period,
    recommend_slots,
)

__all__ = [
    "recommend_slots",
    "generate_time_slots",
    "get_appointment_duration",
    "has_conflict",
    "preferred_period",
    "gap_slots",
]
