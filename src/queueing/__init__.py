from src.queueing.optimizer import QueueTier, get_tier, optimize_queue
from src.queueing.view import QueueSummary, build_queue, score_customer, summarize_queue

__all__ = [
    "QueueTier",
    "get_tier",
    "optimize_queue",
    "QueueSummary",
    "build_queue",
    "score_customer",
    "summarize_queue",
]
