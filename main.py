"""
Smart queue entry point.

Usage:
    Interactive intake:  python main.py console
    Queue board:         python main.py queue [score|wait_time|name] [priority]
    Scripted visit:      python main.py demo [buyer|browser|trade_in]
"""

import logging
import sys
from datetime import datetime

from src.config import settings

logger = logging.getLogger(__name__)


def _run_console_mode() -> None:
    """Start the interactive intake wizard."""
    from console_demo import ConsoleSession

    session = ConsoleSession()
    session.run()


def _run_queue_mode(sort_by: str = "score", priority_filter: str = "all") -> None:
    """Print the optimized queue for the sample customers."""
    from src.queueing.view import build_queue, summarize_queue
    from src.tools import customers
    from src.utils import format_time_ago

    now = datetime.now()
    customers.seed_sample_customers(now)
    try:
        queue = build_queue(customers.list_customers(), now, sort_by, priority_filter)
    except ValueError as exc:
        print(exc)
        sys.exit(2)
    summary = summarize_queue(queue, now)

    print(f"{settings.dealership.name} queue ({summary.total} waiting, "
          f"{summary.high_priority} high priority)")
    for position, entry in enumerate(queue, start=1):
        print(
            f"#{position:<2} {entry.name:<16} {entry.priority_level.value:<9} "
            f"{entry.adjusted_score:.2f}  {format_time_ago(entry.created_at, now)}"
        )


def _run_demo_mode(scenario: str = "buyer") -> None:
    """Auto-play a scripted visit."""
    from console_demo import ConsoleSession

    ConsoleSession().run_scenario(scenario)


if __name__ == "__main__":
    mode = sys.argv[1] if len(sys.argv) > 1 else "console"
    args = sys.argv[2:]
    logger.debug("Starting %s in %s mode", settings.app_name, mode)

    if mode == "queue":
        _run_queue_mode(*args[:2])
    elif mode == "demo":
        _run_demo_mode(*args[:1])
    else:
        _run_console_mode()
