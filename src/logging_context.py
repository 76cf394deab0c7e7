"""Customer-scoped logging context.

Attaches the id of the customer currently being processed to every log
record, so a single visit can be followed from intake through queueing
to the booked appointment.

Usage:
    from src.logging_context import get_customer_logger, set_customer_id

    set_customer_id(42)
    logger = get_customer_logger(__name__)
    logger.info("Scheduling")  # record.customer_id == "42"
"""

import logging
from contextvars import ContextVar
from typing import Union

_customer_id: ContextVar[str] = ContextVar("customer_id", default="-")


def set_customer_id(customer_id: Union[int, str]) -> None:
    """Set the customer id for the current context."""
    _customer_id.set(str(customer_id))


def get_customer_id() -> str:
    """Retrieve the current customer id."""
    return _customer_id.get()


class CustomerIdFilter(logging.Filter):
    """Injects customer_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.customer_id = _customer_id.get()  # type: ignore[attr-defined]
        return True


def get_customer_logger(name: str) -> logging.Logger:
    """Return a logger with the CustomerIdFilter attached.

    Formatters can then include ``%(customer_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, CustomerIdFilter) for f in logger.filters):
        logger.addFilter(CustomerIdFilter())
    return logger
