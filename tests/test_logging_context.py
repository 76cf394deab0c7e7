"""Tests for the customer-scoped logging context."""

import logging

from src.config import LOG_FORMAT
from src.logging_context import (
    CustomerIdFilter,
    get_customer_id,
    get_customer_logger,
    set_customer_id,
)


def make_log_record(name: str = "src.scoring.time_decay") -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "Decay applied", None, None)


class TestCustomerIdFilter:
    def test_sets_current_customer_id(self):
        set_customer_id(7)
        record = make_log_record()
        assert CustomerIdFilter().filter(record)
        assert record.customer_id == "7"
        assert get_customer_id() == "7"

    def test_configured_format_renders_customer_id(self):
        set_customer_id(12)
        record = make_log_record()
        CustomerIdFilter().filter(record)
        line = logging.Formatter(LOG_FORMAT).format(record)
        assert "[customer=12]" in line
        assert line.endswith("Decay applied")

    def test_customer_logger_gets_one_filter(self):
        logger = get_customer_logger("src.tools.test_logger")
        get_customer_logger("src.tools.test_logger")
        assert sum(isinstance(f, CustomerIdFilter) for f in logger.filters) == 1
