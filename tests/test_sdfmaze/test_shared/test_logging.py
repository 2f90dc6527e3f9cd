"""Tests for correlation-aware logging."""

import logging

from sdfmaze.shared.logging import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Test structured logging helpers."""

    def test_get_logger(self):
        """Test logger creation and default component."""
        logger = get_logger("sdfmaze.parsing.parser")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "parser"
        assert logger.correlation_id is None

    def test_records_carry_correlation_info(self, caplog):
        """Test that component and correlation ID reach the log record."""
        logger = get_logger("sdfmaze.test", "req-42", "world_builder")

        with caplog.at_level(logging.INFO, logger="sdfmaze.test"):
            logger.info("World built", extra={"boxes": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "World built"
        assert record.component == "world_builder"
        assert record.correlation_id == "req-42"
        assert record.boxes == 3

    def test_is_enabled_for(self):
        """Test level checks against the underlying logger."""
        logger = get_logger("sdfmaze.test.levels")
        logger.logger.setLevel(logging.WARNING)

        assert logger.is_enabled_for(logging.ERROR)
        assert not logger.is_enabled_for(logging.DEBUG)
