"""Tests for logger setup and credential masking."""

import logging

import pytest

from tumblr_client.core.logger import LOGGER_NAME, SensitiveDataFilter, get_logger, setup_logger


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = list(logger.handlers)
    level = logger.level
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved
    logger.setLevel(level)


def _record(msg):
    return logging.LogRecord(LOGGER_NAME, logging.DEBUG, __file__, 1, msg, None, None)


class TestSensitiveDataFilter:
    def test_masks_query_style_key(self):
        record = _record("GET /tagged?tag=x&api_key=SECRET123&limit=2")
        SensitiveDataFilter().filter(record)
        assert "SECRET123" not in record.msg
        assert "api_key=[MASKED]" in record.msg
        assert "limit=2" in record.msg

    def test_masks_dict_repr(self):
        record = _record("params={'oauth_token': ['tok'], 'limit': ['2']}")
        SensitiveDataFilter().filter(record)
        assert "['tok']" not in record.msg
        assert "'limit': ['2']" in record.msg

    def test_leaves_plain_messages(self):
        record = _record("Fetched 3 posts")
        assert SensitiveDataFilter().filter(record) is True
        assert record.msg == "Fetched 3 posts"


class TestSetupLogger:
    def test_console_only_by_default(self, clean_logger):
        logger = setup_logger("DEBUG")
        assert logger is get_logger()
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_handler_with_log_dir(self, clean_logger, tmp_dir):
        logger = setup_logger("INFO", log_dir=tmp_dir / "logs")
        assert len(logger.handlers) == 2
        assert (tmp_dir / "logs").is_dir()

    def test_second_call_returns_existing(self, clean_logger):
        first = setup_logger("INFO")
        second = setup_logger("DEBUG")
        assert first is second
        assert len(second.handlers) == 1

    def test_no_filter_when_masking_off(self, clean_logger):
        logger = setup_logger("INFO", mask_logs=False)
        assert logger.handlers[0].filters == []
