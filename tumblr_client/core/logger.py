"""Logging setup for tumblr_client with credential masking."""

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "tumblr_client"


class SensitiveDataFilter(logging.Filter):
    """Filter to mask API keys and OAuth values in log messages."""

    SECRET_PATTERN = re.compile(
        r"((?:api_key|oauth_token|oauth_signature|oauth_consumer_key)['\"]?\s*[=:]\s*\[?['\"]?)[^'\"&\s,\]]+"
    )

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.SECRET_PATTERN.sub(r"\1[MASKED]", record.msg)
        return True


def setup_logger(
    log_level: str = "INFO",
    mask_logs: bool = True,
    log_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Set up the library logger. Call once at startup.

    Adds a console handler, plus a rotating file handler when log_dir is
    given. If already set up (has handlers), returns existing logger.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if logger.handlers:
        return logger

    logger.setLevel(log_level)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
    )

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    handlers.append(console_handler)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path / "tumblr_client.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        if mask_logs:
            handler.addFilter(SensitiveDataFilter())
        logger.addHandler(handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the library logger."""
    return logging.getLogger(LOGGER_NAME)
