"""Tests for the application logger utility."""

from __future__ import annotations

import logging
from unittest.mock import patch

from pathly_cli.utils.logger import get_logger


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    logger = get_logger()

    assert (tmp_path / "pathly.log").exists(), "Log file should be created on first use"
    assert isinstance(logger, logging.Logger)
    assert logger.name == "pathly_cli"


def test_get_logger_returns_singleton():
    """Repeated calls return the same logger instance."""
    assert get_logger() is get_logger()


def test_module_loggers_reach_the_log_file(tmp_path):
    """Engine modules log through logging.getLogger(__name__) and end up in the file."""
    logger = get_logger()
    logging.getLogger("pathly_cli.services.goal_service").info("hello from test")

    for handler in logger.handlers:
        handler.flush()

    content = (tmp_path / "pathly.log").read_text()
    assert "hello from test" in content
    assert "[pathly_cli.services.goal_service]" in content


def test_get_logger_creates_parent_dirs(tmp_path):
    """Logger creates nested directories if they do not exist."""
    nested = tmp_path / "a" / "b" / "c"
    with patch("pathly_cli.utils.logger.user_log_dir", return_value=str(nested)):
        get_logger()

    assert nested.is_dir()


def test_logger_does_not_propagate_to_root():
    assert get_logger().propagate is False
