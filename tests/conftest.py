"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and a
fixed clock so period arithmetic is deterministic.
"""

from __future__ import annotations

import itertools
import logging
from datetime import datetime
from unittest.mock import patch

import pytest

from pathly_cli.adapters import InMemoryDocumentStore
from pathly_cli.models import Goal

# Wednesday, mid-morning
NOW = datetime(2024, 6, 12, 10, 0, 0)


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Route config, data and log files into *tmp_path*.

    Also resets the logger singleton and the config service cache so each
    test starts from scratch.
    """
    import pathly_cli.utils.logger as logger_mod
    from pathly_cli.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    logger_mod._logger = None
    with (
        patch("pathly_cli.services.config_service.user_config_dir", return_value=tmpdir),
        patch("pathly_cli.services.config_service.user_data_dir", return_value=tmpdir),
        patch("pathly_cli.utils.logger.user_log_dir", return_value=tmpdir),
    ):
        yield tmp_path

    app_logger = logging.getLogger("pathly_cli")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
    logger_mod._logger = None
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def now():
    return NOW


@pytest.fixture()
def clock():
    """A settable clock: call it for the time, assign ``.now`` to move it."""

    class Clock:
        def __init__(self):
            self.now = NOW

        def __call__(self):
            return self.now

    return Clock()


@pytest.fixture()
def store():
    return InMemoryDocumentStore()


_ids = itertools.count(1)


def make_goal(**overrides) -> Goal:
    """Build a Goal with sensible defaults; any field can be overridden."""
    fields = {
        "id": next(_ids),
        "title": "Goal",
        "target": 10,
        "current": 0,
        "initial_value": 0,
        "created_at": NOW,
        "period_start_date": NOW,
    }
    fields.update(overrides)
    return Goal(**fields)


@pytest.fixture()
def goal_factory():
    return make_goal


