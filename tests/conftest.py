"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

import sys

import pytest
from loguru import logger

from workout_conflicts.conflicts import ConflictDetectionEngine, build_rule_set


@pytest.fixture(autouse=True)
def reset_logger():
    """Route loguru to stderr at WARNING so engine debug/info lines stay quiet.

    CLI tests reconfigure loguru against the runner's streams; resetting after
    every test keeps later tests from writing into closed streams.
    """
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def log_messages():
    """Capture loguru records (message + extras) emitted during a test."""
    records: list[dict] = []
    handler_id = logger.add(
        lambda message: records.append(
            {
                "level": message.record["level"].name,
                "message": message.record["message"],
                "extra": dict(message.record["extra"]),
            }
        ),
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture
def engine() -> ConflictDetectionEngine:
    """Engine over a freshly built default rule set."""
    return ConflictDetectionEngine(build_rule_set())
