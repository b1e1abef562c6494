import os

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks added during a test (CliRunner streams are closed afterwards)."""
    yield
    logger.remove()


@pytest.fixture
def zones_file(tmp_path):
    """An empty zones file."""
    path = tmp_path / "blacklisted.zones"
    path.write_text("", encoding="utf-8")
    return path


@pytest.fixture
def reason_log(tmp_path):
    """Path of a reason log that does not exist yet."""
    return tmp_path / "reason_log.json"


@pytest.fixture
def strict_umask():
    """Run with a root-style 077 umask."""
    previous = os.umask(0o077)
    yield
    os.umask(previous)
