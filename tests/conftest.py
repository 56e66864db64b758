"""
Shared pytest fixtures for mermaid-check tests.

Provides a config that ignores the environment, consoles that write to
in-memory buffers and a renderer probe that never spawns a process.
"""

import io
import logging

import pytest

from mermaid_check.cli import make_console
from mermaid_check.config import CheckerConfig
from mermaid_check.logging_config import PACKAGE_LOGGER_NAME


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class FakeProbe:
    """Renderer probe with a fixed answer."""

    def __init__(self, available: bool = True, command: str = "mmdc"):
        self.available = available
        self.command = command
        self.calls = 0

    def is_available(self) -> bool:
        self.calls += 1
        return self.available


@pytest.fixture
def config():
    """Configuration with built-in defaults."""
    return CheckerConfig.for_testing()


@pytest.fixture
def out():
    """Buffer backing the stdout console."""
    return io.StringIO()


@pytest.fixture
def err():
    """Buffer backing the stderr console."""
    return io.StringIO()


@pytest.fixture
def consoles(out, err):
    """(console, err_console) pair writing to the out/err buffers."""
    return (
        make_console(file=out, color_system=None),
        make_console(stderr=True, file=err, color_system=None),
    )


@pytest.fixture
def probe():
    return FakeProbe(available=True)


@pytest.fixture
def write_doc(tmp_path):
    """
    Write a document into tmp_path.

    Returns:
        Callable (name, text) -> str path of the written file.
    """
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def make_probe():
    """Factory for renderer probes with a fixed answer."""
    return FakeProbe
