"""Shared pytest fixtures for the interpreter test suite."""

import io
import logging

import pytest

from brainfuck import BrainfuckInterpreter
from bfcore.options import InterpreterOptions


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def make_interpreter(out):
    """Build an interpreter writing to the `out` fixture and reading from a given string."""
    def _make(options=None, input_text=""):
        return BrainfuckInterpreter(options, stdin=io.StringIO(input_text), stdout=out)
    return _make


@pytest.fixture
def small_options():
    return InterpreterOptions(tape_size=8)


@pytest.fixture(autouse=True)
def no_tape_size_override(monkeypatch):
    monkeypatch.delenv("BF_TAPE_SIZE", raising=False)


@pytest.fixture(autouse=True)
def reset_bfinterp_logger():
    """Drop handlers that main() attached to per-test capture streams."""
    yield
    logger = logging.getLogger("bfinterp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
