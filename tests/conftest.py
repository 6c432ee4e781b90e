"""Pytest configuration and shared fixtures.

Following Linus's principle: "Simplicity is the ultimate sophistication."
Provides minimal, focused test fixtures and configuration.
"""

import os
import sys
import time

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from lexicon_index_mcp.config import reset_config
from lexicon_index_mcp.core.gate import ConcurrencyGate
from lexicon_index_mcp.core.lexicon import Lexicon, reset_lexicon

_ENV_KEYS = (
    "LEXICON_INDEX_WRITE_TIMEOUT_SECONDS",
    "LEXICON_INDEX_READ_TIMEOUT_SECONDS",
    "LEXICON_INDEX_MAX_QUERY_LENGTH",
    "LEXICON_INDEX_MAX_TERM_LENGTH",
    "LEXICON_INDEX_DATASET_PATH",
    "LEXICON_INDEX_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Every test starts from default config and no global lexicon."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    reset_lexicon()
    yield
    reset_config()
    reset_lexicon()


@pytest.fixture
def small_dataset():
    return [
        ("Trace-based", "A method of optimization that uses execution traces to identify hot code paths."),
        ("Compiler", "A program that translates source code into machine code or bytecode."),
    ]


@pytest.fixture
def lexicon(small_dataset):
    lex = Lexicon()
    lex.load(small_dataset)
    return lex


@pytest.fixture
def gate():
    return ConcurrencyGate(write_timeout=2.0, read_timeout=2.0)


def wait_until(predicate, timeout=2.0, interval=0.005):
    """Poll until predicate() is true; fail the test on timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return
        time.sleep(interval)
    pytest.fail("condition not reached in time")
