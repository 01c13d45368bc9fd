"""Pytest configuration and fixtures."""
from pathlib import Path

import pytest

from importlens.utils.logging import logger

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(filename: str) -> str:
    """Load a sample source file from tests/fixtures."""
    return (FIXTURES_DIR / filename).read_text(encoding="utf-8")


@pytest.fixture
def sample_python():
    return load_fixture("sample-python.py")


@pytest.fixture
def sample_javascript():
    return load_fixture("sample-javascript.js")


@pytest.fixture
def sample_typescript():
    return load_fixture("sample-typescript.ts")


@pytest.fixture
def sample_go():
    return load_fixture("sample-go.go")


@pytest.fixture
def sample_rust():
    return load_fixture("sample-rust.rs")


@pytest.fixture
def captured_logs():
    """Collect every loguru message emitted while the test runs."""
    messages = []
    handler_id = logger.add(messages.append, level="TRACE", format="{message}")
    yield messages
    logger.remove(handler_id)
