"""Pytest configuration and shared fixtures for knit-core tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog
from knit_core import _config
from knit_core._logging import clear_log_hooks


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio backend for async tests (async-lru is asyncio-only)."""
    return 'asyncio'


@pytest.fixture(autouse=True)
def reset_library_state() -> Iterator[None]:
    """Start every test unconfigured: no init(), no structlog config, no hooks."""
    _config._config = None
    structlog.reset_defaults()
    clear_log_hooks()
    yield
    _config._config = None
    structlog.reset_defaults()
    clear_log_hooks()


@pytest.fixture
def add3():
    """Plain three-argument adder."""

    def add3(a: int, b: int, c: int) -> int:
        return a + b + c

    return add3


@pytest.fixture
def multiply():
    """Plain two-argument multiplier."""

    def multiply(a: int, b: int) -> int:
        return a * b

    return multiply
