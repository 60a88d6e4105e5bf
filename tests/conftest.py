"""Pytest configuration and fixtures for transaction namer tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from txnamer.core.namer_sdk import TransactionNamer

NAMER_ENV_VARS = ("TXNAMER_PACKAGE_PREFIX", "TXNAMER_AGENT", "TXNAMER_ENABLED")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def original_cwd() -> Generator[str, None, None]:
    """Save and restore the current working directory."""
    cwd = os.getcwd()
    yield cwd
    os.chdir(cwd)


@pytest.fixture
def clean_namer() -> Generator[None, None, None]:
    """Reset the TransactionNamer singleton and namer env vars around a test."""
    original_env = {k: os.environ.get(k) for k in NAMER_ENV_VARS}
    for var in NAMER_ENV_VARS:
        os.environ.pop(var, None)
    TransactionNamer.reset()
    yield
    TransactionNamer.reset()
    for var, value in original_env.items():
        if value is not None:
            os.environ[var] = value
        else:
            os.environ.pop(var, None)
