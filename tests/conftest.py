"""Shared fixtures for the mimictest tests."""

import io

import pytest
from rich.console import Console


@pytest.fixture
def console() -> Console:
    """A colorless console writing into memory; read it with `console.file.getvalue()`."""
    return Console(file=io.StringIO(), color_system=None, highlight=False)
