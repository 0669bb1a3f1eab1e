# tests/conftest.py

"""Shared pytest fixtures for all report tests."""

from collections.abc import Generator
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def no_browser() -> Generator[None, None, None]:
    """Patch webbrowser.open globally so chart exports never launch one."""
    with patch("webbrowser.open"):
        yield
