"""Shared fixtures for the test-suite."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def transport():
    """A stand-in Transport whose get/post return values are set per test."""
    t = MagicMock()
    t.get.return_value = None
    t.post.return_value = None
    return t
