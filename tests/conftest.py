"""Shared fixtures for slashkit tests."""

import pytest

from slashkit.target_resolver import Roots


@pytest.fixture
def roots(tmp_path):
    """User and project roots inside tmp_path; neither exists yet."""
    return Roots(user=tmp_path / "home" / ".claude", project=tmp_path / "repo" / ".claude")
