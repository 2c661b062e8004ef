from __future__ import annotations

import pytest

from tests._fixtures.fake_git import FakeGitQueries


@pytest.fixture
def fake_git() -> FakeGitQueries:
    """Provide a usable fake repository on branch main at abc123 tagged v1."""
    return FakeGitQueries()
