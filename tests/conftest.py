"""Shared fixtures."""

import pytest

from preptive.exceptions import NetworkError
from tests.factories import FakeQueryService, make_post


@pytest.fixture
def upsc_posts():
    """23 UPSC posts plus a handful of unrelated ones."""
    upsc = [make_post(i, title=f"UPSC notice {i}") for i in range(23)]
    other = [make_post(100 + i, title=f"SSC CGL bulletin {i}") for i in range(5)]
    return upsc + other


@pytest.fixture
def fake_service(upsc_posts):
    return FakeQueryService(upsc_posts)


@pytest.fixture
def failing_service():
    return FakeQueryService(error=NetworkError("connection refused"))
