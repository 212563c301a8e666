# tests/conftest.py

"""Shared pytest fixtures for all storefront tests."""

from collections.abc import Generator

import pytest

from src.api import handler


@pytest.fixture(autouse=True)
def reset_authorizer() -> Generator[None, None, None]:
    """Drop the instance-wide authorizer so no test sees another's token."""
    handler.set_authorizer(None)
    yield
    handler.set_authorizer(None)
