# tests/conftest.py

"""Shared pytest fixtures for all storefront tests."""

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def quiet_storefront_logger() -> Generator[None, None, None]:
    """Keep service logging from propagating to pytest's capture between tests."""
    root_logger = logging.getLogger("storefront")
    previous = root_logger.propagate
    root_logger.propagate = False
    yield
    root_logger.propagate = previous
