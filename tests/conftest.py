"""Shared test fixtures for sourcewatch tests."""

import pytest
import structlog


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_structlog() -> None:
    structlog.reset_defaults()
