"""Pytest fixtures for metrics server tests."""

from collections.abc import AsyncIterator, Iterator
import os

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("ADDRESS", "localhost:8080")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from app.main import app as fastapi_app
from app.metrics import MemStorage


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """Return the FastAPI application instance."""
    return fastapi_app


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an `httpx.AsyncClient` wired to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def storage(app: FastAPI) -> MemStorage:
    """Return the in-memory storage backing the application."""
    return app.state.metric_storage


@pytest.fixture(autouse=True)
def reset_storage(app: FastAPI) -> Iterator[None]:
    """Start and finish every test with an empty metric store."""

    store = getattr(app.state, "metric_storage", None)
    if store is not None:
        store.reset()
    yield
    if store is not None:
        store.reset()
