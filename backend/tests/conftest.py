from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from frontdesk.gateway.session import create_client, get_backend
from frontdesk.main import app
from tests.fakes import FakeBackend

# Pytest only picks up fixtures from conftest.py files. Fixtures defined in other
# modules (like tests/seeds.py) are invisible unless we register them here.
# A plain `import tests.seeds` is not enough; pytest_plugins registers them.
pytest_plugins = ["tests.seeds"]


@pytest.fixture
def fake_backend() -> FakeBackend:
    """An empty in-memory backend; seed it directly or use seeded_backend."""
    return FakeBackend()


@pytest_asyncio.fixture
async def backend(fake_backend: FakeBackend) -> AsyncIterator[httpx.AsyncClient]:
    """Gateway client wired to the fake backend instead of the network."""
    async with create_client(transport=fake_backend.transport()) as client:
        yield client


@pytest_asyncio.fixture
async def client(backend: httpx.AsyncClient) -> AsyncIterator[AsyncClient]:
    """HTTP client for the app, with the backend dependency pointed at the fake."""

    async def override_get_backend() -> AsyncIterator[httpx.AsyncClient]:
        yield backend

    app.dependency_overrides[get_backend] = override_get_backend

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
