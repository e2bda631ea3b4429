"""Shared HTTP client for the dashboard backend.

One pooled httpx.AsyncClient serves every request. It is opened lazily, handed
to endpoints through the get_backend dependency, and closed on shutdown.
"""

from collections.abc import AsyncGenerator

import httpx
import structlog

from frontdesk.config import settings
from frontdesk.middleware import REQUEST_ID_HEADER

_client: httpx.AsyncClient | None = None


async def _forward_request_id(request: httpx.Request) -> None:
    """Propagate the incoming request ID so backend logs can be correlated."""
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    if request_id and REQUEST_ID_HEADER not in request.headers:
        request.headers[REQUEST_ID_HEADER] = request_id


def create_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Build a backend client from settings.

    ``transport`` is only passed in tests, to serve requests from memory.
    """
    return httpx.AsyncClient(
        base_url=settings.backend_url,
        timeout=httpx.Timeout(settings.backend_timeout, connect=settings.backend_connect_timeout),
        limits=httpx.Limits(max_connections=settings.backend_max_connections),
        headers={"Accept": "application/json"},
        event_hooks={"request": [_forward_request_id]},
        transport=transport,
    )


def get_client() -> httpx.AsyncClient:
    global _client
    if _client is None:
        _client = create_client()
    return _client


async def get_backend() -> AsyncGenerator[httpx.AsyncClient, None]:
    """FastAPI dependency that provides the shared backend client.

    Usage in endpoints:
        @router.get("/rooms")
        async def rooms(backend: Backend):
            return await list_rooms(backend)
    """
    yield get_client()


async def shutdown() -> None:
    """Close pooled connections. Called from the FastAPI lifespan on shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
