"""Request helper shared by the backend repositories.

Translates transport failures and error statuses into domain exceptions so
callers only ever see NotFoundError, DomainError or BackendUnavailableError.
"""

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from frontdesk.exceptions import BackendUnavailableError, DomainError, NotFoundError
from frontdesk.logging import get_logger

logger = get_logger(__name__)


def _backend_message(response: httpx.Response) -> str:
    """The backend reports failures as {"error": "..."}; fall back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"Backend answered {response.status_code} {response.reason_phrase}"


async def request_json(
    backend: httpx.AsyncClient,
    method: str,
    path: str,
    *,
    entity: str,
    identifier: object = None,
    payload: BaseModel | None = None,
) -> Any:
    """Send one request and return the decoded JSON body."""
    body = payload.model_dump(mode="json", by_alias=True) if payload is not None else None
    try:
        response = await backend.request(method, path, json=body)
    except httpx.HTTPError as exc:
        logger.warning("backend_unavailable", method=method, path=path, error=repr(exc))
        raise BackendUnavailableError(f"Could not reach the backend for {entity}") from exc

    if response.status_code == 404 and identifier is not None:
        raise NotFoundError(entity, identifier)
    if response.status_code >= 500:
        logger.warning("backend_unavailable", method=method, path=path, status_code=response.status_code)
        raise BackendUnavailableError(_backend_message(response))
    if response.is_error:
        logger.info("backend_rejected", method=method, path=path, status_code=response.status_code)
        raise DomainError(_backend_message(response))

    try:
        return response.json()
    except ValueError as exc:
        raise BackendUnavailableError(f"Backend returned a non-JSON body for {entity}") from exc


def parse[M: BaseModel](model: type[M], data: Any, entity: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning("backend_payload_invalid", entity=entity, errors=exc.error_count())
        raise BackendUnavailableError(f"Backend returned a malformed {entity}") from exc


def parse_list[M: BaseModel](model: type[M], data: Any, entity: str) -> list[M]:
    if not isinstance(data, list):
        raise BackendUnavailableError(f"Backend returned a malformed {entity} list")
    return [parse(model, item, entity) for item in data]
