from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from frontdesk.exceptions import (
    BackendUnavailableError,
    ConflictError,
    DomainError,
    NotFoundError,
    RateUnavailableError,
    ValidationFailedError,
)
from frontdesk.gateway.session import shutdown
from frontdesk.logging import get_logger
from frontdesk.middleware import RequestIDMiddleware
from frontdesk.routers import invoice, pricing
from frontdesk.schemas.error import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Nothing to warm up; on shutdown, close the pooled backend connections."""
    yield
    await shutdown()


app = FastAPI(title="Frontdesk billing", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.include_router(pricing.router)
app.include_router(invoice.router)


def _error_json(code: str, message: str, field: str | None = None) -> dict[str, object]:
    """Build the standard error envelope as a dict for JSONResponse."""
    detail = ErrorDetail(code=code, message=message, field=field)
    return ErrorResponse(error=detail).model_dump(exclude_none=True)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Return 404 with the entity details."""
    return JSONResponse(status_code=404, content=_error_json(exc.code, exc.message))


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """Return 409 for protected lines, locked invoices and booked rooms."""
    logger.info("conflict", code=exc.code, error=exc.message, path=request.url.path)
    return JSONResponse(status_code=409, content=_error_json(exc.code, exc.message))


@app.exception_handler(RateUnavailableError)
async def rate_unavailable_handler(request: Request, exc: RateUnavailableError) -> JSONResponse:
    logger.warning("rate_unavailable", room_id=exc.room_id, month=exc.month)
    return JSONResponse(status_code=422, content=_error_json(exc.code, exc.message))


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return 400 for invalid dates, invalid draft edits and other rejected input."""
    field = exc.field if isinstance(exc, ValidationFailedError) else None
    logger.warning("domain_error", code=exc.code, error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json(exc.code, exc.message, field))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies share the validation_failed envelope.

    Only the first error is reported; ``field`` is its dotted location.
    """
    first = exc.errors()[0]
    location = [str(part) for part in first["loc"] if part not in ("body", "path", "query")]
    return JSONResponse(
        status_code=400,
        content=_error_json(ValidationFailedError.code, first["msg"], ".".join(location) or None),
    )


@app.exception_handler(BackendUnavailableError)
async def backend_unavailable_handler(request: Request, exc: BackendUnavailableError) -> JSONResponse:
    """Return 503; the caller keeps its draft and may retry."""
    return JSONResponse(status_code=503, content=_error_json(exc.code, exc.message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response.

    - Logs full exception with traceback (includes request_id from context)
    - Returns generic error to client (no stack traces leaked)
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
    )


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness check. Does not call the backend."""
    return {"status": "ok"}
