from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_app_settings
from app.repositories.errors import ExpenseStoreUnavailableError
from app.schemas.expense import ErrorResponse

logger = logging.getLogger(__name__)

_GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
_VALUE_ERROR_PREFIX = "Value error, "


def _validate_env() -> None:
    """
    Fail fast when no database URL is configured.
    """

    from db.config import resolve_database_url

    try:
        resolve_database_url()
    except RuntimeError as exc:
        raise RuntimeError(f"Startup validation failed: {exc}") from exc


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_app_settings().log_level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_db() -> None:
    """Open a session and run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text

    from db.session import SessionLocal

    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def _seed_if_enabled() -> None:
    if not get_app_settings().seed_vendor_mappings:
        return

    from app.repositories.vendor_mapping_repository import VendorMappingRepository
    from app.services.vendor_mapping_seeder import seed_vendor_mappings
    from db.session import SessionLocal

    with SessionLocal() as db:
        seed_vendor_mappings(VendorMappingRepository(db))


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity and optionally seed vendor mappings on boot."""
    _check_db()
    logger.info("Database connectivity confirmed")
    _seed_if_enabled()
    yield


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------


def _error_response(
    status_code: int,
    message: str,
    field_errors: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        message=message,
        timestamp=datetime.now(tz=timezone.utc),
        field_errors=field_errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
    )


def _field_name(loc: tuple[int | str, ...]) -> str:
    names = [str(part) for part in loc if part != "body"]
    return ".".join(names) if names else "body"


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors: dict[str, str] = {}
    for error in exc.errors():
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        field_errors.setdefault(_field_name(tuple(error.get("loc", ()))), message)
    logger.warning("Validation failed path=%s errors=%s", request.url.path, field_errors)
    return _error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", field_errors)


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed path=%s status=%s", request.url.path, exc.status_code)
    return _error_response(exc.status_code, str(exc.detail))


async def _handle_store_unavailable(
    request: Request,
    exc: ExpenseStoreUnavailableError,
) -> JSONResponse:
    logger.error("Expense store unavailable path=%s: %s", request.url.path, exc)
    return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error path=%s", request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, _GENERIC_ERROR_MESSAGE)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Expense Manager API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    application.add_exception_handler(RequestValidationError, _handle_validation_error)
    application.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    application.add_exception_handler(ExpenseStoreUnavailableError, _handle_store_unavailable)
    application.add_exception_handler(Exception, _handle_unexpected)

    from app.api.routers import dashboard_router, expenses_router

    application.include_router(expenses_router)
    application.include_router(dashboard_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
