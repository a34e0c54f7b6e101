from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from apps.api.routers import documents, health, notices, products, uploads
from packages.common.config import get_settings
from packages.common.errors import AppError
from packages.common.logging import setup_json_logging

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def describe_validation_errors(errors: list[dict]) -> str:
    """Flatten pydantic errors into one message, e.g. 'Missing required field: name'."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "form")]
        field = ".".join(loc) or "request"
        ctx_error = (err.get("ctx") or {}).get("error")
        if err.get("type") in ("missing", "string_too_short"):
            parts.append(f"Missing required field: {field}")
        elif ctx_error is not None:
            parts.append(str(ctx_error))
        else:
            parts.append(f"Invalid value for {field}: {err.get('msg', 'invalid')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed", extra={"path": request.url.path, "error": exc.message})
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, describe_validation_errors(list(exc.errors())))

    @app.exception_handler(SQLAlchemyError)
    async def _database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("database_error", extra={"path": request.url.path})
        return _error(500, "Database operation failed")

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", extra={"path": request.url.path})
        return _error(500, "Internal server error")


def create_app() -> FastAPI:
    settings = get_settings()
    setup_json_logging(settings.log_level, service=settings.app_name, environment=settings.environment)
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(uploads.router)
    app.include_router(products.router)
    app.include_router(documents.router)
    app.include_router(notices.router)

    logger.info("api_started", extra={"environment": settings.environment})
    return app


app = create_app()
