"""Main FastAPI application."""

import logging
import threading
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from livestock_api.config import Settings, get_settings
from livestock_api.middleware import CorsPolicy, setup_middleware
from livestock_api.routes import api_router, root_router
from livestock_api.services.cosmos_db_init import initialize_cosmos_db
from livestock_common.exceptions import MarketplaceError, ValidationError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _error_body(message: str) -> dict:
    return {"ok": False, "message": message}


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.default_message
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    if field:
        return f"Invalid field '{field}': {first.get('msg', 'invalid value')}"
    return str(first.get("msg", ValidationError.default_message))


def register_exception_handlers(app: FastAPI, policy: CorsPolicy) -> None:
    """Map every failure to an ``{ok: false, message}`` body."""

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc.__cause__)
        else:
            logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.info("%s %s rejected: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=ValidationError.status_code, content=_error_body(message))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    # Runs outside the CORS middleware, so CORS headers are added here
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal server error"),
            headers=policy.headers_for(request.headers.get("origin")),
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application from settings.

    Args:
        settings: Application settings. If None, loaded from the environment.

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Handle application lifespan events."""
        logger.info("%s v%s started", settings.app_name, settings.app_version)
        logger.info("Environment: %s", settings.environment)
        if settings.jwt_secret == "devsecret" and not settings.is_development:
            logger.warning("JWT_SECRET is the development default; set a real secret")

        await initialize_cosmos_db(settings)

        yield

        logger.info("%s shutting down", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="Livestock marketplace - FastAPI backend service",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.services = {}
    app.state.services_lock = threading.Lock()

    policy = CorsPolicy.from_settings(settings)
    setup_middleware(app, policy)
    register_exception_handlers(app, policy)

    app.include_router(root_router)
    app.include_router(api_router)
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    return app


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
