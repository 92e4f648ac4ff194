"""
Main entrypoint for the Date Planner API.

This module assembles the FastAPI application: it sets up logging,
attaches the store, includes the API router under ``/api``, maps
errors to JSON responses and, in production, serves the pre‑built
front end.  The ``create_app`` function builds and configures the app,
which is then instantiated at module import time as ``app``::

    uvicorn date_planner_api.app.main:app --reload

Every error response has the shape ``{"message": ...}``.  Validation
failures additionally carry ``errors``, one entry per offending field,
and use status 400 instead of FastAPI's default 422.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .api.router import router as api_router
from .core.config import Settings, settings
from .core.logging_config import ACCESS_LOGGER, setup_logging
from .services.storage import MemStorage

logger = logging.getLogger(__name__)
http_logger = logging.getLogger(ACCESS_LOGGER)

API_PREFIX = "/api"
MAX_LOG_LINE = 80


def format_log_line(method: str, path: str, status_code: int, duration_ms: int, payload: Optional[str] = None) -> str:
    """Build the one‑line summary logged for each API request."""
    line = f"{method} {path} {status_code} in {duration_ms}ms"
    if payload:
        line += f" :: {payload}"
    if len(line) > MAX_LOG_LINE:
        line = line[: MAX_LOG_LINE - 1] + "…"
    return line


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status, duration and JSON body of ``/api`` requests."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        path = request.url.path
        if not path.startswith(API_PREFIX):
            return response

        # The body has to be drained to be logged, so the response is
        # rebuilt from the collected bytes afterwards.
        body = b"".join([chunk async for chunk in response.body_iterator])
        duration_ms = int((time.perf_counter() - start) * 1000)
        payload = None
        if body and response.headers.get("content-type", "").startswith("application/json"):
            payload = body.decode("utf-8", errors="replace")
        http_logger.info(format_log_line(request.method, path, response.status_code, duration_ms, payload))
        return Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            background=response.background,
        )


def _format_validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    errors = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        # Drop the "body" / "path" source marker; clients only care about the field.
        if loc and loc[0] in {"body", "path", "query"}:
            loc = loc[1:]
        errors.append({"path": loc, "message": error.get("msg", ""), "code": error.get("type", "")})
    return errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid data", "errors": _format_validation_errors(exc)},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error"},
    )


class SPAStaticFiles(StaticFiles):
    """Static files with ``index.html`` as fallback for client‑side routes.

    Paths under ``/api`` never fall back: whatever the method, an
    unknown API path is a plain 404.
    """

    async def get_response(self, path: str, scope) -> Response:
        if path == "api" or path.startswith("api/"):
            raise StarletteHTTPException(status_code=status.HTTP_404_NOT_FOUND)
        try:
            response = await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != status.HTTP_404_NOT_FOUND:
                raise
            return await super().get_response("index.html", scope)
        if response.status_code == status.HTTP_404_NOT_FOUND:
            return await super().get_response("index.html", scope)
        return response


def serve_static(app: FastAPI, directory: str) -> None:
    """Mount the built front end from ``directory`` at the site root.

    Must be called after the API router is included so API routes
    take precedence over the mount.

    Raises
    ------
    RuntimeError
        If ``directory`` does not exist.
    """
    dist_path = Path(directory).resolve()
    if not dist_path.is_dir():
        raise RuntimeError(
            f"Could not find the build directory: {dist_path}, make sure to build the client first"
        )
    app.mount("/", SPAStaticFiles(directory=dist_path, html=True), name="static")


def create_app(storage: Optional[MemStorage] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    storage : Optional[MemStorage]
        Store shared by all requests.  A freshly seeded one is created
        when omitted; tests pass their own to stay isolated.
    app_settings : Optional[Settings]
        Overrides the module level settings.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    cfg = app_settings or settings
    # Initialise logging before anything else so the setup below can log.
    setup_logging(cfg.log_level, cfg.log_file or None)

    app = FastAPI(title=cfg.project_name, version=cfg.api_version)
    app.state.storage = storage if storage is not None else MemStorage()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router, prefix=API_PREFIX)

    if cfg.is_production:
        serve_static(app, cfg.static_dir)
    else:
        logger.info("Development mode: front end is served by its own dev server")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
