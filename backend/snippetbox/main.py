"""
Snippetbox — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn snippetbox.main:app) or `python -m snippetbox`.

Application Architecture:
    Middleware Chain (outermost first):
        Error recovery → Request logging → Secure headers → Sessions

    Routes:
        GET /                      GET/POST /user/signup
        GET /snippet/view/{id}     GET/POST /user/login
        GET/POST /snippet/create   POST /user/logout
        GET /account/view          GET /health
        /static/*

    Exception Handlers:
        NotFoundError → 404 │ ValidationError → 400 │ AuthenticationRequired → 303
        DatabaseError → 500 │ Exception → 500 (Connection: close)

Lifecycle:
    Startup:  configure logging, log the listen address
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from snippetbox import __version__
from snippetbox.config import Settings, settings
from snippetbox.database import dispose_engine
from snippetbox.exceptions import (
    AuthenticationRequired,
    DatabaseError,
    NotFoundError,
    SnippetboxError,
    ValidationError,
)
from snippetbox.middleware.logging import RequestLoggingMiddleware
from snippetbox.middleware.secure_headers import SECURE_HEADERS, SecureHeadersMiddleware
from snippetbox.routes import health, snippets, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Structured Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Request records from snippetbox.access carry their fields (method,
    path, status_code, ...) as LogRecord attributes, so a JSON formatter
    can be dropped in without touching the middleware.
    """
    logging.basicConfig(
        level=getattr(logging, level or settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # snippetbox.access replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    setup_logging(config.log_level)
    scheme = "https" if config.tls_enabled else "http"
    logger.info("Starting server on %s://%s:%d", scheme, config.host, config.port)

    yield

    logger.info("Snippetbox shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def client_error(status: HTTPStatus) -> PlainTextResponse:
    return PlainTextResponse(status.phrase, status_code=status.value)


def server_error() -> PlainTextResponse:
    return PlainTextResponse(
        HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to responses.

    Handler hierarchy:
        NotFoundError          → 404 Not Found
        ValidationError        → 400 Bad Request
        AuthenticationRequired → 303 See Other, to the login page
        DatabaseError          → 500 Internal Server Error
        SnippetboxError (base) → 500 Internal Server Error
        Exception (fallback)   → 500 Internal Server Error, connection closed

    Server errors log the full traceback; the page only shows the status text.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return client_error(HTTPStatus.NOT_FOUND)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return client_error(HTTPStatus.BAD_REQUEST)

    @app.exception_handler(AuthenticationRequired)
    async def handle_authentication_required(request: Request, exc: AuthenticationRequired):
        return RedirectResponse(url="/user/login", status_code=HTTPStatus.SEE_OTHER)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return server_error()

    @app.exception_handler(SnippetboxError)
    async def handle_app_error(request: Request, exc: SnippetboxError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return server_error()

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for unexpected errors, run by the outermost error middleware.

        The connection is closed after the response since the failed
        request may have left it in an unknown state. This handler runs
        outside SecureHeadersMiddleware, so it sets those headers itself.
        """
        logger.error("Unexpected error: %s", str(exc), exc_info=exc)
        response = server_error()
        response.headers.update(SECURE_HEADERS)
        response.headers["Connection"] = "close"
        return response


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None, access_logger: Optional[logging.Logger] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to build the app from (defaults to the module singleton)
        access_logger: Logger receiving one record per request
                       (defaults to "snippetbox.access")
    """
    config = config or settings

    app = FastAPI(
        title="Snippetbox",
        description="Create, share and view text snippets.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = config

    # Middleware executes in REVERSE order of addition (last added = outermost)
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.session_secret,
        session_cookie="session",
        max_age=config.session_lifetime,
        same_site="strict",
        https_only=config.secure_cookies,
    )
    app.add_middleware(SecureHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware, logger=access_logger)

    register_exception_handlers(app)

    app.include_router(snippets.router)
    app.include_router(users.router)
    app.include_router(health.router)
    app.mount("/static", StaticFiles(directory=config.static_dir, check_dir=False), name="static")

    return app


app = create_app()
