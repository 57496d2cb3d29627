"""
FastAPI Application

Assembles the request pipeline:

    formatter -> text decoder -> JSON decoder -> form decoder -> router -> not-found fallback

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os
from typing import Sequence

import uvicorn
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware import Middleware

from api import __version__
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    not_found_handler,
)
from api.middleware import BODY_DECODERS, ResponseFormatterMiddleware
from api.routes import ROUTES, RouteSpec, register_routes
from core.config.runtime import LOG_LEVEL_ENV, ServerConfig


logger = logging.getLogger(__name__)


def _resolve_log_level() -> int:
    """Resolve log level from HELLO_LOG_LEVEL, defaulting to INFO."""
    raw = os.getenv(LOG_LEVEL_ENV)
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def build_middleware(config: ServerConfig) -> list[Middleware]:
    """Pipeline stages in request order, outermost first."""
    stages = [Middleware(ResponseFormatterMiddleware)]
    for decoder in BODY_DECODERS:
        stages.append(Middleware(decoder, max_body_bytes=config.max_body_bytes))
    return stages


def create_app(
    config: ServerConfig | None = None,
    routes: Sequence[RouteSpec] = ROUTES,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = ServerConfig.from_env()

    # Docs and schema endpoints stay off so every unrouted path is a 404
    app = FastAPI(
        title="Hello JSON API",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        middleware=build_middleware(config),
    )
    app.state.config = config

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    register_routes(app, routes)

    logger.info(f"Application created with {len(routes)} route(s), bind {config.base_url}")
    return app


def serve(config: ServerConfig) -> None:
    """Bind the listening socket and serve until the process exits."""
    logger.info(f"Listening on {config.base_url}")
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


_app: FastAPI | None = None


def get_app() -> FastAPI:
    """Return the module-level application, building it on first use."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str):
    # `api.app:app` is built on first access; importing serve() builds nothing
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


if __name__ == "__main__":
    serve(ServerConfig.from_env())
