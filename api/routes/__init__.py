"""
API route table.

Routes are declared statically as (method, path, handler) triples and
registered once when the application is built. Paths match literally.
"""

import logging
from typing import Any, Callable, NamedTuple, Sequence

from fastapi import FastAPI

from api.routes.hello import hello


logger = logging.getLogger(__name__)


class RouteSpec(NamedTuple):
    method: str
    path: str
    handler: Callable[..., Any]


ROUTES: tuple[RouteSpec, ...] = (
    RouteSpec("GET", "/", hello),
)


def register_routes(app: FastAPI, routes: Sequence[RouteSpec] = ROUTES) -> None:
    """Add each route to the app's router."""
    for route in routes:
        app.add_api_route(route.path, route.handler, methods=[route.method.upper()])
        logger.debug(f"Registered {route.method.upper()} {route.path} -> {route.handler.__name__}")


__all__ = ["RouteSpec", "ROUTES", "register_routes", "hello"]
