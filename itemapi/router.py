"""Dispatch of requests to handlers by method and URI."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from itemapi.handlers import ItemApi, Request
from itemapi.responses import Response, error_response

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Response]


@dataclass(frozen=True)
class Route:
    """A method plus a URI that must match exactly or as a prefix."""

    method: str
    uri_prefix: str
    exact_match: bool
    handler: Handler

    def matches(self, method: str, uri: str) -> bool:
        if method != self.method:
            return False
        if self.exact_match:
            return uri == self.uri_prefix
        return uri.startswith(self.uri_prefix)


class Router:
    """Sends each request to the first route that matches it."""

    def __init__(self, routes: Iterable[Route]) -> None:
        self.routes = tuple(routes)

    def dispatch(self, request: Request) -> Response:
        logger.info("Incoming request: %s %s", request.method, request.uri)
        route = next(
            (r for r in self.routes if r.matches(request.method, request.uri)), None
        )
        if route is None:
            return error_response(
                404,
                "Not Found",
                "The requested resource or endpoint was not found on this server.",
            )
        return route.handler(request)


def build_router(api: ItemApi) -> Router:
    """Build the router for the item API, most specific routes first."""
    return Router(
        [
            Route("GET", "/api/v1/items", True, api.get_all_items),
            Route("POST", "/api/v1/items", True, api.create_item),
            Route("GET", "/api/v1/items/", False, api.get_item_by_id),
            Route("PUT", "/api/v1/items/", False, api.update_item),
            Route("DELETE", "/api/v1/items/", False, api.delete_item),
            Route("GET", "/", True, api.root),
        ]
    )