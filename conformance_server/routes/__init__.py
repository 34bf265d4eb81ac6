"""APIRouter registration for the conformance API.

Builds one endpoint per entry in the static routing table; each endpoint
runs binder -> API service -> shaper for a single request.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import Response

from conformance_server.routes.table import ROUTES, Route

logger = logging.getLogger(__name__)


def _make_endpoint(route: Route):  # type: ignore[no-untyped-def]
    async def endpoint(request: Request) -> Response:
        api = request.app.state.api
        typed_request = await route.bind(request)
        logger.info(
            "dispatch.request",
            extra={"operation": route.operation, "method": route.method, "path": request.url.path},
        )
        result = await getattr(api, route.operation)(typed_request)
        return route.shape(result)

    endpoint.__name__ = route.operation
    return endpoint


def build_router() -> APIRouter:
    router = APIRouter()
    for route in ROUTES:
        router.add_api_route(
            route.path,
            _make_endpoint(route),
            methods=[route.method],
            summary=route.summary,
            operation_id=route.operation,
            tags=["Conformance"],
        )
    return router


api_router = build_router()

__all__ = ["api_router", "build_router"]
