"""
Populate the route table from the API routers.

Endpoints are named "<controller>.<operation>" when they are declared; the
names become the reverse-routing identities. An endpoint without such a
name is left out of the table, so any adapter pointing at it fails loudly
with RouteNotFoundError instead of guessing a URL.

The table is read from the APIRouter objects themselves rather than from
the application's route list, whose entries for included routers are a
framework implementation detail.
"""

import logging
from typing import Iterable

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute

from .router import Router

logger = logging.getLogger(__name__)

IDENTITY_SEPARATOR = "."


def route_name(controller: str, operation: str) -> str:
    """Endpoint name for a (controller, operation) identity."""
    return f"{controller}{IDENTITY_SEPARATOR}{operation}"


def build_router(api_routers: Iterable[APIRouter]) -> Router:
    """
    Build the route table from every named APIRoute.

    Args:
        api_routers: The routers included in the application. Each route
            path already carries its router's prefix

    Returns:
        Router holding one entry per named endpoint

    Raises:
        RuntimeError: If no named endpoint was found
    """
    router = Router()

    for api_router in api_routers:
        for api_route in api_router.routes:
            if not isinstance(api_route, APIRoute) or IDENTITY_SEPARATOR not in (api_route.name or ""):
                continue

            controller, operation = api_route.name.split(IDENTITY_SEPARATOR, 1)
            for method in sorted(api_route.methods):
                router.add_route(method, api_route.path, controller, operation)

    if not router.routes:
        raise RuntimeError("Route table is empty; no named endpoints were found")

    logger.info(f"Route table built with {len(router.routes)} routes")
    return router


def get_router(request: Request) -> Router:
    """FastAPI dependency returning the application's route table."""
    return request.app.state.router
