"""
Route table and reverse routing.
"""

from .registration import build_router, get_router, route_name
from .router import (
    DuplicateRouteError,
    MissingParameterError,
    RouteDescriptor,
    RouteNotFoundError,
    Router,
    RoutingError,
)

__all__ = [
    "build_router",
    "get_router",
    "route_name",
    "DuplicateRouteError",
    "MissingParameterError",
    "RouteDescriptor",
    "RouteNotFoundError",
    "Router",
    "RoutingError",
]
