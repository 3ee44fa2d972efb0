"""
Route table with reverse routing.

Every route is registered once under a (controller, operation) identity.
Adapters ask the router for the href of an operation instead of formatting
URL strings, so a changed path updates every link and template that points
at it.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote

from launchpad.hal.models import HTTP_METHODS

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{([^}]+)\}")


class RoutingError(Exception):
    """Base exception for route table misuse. Always a server-side defect."""
    pass


class RouteNotFoundError(RoutingError):
    """Raised when no route is registered for a (controller, operation) pair."""

    def __init__(self, controller: str, operation: str):
        self.controller = controller
        self.operation = operation
        super().__init__(f"Route not found: {controller}.{operation}")


class MissingParameterError(RoutingError):
    """Raised when path parameters do not line up with the route's placeholders."""

    def __init__(self, route: "RouteDescriptor", parameters: List[str], message: str):
        self.route = route
        self.parameters = parameters
        super().__init__(message)


class DuplicateRouteError(RoutingError):
    """Raised when a (controller, operation) pair is registered twice."""

    def __init__(self, controller: str, operation: str):
        super().__init__(f"Route already registered: {controller}.{operation}")


@dataclass(frozen=True)
class RouteDescriptor:
    """One entry of the route table."""

    method: str
    path: str
    controller: str
    operation: str
    parameter_names: Tuple[str, ...] = ()

    @property
    def identity(self) -> str:
        return f"{self.controller}.{self.operation}"


class Router:
    """
    Route table consulted for reverse routing.

    Request dispatch stays with the web framework; this table only turns a
    (controller, operation) identity into a concrete path.
    """

    def __init__(self):
        self._routes: Dict[Tuple[str, str], RouteDescriptor] = {}

    def add_route(self, method: str, path: str, controller: str, operation: str) -> RouteDescriptor:
        """
        Register a route.

        Args:
            method: HTTP method
            path: Path pattern with {name} placeholders
            controller: Controller identity, e.g. "api_keys"
            operation: Operation name within the controller

        Raises:
            DuplicateRouteError: If the pair is already registered
            ValueError: If the method is not an HTTP method
        """
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        key = (controller, operation)
        if key in self._routes:
            raise DuplicateRouteError(controller, operation)

        parameter_names = tuple(PLACEHOLDER_PATTERN.findall(path))
        route = RouteDescriptor(
            method=method,
            path=path,
            controller=controller,
            operation=operation,
            parameter_names=parameter_names,
        )
        self._routes[key] = route
        logger.debug(f"Registered route {method} {path} -> {route.identity}")
        return route

    @property
    def routes(self) -> List[RouteDescriptor]:
        """Registered routes in registration order."""
        return list(self._routes.values())

    def get_route(self, controller: str, operation: str) -> RouteDescriptor:
        route = self._routes.get((controller, operation))
        if route is None:
            raise RouteNotFoundError(controller, operation)
        return route

    def build_href(self, controller: str, operation: str, params: Optional[Dict[str, str]] = None) -> str:
        """
        Build a concrete path for a registered operation.

        Args:
            controller: Controller identity
            operation: Operation name
            params: Values for the path placeholders (URL-encoded on insert)

        Returns:
            The path with every placeholder filled

        Raises:
            RouteNotFoundError: If the pair was never registered
            MissingParameterError: If a placeholder has no value, or a
                parameter names no placeholder

        Example:
            >>> router.build_href("sessions", "get_sessions", {"user_id": "abc123"})
            '/users/abc123/sessions/list'
        """
        route = self.get_route(controller, operation)
        params = params or {}

        unknown = [name for name in params if name not in route.parameter_names]
        if unknown:
            raise MissingParameterError(
                route,
                unknown,
                f"Parameter(s) {', '.join(unknown)} not found in route path '{route.path}' for {route.identity}",
            )

        missing = [name for name in route.parameter_names if name not in params]
        if missing:
            raise MissingParameterError(
                route,
                missing,
                f"Missing required parameters {', '.join(missing)} for route {route.identity}",
            )

        return PLACEHOLDER_PATTERN.sub(lambda found: quote(str(params[found.group(1)]), safe=""), route.path)
