"""
Unit tests for the route table and reverse routing.
"""

import pytest
from fastapi import APIRouter
from fastapi.routing import APIRoute

from launchpad.main import API_ROUTERS
from launchpad.routing import (
    DuplicateRouteError,
    MissingParameterError,
    RouteNotFoundError,
    Router,
    build_router,
    route_name,
)


@pytest.fixture
def router():
    table = Router()
    table.add_route("POST", "/users/{user_id}/sessions/list", "sessions", "get_sessions")
    table.add_route("GET", "/users/{user_id}/sessions/{session_id}", "sessions", "get_session")
    table.add_route("GET", "/users/{user_id}", "users", "get_user")
    table.add_route("GET", "/", "root", "index")
    return table


class TestBuildHref:
    """Test Router.build_href."""

    def test_fills_placeholders(self, router):
        assert router.build_href("sessions", "get_sessions", {"user_id": "abc123"}) == "/users/abc123/sessions/list"

    def test_route_without_parameters(self, router):
        assert router.build_href("root", "index") == "/"

    def test_values_are_url_encoded(self, router):
        assert router.build_href("users", "get_user", {"user_id": "a b/c"}) == "/users/a%20b%2Fc"

    def test_unknown_route_raises(self, router):
        with pytest.raises(RouteNotFoundError) as exc_info:
            router.build_href("sessions", "nope", {"user_id": "abc"})

        assert str(exc_info.value) == "Route not found: sessions.nope"

    def test_missing_parameter_raises(self, router):
        with pytest.raises(MissingParameterError) as exc_info:
            router.build_href("sessions", "get_session", {"user_id": "abc"})

        assert exc_info.value.parameters == ["session_id"]
        assert "Missing required parameters session_id" in str(exc_info.value)

    def test_unknown_parameter_raises(self, router):
        """A parameter naming no placeholder is a caller defect, not ignored."""
        with pytest.raises(MissingParameterError) as exc_info:
            router.build_href("users", "get_user", {"user_id": "abc", "extra": "x"})

        assert "Parameter(s) extra not found in route path" in str(exc_info.value)


class TestRouteTable:
    """Test registration."""

    def test_duplicate_identity_is_rejected(self, router):
        with pytest.raises(DuplicateRouteError):
            router.add_route("GET", "/elsewhere", "users", "get_user")

    def test_invalid_method_is_rejected(self):
        with pytest.raises(ValueError):
            Router().add_route("FETCH", "/x", "a", "b")

    def test_placeholders_are_recorded_in_order(self, router):
        route = router.get_route("sessions", "get_session")

        assert route.parameter_names == ("user_id", "session_id")
        assert route.identity == "sessions.get_session"

    def test_routes_keep_registration_order(self, router):
        assert [route.identity for route in router.routes] == [
            "sessions.get_sessions",
            "sessions.get_session",
            "users.get_user",
            "root.index",
        ]


class TestBuildRouter:
    """Test building the table from the API routers."""

    def test_named_endpoints_are_registered(self):
        api = APIRouter(prefix="/things")

        @api.get("/{thing_id}", name=route_name("things", "get_thing"))
        async def get_thing(thing_id: str):
            return {}

        @api.get("/unnamed")
        async def unnamed():
            return {}

        table = build_router([api])

        assert table.build_href("things", "get_thing", {"thing_id": "t1"}) == "/things/t1"
        assert [route.identity for route in table.routes] == ["things.get_thing"]

    def test_application_routes(self, route_table):
        """Every operation the adapters link to is in the real table."""
        assert route_table.build_href("api_keys", "get_api_keys", {"user_id": "u1"}) == "/users/u1/api-keys/list"
        assert route_table.build_href("api_keys", "delete_api_keys", {"user_id": "u1"}) == "/users/u1/api-keys/delete"
        assert route_table.build_href("sessions", "delete_sessions", {"user_id": "u1"}) == "/users/u1/sessions/delete"
        assert route_table.build_href("users", "update_user", {"user_id": "u1"}) == "/users/u1"
        assert route_table.build_href("auth", "federate") == "/auth/federate"
        assert route_table.build_href("sitemap", "get_sitemap") == "/sitemap"
        assert route_table.build_href("root", "health") == "/health"

    def test_empty_table_is_rejected(self):
        api = APIRouter()

        @api.get("/unnamed")
        async def unnamed():
            return {}

        with pytest.raises(RuntimeError):
            build_router([api])

    def test_application_table_is_populated(self, app, route_table):
        """The table built at startup holds every named endpoint the app serves."""
        named = [
            api_route
            for api_router in API_ROUTERS
            for api_route in api_router.routes
            if isinstance(api_route, APIRoute) and "." in api_route.name
        ]

        assert len(named) > 0
        assert len(route_table.routes) == len(named)

    def test_table_agrees_with_framework_reverse_routing(self, app, route_table):
        """Every href the table builds is the path the framework routes."""
        for route in route_table.routes:
            params = {name: f"{name}-1" for name in route.parameter_names}

            expected = app.url_path_for(route.identity, **params)

            assert route_table.build_href(route.controller, route.operation, params) == str(expected)

    @pytest.mark.parametrize("controller,operation,params", [
        ("root", "index", {}),
        ("root", "health", {}),
        ("sitemap", "get_sitemap", {}),
        ("auth", "federate", {}),
        ("auth", "verify", {}),
        ("auth", "revoke", {}),
        ("users", "get_user", {"user_id": "u1"}),
        ("users", "update_user", {"user_id": "u1"}),
        ("api_keys", "get_api_keys", {"user_id": "u1"}),
        ("api_keys", "get_api_key", {"user_id": "u1", "api_key_id": "k1"}),
        ("api_keys", "create_api_key", {"user_id": "u1"}),
        ("api_keys", "delete_api_keys", {"user_id": "u1"}),
        ("sessions", "get_sessions", {"user_id": "u1"}),
        ("sessions", "get_session", {"user_id": "u1", "session_id": "s1"}),
        ("sessions", "delete_sessions", {"user_id": "u1"}),
    ])
    def test_every_linked_operation_resolves(self, route_table, controller, operation, params):
        assert route_table.build_href(controller, operation, params).startswith("/")
