"""
Entry point, sitemap and health endpoints.
"""

import os
from typing import Optional

from fastapi import APIRouter, Depends, Request

from launchpad.adapters import RootAdapter, SitemapAdapter
from launchpad.core.constants import (
    API_STATUS_HEALTHY,
    API_VERSION,
    DEFAULT_ENVIRONMENT,
    ENDPOINT_HEALTH,
    ENV_ENVIRONMENT,
)
from launchpad.core.etag import hal_response
from launchpad.models.auth import AuthContext
from launchpad.routing.registration import route_name
from launchpad.routing.router import Router
from .dependencies import get_optional_auth_context, get_router

router = APIRouter(tags=["root"])


@router.get("/", name=route_name("root", "index"), summary="API root")
async def get_root_endpoint(
    auth_context: Optional[AuthContext] = Depends(get_optional_auth_context),
    route_table: Router = Depends(get_router),
):
    """Entry point: every other resource is reachable from here."""
    adapter = RootAdapter(
        route_table,
        user=auth_context.identity if auth_context else None,
        version=API_VERSION,
        environment=os.getenv(ENV_ENVIRONMENT, DEFAULT_ENVIRONMENT),
    )
    return hal_response(adapter.to_json())


@router.get("/sitemap", name=route_name("sitemap", "get_sitemap"), summary="Role-aware navigation")
async def get_sitemap_endpoint(
    auth_context: Optional[AuthContext] = Depends(get_optional_auth_context),
    route_table: Router = Depends(get_router),
):
    adapter = SitemapAdapter(route_table, user=auth_context.identity if auth_context else None)
    return hal_response(adapter.to_json())


@router.get(ENDPOINT_HEALTH, name=route_name("root", "health"), summary="Health check")
async def health_check_endpoint(request: Request):
    """Health check endpoint for monitoring."""
    return {
        "status": API_STATUS_HEALTHY,
        "version": API_VERSION,
        "routes": len(request.app.state.router.routes),
    }
