"""Read-only site configuration REST API endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from blogsite.dependencies import get_plugin_host, get_site_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["site"])


@router.get("/site")
async def get_site():
    """Return the whole site declaration in its declaration shape."""
    return get_site_config().to_dict()


@router.get("/site/metadata")
async def get_site_metadata():
    """Return siteMetadata as templates and queries see it."""
    return get_site_config().to_dict()["siteMetadata"]


@router.get("/plugins/")
async def list_plugins():
    """List activated plugins in declaration order."""
    host = get_plugin_host()
    return {"plugins": host.list_plugins()}


@router.get("/plugins/{plugin_id:path}")
async def get_plugin(plugin_id: str):
    """Get details, options and summary of one activated plugin."""
    host = get_plugin_host()
    info = host.get_plugin_info(plugin_id)
    if not info:
        raise HTTPException(status_code=404, detail=f"Plugin '{plugin_id}' not activated")
    return info
