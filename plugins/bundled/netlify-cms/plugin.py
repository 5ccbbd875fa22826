"""Netlify CMS plugin entry point."""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from blogsite.plugins.api import PluginAPI

logger = logging.getLogger(__name__)


class CMSOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    module_path: Optional[str] = Field(default=None, alias="modulePath")
    public_path: str = Field(default="admin", alias="publicPath")
    html_title: str = Field(default="Content Manager", alias="htmlTitle")


class NetlifyCMSPlugin:
    def __init__(self, api: PluginAPI):
        self.api = api
        self.options = CMSOptions(**api.options)

    @property
    def admin_path(self) -> str:
        return f"/{self.options.public_path.strip('/')}/"

    def describe(self) -> Dict[str, Any]:
        return {
            "admin_path": self.admin_path,
            "html_title": self.options.html_title,
        }


def register(api: PluginAPI) -> NetlifyCMSPlugin:
    """Plugin entry point - called by PluginLifecycle.register()."""
    plugin = NetlifyCMSPlugin(api)
    logger.info(f"CMS editor registered at {plugin.admin_path}")
    return plugin
