"""Sitemap plugin entry point."""

import logging
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blogsite.plugins.api import PluginAPI

logger = logging.getLogger(__name__)


class SitemapOptions(BaseModel):
    """Sitemap options; all optional."""

    model_config = ConfigDict(extra="forbid")

    output: str = Field(default="/sitemap.xml", description="Sitemap path under siteUrl")
    exclude: List[str] = Field(default_factory=list, description="Path globs left out of the sitemap")

    @field_validator("output")
    @classmethod
    def _rooted(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"output must start with '/', got {value!r}")
        return value


class SitemapPlugin:
    """Publishes the sitemap location derived from siteMetadata.siteUrl."""

    def __init__(self, api: PluginAPI):
        self.api = api
        self.options = SitemapOptions(**api.options)
        self.site_url = api.site_metadata.site_url.rstrip("/")

    @property
    def sitemap_url(self) -> str:
        return f"{self.site_url}{self.options.output}"

    def describe(self) -> Dict[str, Any]:
        return {
            "sitemap_url": self.sitemap_url,
            "exclude": list(self.options.exclude),
        }

    async def on_start(self) -> None:
        self.api.get_logger().info(f"Sitemap will be published at {self.sitemap_url}")

    async def on_stop(self) -> None:
        self.api.get_logger().debug("Sitemap plugin stopped")


def register(api: PluginAPI) -> SitemapPlugin:
    """Plugin entry point - called by PluginLifecycle.register()."""
    plugin = SitemapPlugin(api)
    logger.info(f"Sitemap plugin registered for {plugin.site_url}")
    return plugin
