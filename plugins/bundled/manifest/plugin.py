"""Web app manifest plugin entry point."""

import logging
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from blogsite.plugins.api import PluginAPI

logger = logging.getLogger(__name__)


class ManifestOptions(BaseModel):
    """Options for manifest.webmanifest; keys follow the web manifest names."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    short_name: Optional[str] = None
    start_url: str = "/"
    # Any CSS color string
    background_color: str = "#fff"
    theme_color: str = "#fff"
    display: Literal["fullscreen", "standalone", "minimal-ui", "browser"] = "standalone"
    icon: str = Field(..., min_length=1, description="Source image the icon set is generated from")


class ManifestPlugin:
    """Builds the web app manifest from its options."""

    def __init__(self, api: PluginAPI):
        self.api = api
        self.options = ManifestOptions(**api.options)

    def to_webmanifest(self) -> Dict[str, Any]:
        """Return the manifest document (icon source path excluded)."""
        return self.options.model_dump(exclude={"icon"}, exclude_none=True)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.options.name,
            "display": self.options.display,
            "icon": self.options.icon,
        }


def register(api: PluginAPI) -> ManifestPlugin:
    """Plugin entry point - called by PluginLifecycle.register()."""
    plugin = ManifestPlugin(api)
    logger.info(f"Manifest plugin registered for app '{plugin.options.name}'")
    return plugin
