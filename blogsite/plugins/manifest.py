"""Plugin manifest model - describes a plugin the site can activate."""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class PluginType(str, Enum):
    """Role a plugin plays in building the site."""

    SITEMAP = "sitemap"
    THEME = "theme"
    MANIFEST = "manifest"
    CMS = "cms"
    SOURCE = "source"
    OTHER = "other"


class PluginManifest(BaseModel):
    """Plugin manifest loaded from plugin.json."""

    id: str = Field(..., min_length=1, description="Identifier used in a plugin activation's 'resolve'")
    name: str = Field(..., description="Human-readable plugin name")
    version: str = Field(default="1.0.0", description="Plugin version")
    description: str = Field(default="", description="Plugin description")
    type: PluginType = Field(default=PluginType.OTHER, description="Plugin role")
    entry_point: str = Field(
        ...,
        pattern=r"^[\w.]+:\w+$",
        description="Python module:function path relative to plugin directory, e.g. 'plugin:register'",
    )
    multiple: bool = Field(
        default=False,
        description="Whether the plugin may be activated more than once",
    )
    options_schema: Optional[Dict[str, Any]] = Field(
        default=None,
        description="JSON Schema documenting the plugin's options (validated by the plugin itself)",
    )

    @property
    def entry_module(self) -> str:
        return self.entry_point.split(":")[0]

    @property
    def entry_function(self) -> str:
        return self.entry_point.split(":")[1]

    def entry_file(self, plugin_dir: Path) -> Path:
        """Source file holding the entry point, inside plugin_dir."""
        return plugin_dir / f"{self.entry_module.replace('.', '/')}.py"
