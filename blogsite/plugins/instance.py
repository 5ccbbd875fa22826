"""Plugin instances - one per plugin activation, tracking lifecycle state."""
from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, TYPE_CHECKING

from blogsite.plugins.manifest import PluginManifest

if TYPE_CHECKING:
    from blogsite.plugins.api import PluginAPI


class PluginState(str, Enum):
    """Plugin lifecycle states."""

    DISCOVERED = "discovered"
    LOADED = "loaded"
    REGISTERED = "registered"
    STARTED = "started"
    STOPPED = "stopped"
    ERROR = "error"


@dataclass
class PluginInstance:
    """A plugin found on a search path and, once activated, its plugin object."""

    manifest: PluginManifest
    path: Path
    source: str  # "bundled" | "installed" | "external"
    state: PluginState = PluginState.DISCOVERED
    position: Optional[int] = None  # index in the site's plugin list
    options: Dict[str, Any] = field(default_factory=dict, repr=False)
    api: Optional[PluginAPI] = field(default=None, repr=False)
    entry_function: Any = field(default=None, repr=False)
    plugin_object: Any = field(default=None, repr=False)
    error: Optional[str] = None

    @property
    def id(self) -> str:
        return self.manifest.id

    def to_dict(self) -> dict:
        """Serialize plugin instance to dict for CLI and API responses."""
        info = {
            "id": self.manifest.id,
            "name": self.manifest.name,
            "version": self.manifest.version,
            "description": self.manifest.description,
            "type": self.manifest.type.value,
            "source": self.source,
            "path": str(self.path),
            "state": self.state.value,
            "position": self.position,
            "error": self.error,
            "options_schema": self.manifest.options_schema,
        }
        if self.plugin_object is not None and hasattr(self.plugin_object, "describe"):
            info["summary"] = self.plugin_object.describe()
        return info
