"""PluginAPI - the API object passed to each plugin's register() function."""

import logging
from typing import Any, Dict, Optional

from blogsite.models.site import SiteMetadata


class PluginAPI:
    """API object provided to plugins during registration.

    Carries the plugin's own option bag and the site metadata; plugins validate
    the options themselves.
    """

    def __init__(
        self,
        plugin_id: str,
        options: Dict[str, Any],
        site_metadata: SiteMetadata,
    ):
        self.plugin_id = plugin_id
        self.options = options
        self.site_metadata = site_metadata
        self._logger = logging.getLogger(f"plugin.{plugin_id}")

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get a logger for this plugin.

        Args:
            name: Optional sub-logger name (appended to plugin.{plugin_id})

        Returns:
            Logger instance
        """
        if name:
            return logging.getLogger(f"plugin.{self.plugin_id}.{name}")
        return self._logger
