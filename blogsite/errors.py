"""Exceptions raised while loading and consuming the site configuration."""


class SiteConfigError(Exception):
    """The site declaration could not be loaded or failed validation."""


class PluginError(Exception):
    """Base class for plugin host failures."""

    def __init__(self, plugin_id: str, message: str):
        self.plugin_id = plugin_id
        super().__init__(f"{plugin_id}: {message}")


class PluginResolutionError(PluginError):
    """A plugin activation names a plugin that cannot be located."""


class PluginConflictError(PluginError):
    """A plugin is activated more than once but does not allow it."""


class PluginActivationError(PluginError):
    """A resolved plugin failed to load or rejected its options."""
