"""Plugin system for blogsite.

Imports are lazy so that lightweight pieces like PluginManifest or
PluginDiscovery can be used without importing the whole host.
"""

__all__ = [
    "PluginManifest",
    "PluginAPI",
    "PluginType",
    "PluginInstance",
    "PluginState",
    "PluginDiscovery",
    "PluginLifecycle",
    "PluginHost",
]


def __getattr__(name):
    if name in ("PluginManifest", "PluginType"):
        from blogsite.plugins import manifest
        return getattr(manifest, name)
    if name == "PluginAPI":
        from blogsite.plugins.api import PluginAPI
        return PluginAPI
    if name in ("PluginInstance", "PluginState"):
        from blogsite.plugins import instance
        return getattr(instance, name)
    if name == "PluginDiscovery":
        from blogsite.plugins.discovery import PluginDiscovery
        return PluginDiscovery
    if name == "PluginLifecycle":
        from blogsite.plugins.lifecycle import PluginLifecycle
        return PluginLifecycle
    if name == "PluginHost":
        from blogsite.plugins.host import PluginHost
        return PluginHost
    raise AttributeError(f"module 'blogsite.plugins' has no attribute {name!r}")
