"""Plugin host - consumes a SiteConfig and activates its plugins in order."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from blogsite.errors import PluginActivationError, PluginConflictError, PluginResolutionError
from blogsite.models.site import SiteConfig
from blogsite.plugins.api import PluginAPI
from blogsite.plugins.discovery import PluginDiscovery
from blogsite.plugins.lifecycle import PluginLifecycle
from blogsite.plugins.instance import PluginInstance

logger = logging.getLogger(__name__)


class PluginHost:
    """Top-level plugin orchestrator for a site.

    Resolves every activation in the site config against the discovered plugins,
    then loads and registers them in declaration order, each with its own options.
    """

    def __init__(
        self,
        config: SiteConfig,
        bundled_dir: Path,
        installed_dir: Path,
        extra_paths: Optional[List[Path]] = None,
    ):
        self.config = config
        self.lifecycle = PluginLifecycle()
        self.available: Optional[Dict[str, PluginInstance]] = None
        self.activations: List[PluginInstance] = []

        # Build search paths: (path, source_label)
        search_paths = [
            (bundled_dir, "bundled"),
            (installed_dir, "installed"),
        ]
        if extra_paths:
            for p in extra_paths:
                search_paths.append((p, "external"))

        self.discovery = PluginDiscovery(search_paths)

    def discover(self) -> Dict[str, PluginInstance]:
        """Scan the search paths once; returns the available plugins by identifier."""
        if self.available is None:
            self.available = self.discovery.discover_all()
        return self.available

    @property
    def shadowed(self) -> List[PluginInstance]:
        """Plugins hidden by an earlier search path declaring the same identifier."""
        self.discover()
        return list(self.discovery.shadowed)

    def resolve_all(self) -> List[PluginInstance]:
        """Map each activation, in order, to a discovered plugin.

        Returns:
            One fresh PluginInstance per activation, carrying its position and options

        Raises:
            PluginResolutionError: an identifier matches no discovered plugin
            PluginConflictError: a plugin is listed twice without allowing it
        """
        available = self.discover()

        resolved = []
        seen = set()
        for position, activation in enumerate(self.config.plugins):
            discovered = available.get(activation.resolve)
            if discovered is None:
                raise PluginResolutionError(
                    activation.resolve, "plugin not found in any search path"
                )
            if activation.resolve in seen and not discovered.manifest.multiple:
                raise PluginConflictError(
                    activation.resolve, f"activated more than once (again at position {position})"
                )
            seen.add(activation.resolve)
            resolved.append(
                replace(discovered, position=position, options=activation.get_options())
            )

        logger.info(f"Resolved {len(resolved)} plugin activation(s)")
        return resolved

    def activate_all(self) -> List[PluginInstance]:
        """Resolve, load and register every plugin named by the site config.

        Raises:
            PluginActivationError: the first plugin that fails to load or register
        """
        if self.activations:
            return self.activations

        resolved = self.resolve_all()
        for instance in resolved:
            self._activate_plugin(instance)
        self.activations = resolved

        logger.info(
            f"Plugin host initialized for '{self.config.site_metadata.title}', "
            f"{len(resolved)} plugin(s) registered"
        )
        return self.activations

    async def start_all(self) -> None:
        """Start activated plugins in declaration order."""
        for instance in self.activate_all():
            if not await self.lifecycle.start(instance):
                raise PluginActivationError(instance.id, instance.error or "failed to start")

    async def stop_all(self) -> None:
        """Stop running plugins in reverse declaration order."""
        for instance in reversed(self.activations):
            await self.lifecycle.stop(instance)
        logger.info("All plugins stopped")

    def get_plugin(self, plugin_id: str) -> Optional[Any]:
        """Get the plugin object returned by the first activation of plugin_id."""
        instance = self._get_activation(plugin_id)
        return instance.plugin_object if instance else None

    def get_plugin_info(self, plugin_id: str) -> Optional[dict]:
        """Get activated plugin information as dict."""
        instance = self._get_activation(plugin_id)
        if not instance:
            return None
        info = instance.to_dict()
        info["options"] = instance.options
        return info

    def list_plugins(self) -> List[dict]:
        """List activated plugins as dicts, in declaration order."""
        return [p.to_dict() for p in self.activations]

    def _get_activation(self, plugin_id: str) -> Optional[PluginInstance]:
        return next((p for p in self.activations if p.id == plugin_id), None)

    def _activate_plugin(self, instance: PluginInstance) -> None:
        if not self.lifecycle.load(instance):
            raise PluginActivationError(instance.id, instance.error or "failed to load")

        api = PluginAPI(
            plugin_id=instance.id,
            options=instance.options,
            site_metadata=self.config.site_metadata,
        )

        if not self.lifecycle.register(instance, api):
            raise PluginActivationError(instance.id, instance.error or "failed to register")

        logger.info(
            f"Activated plugin #{instance.position}: {instance.id} ({instance.manifest.type.value})"
        )
