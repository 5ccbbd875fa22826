"""Plugin lifecycle - moves one activation through load, register, start and stop."""
from __future__ import annotations

import importlib.util
import logging
import re
import sys
from types import ModuleType
from typing import TYPE_CHECKING

from blogsite.plugins.instance import PluginInstance, PluginState

if TYPE_CHECKING:
    from blogsite.plugins.api import PluginAPI

logger = logging.getLogger(__name__)


class PluginLifecycle:
    """Drives PluginInstance state: discovered → loaded → registered → started → stopped.

    Every step records a failure on the instance (``state=ERROR``, ``error``) and
    returns False; PluginHost decides whether that is fatal.
    """

    def load(self, instance: PluginInstance) -> bool:
        """Import the plugin's entry point file and resolve its entry function."""
        if not self._expect(instance, PluginState.DISCOVERED, "load"):
            return False

        manifest = instance.manifest
        try:
            module = self._import_entry_module(instance)
            entry_function = getattr(module, manifest.entry_function, None)
            if entry_function is None:
                raise AttributeError(
                    f"Module {manifest.entry_module} has no function '{manifest.entry_function}'"
                )
            if not callable(entry_function):
                raise TypeError(f"{manifest.entry_point} is not callable")
        except Exception as e:
            return self._fail(instance, "load", e)

        instance.entry_function = entry_function
        return self._advance(instance, PluginState.LOADED, "Loaded")

    def register(self, instance: PluginInstance, api: PluginAPI) -> bool:
        """Hand the plugin its API; the plugin rejects bad options by raising."""
        if not self._expect(instance, PluginState.LOADED, "register"):
            return False

        try:
            plugin_object = instance.entry_function(api)
        except Exception as e:
            return self._fail(instance, "register", e)

        instance.plugin_object = plugin_object
        instance.api = api
        return self._advance(instance, PluginState.REGISTERED, "Registered")

    async def start(self, instance: PluginInstance) -> bool:
        """Await the plugin object's on_start hook, if it has one."""
        if not self._expect(instance, PluginState.REGISTERED, "start"):
            return False

        on_start = getattr(instance.plugin_object, "on_start", None)
        try:
            if on_start is not None:
                await on_start()
        except Exception as e:
            return self._fail(instance, "start", e)

        return self._advance(instance, PluginState.STARTED, "Started")

    async def stop(self, instance: PluginInstance) -> bool:
        """Await on_stop for a started plugin. Errors are recorded, state is kept."""
        if instance.state != PluginState.STARTED:
            logger.debug(f"Plugin {instance.id} not started, skip stop")
            return True

        on_stop = getattr(instance.plugin_object, "on_stop", None)
        try:
            if on_stop is not None:
                await on_stop()
        except Exception as e:
            instance.error = str(e)
            logger.error(f"Failed to stop plugin {instance.id}: {e}")
            return False

        return self._advance(instance, PluginState.STOPPED, "Stopped")

    def _import_entry_module(self, instance: PluginInstance) -> ModuleType:
        entry_file = instance.manifest.entry_file(instance.path)
        safe_id = re.sub(r"\W", "_", instance.id)
        spec = importlib.util.spec_from_file_location(
            f"blogsite_plugin_{safe_id}_{instance.manifest.entry_module}", entry_file,
        )
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot import {entry_file}")

        # Plugin directory is importable only while its entry module executes
        plugin_dir = str(instance.path)
        inserted = plugin_dir not in sys.path
        if inserted:
            sys.path.insert(0, plugin_dir)
        try:
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        finally:
            if inserted and plugin_dir in sys.path:
                sys.path.remove(plugin_dir)
        return module

    @staticmethod
    def _expect(instance: PluginInstance, state: PluginState, step: str) -> bool:
        if instance.state == state:
            return True
        logger.error(
            f"Cannot {step} plugin {instance.id}: state is {instance.state.value}, expected {state.value}"
        )
        return False

    @staticmethod
    def _fail(instance: PluginInstance, step: str, error: Exception) -> bool:
        instance.state = PluginState.ERROR
        instance.error = str(error)
        logger.error(f"Failed to {step} plugin {instance.id}: {error}")
        return False

    @staticmethod
    def _advance(instance: PluginInstance, state: PluginState, verb: str) -> bool:
        instance.state = state
        logger.info(f"{verb} plugin #{instance.position}: {instance.id}")
        return True
