"""Plugin discovery - indexes the plugins on the search paths by identifier."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from blogsite.plugins.instance import PluginInstance
from blogsite.plugins.manifest import PluginManifest

logger = logging.getLogger(__name__)


class PluginDiscovery:
    """Finds `<search path>/<plugin>/plugin.json` manifests.

    Search paths are tried in order; when two directories declare the same
    identifier the earlier one resolves it and the later one is recorded in
    ``shadowed`` so it can be reported.
    """

    MANIFEST_FILE = "plugin.json"

    def __init__(self, search_paths: List[Tuple[Path, str]]):
        self.search_paths = search_paths
        self.shadowed: List[PluginInstance] = []

    def discover_all(self) -> Dict[str, PluginInstance]:
        """Index every valid plugin by the identifier a site uses in 'resolve'."""
        available: Dict[str, PluginInstance] = {}
        self.shadowed = []

        for instance in self._iter_plugins():
            winner = available.get(instance.id)
            if winner is None:
                available[instance.id] = instance
                continue
            logger.warning(
                f"Plugin '{instance.id}' at {instance.path} is shadowed by "
                f"{winner.path} ({winner.source})"
            )
            self.shadowed.append(instance)

        logger.info(f"Discovered {len(available)} plugin(s)")
        return available

    def _iter_plugins(self) -> Iterator[PluginInstance]:
        for search_path, source in self.search_paths:
            if not search_path.is_dir():
                logger.debug(f"Plugin search path does not exist: {search_path}")
                continue
            for manifest_file in sorted(search_path.glob(f"*/{self.MANIFEST_FILE}")):
                instance = self._read_manifest(manifest_file, source)
                if instance is not None:
                    yield instance

    def _read_manifest(self, manifest_file: Path, source: str) -> Optional[PluginInstance]:
        """Validate one manifest and check its entry point file exists; None if unusable."""
        plugin_dir = manifest_file.parent
        try:
            with open(manifest_file, "r", encoding="utf-8") as f:
                manifest = PluginManifest.model_validate(json.load(f))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError, ValidationError) as e:
            logger.error(f"Skipping plugin at {plugin_dir}: invalid {self.MANIFEST_FILE}: {e}")
            return None

        entry_file = manifest.entry_file(plugin_dir)
        if not entry_file.is_file():
            logger.error(f"Skipping plugin '{manifest.id}': entry point file missing: {entry_file}")
            return None

        logger.debug(f"Found plugin {manifest.id} ({manifest.type.value}) at {plugin_dir}")
        return PluginInstance(manifest=manifest, path=plugin_dir, source=source)
