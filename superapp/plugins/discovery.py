"""Plugin discovery - finds plugin directories by their plugin.json manifest."""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError

from superapp.plugins.manifest import PluginManifest
from superapp.plugins.registry import PluginInstance

logger = logging.getLogger(__name__)

SearchPath = Tuple[Path, str]


class PluginDiscovery:
    """Scans (path, source) search paths, in order, for plugin manifests."""

    MANIFEST_FILE = "plugin.json"

    def __init__(self, search_paths: Iterable[SearchPath]):
        self.search_paths: List[SearchPath] = list(search_paths)

    def discover_all(self) -> List[PluginInstance]:
        """Discover plugins across all search paths.

        A plugin id seen in an earlier search path shadows later ones.

        Returns:
            Discovered PluginInstance objects, in search order
        """
        discovered: List[PluginInstance] = []
        seen_ids = set()

        for search_path, source in self.search_paths:
            if not search_path.is_dir():
                logger.debug(f"Plugin search path does not exist: {search_path}")
                continue

            for instance in self._scan_directory(search_path, source):
                if instance.id in seen_ids:
                    logger.warning(
                        f"Duplicate plugin id '{instance.id}' at {instance.path}, "
                        f"skipping (first found wins)"
                    )
                    continue
                seen_ids.add(instance.id)
                discovered.append(instance)

        logger.info(f"Discovered {len(discovered)} plugin(s)")
        return discovered

    def discover_single(self, plugin_path: Path, source: str = "external") -> Optional[PluginInstance]:
        """Read the manifest of a single plugin directory, or None if invalid."""
        manifest_file = plugin_path / self.MANIFEST_FILE
        if not manifest_file.exists():
            logger.error(f"No {self.MANIFEST_FILE} found at {plugin_path}")
            return None
        return self._load_manifest(manifest_file, source)

    def _scan_directory(self, search_path: Path, source: str) -> List[PluginInstance]:
        instances = []
        for item in sorted(search_path.iterdir()):
            manifest_file = item / self.MANIFEST_FILE
            if not item.is_dir() or not manifest_file.exists():
                continue
            instance = self._load_manifest(manifest_file, source)
            if instance:
                instances.append(instance)
        return instances

    def _load_manifest(self, manifest_file: Path, source: str) -> Optional[PluginInstance]:
        try:
            with open(manifest_file, "r", encoding="utf-8") as f:
                manifest = PluginManifest(**json.load(f))
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {manifest_file}: {e}")
            return None
        except ValidationError as e:
            logger.error(f"Invalid manifest in {manifest_file}: {e}")
            return None

        logger.debug(f"Discovered plugin: {manifest.id} at {manifest_file.parent}")
        return PluginInstance(manifest=manifest, path=manifest_file.parent, source=source)
