"""Plugin manager - discovers, loads and resolves the enabled plugins."""

import logging
from pathlib import Path
from typing import List, Optional

from superapp.plugins.config import PluginConfigService
from superapp.plugins.descriptor import Plugin
from superapp.plugins.discovery import PluginDiscovery
from superapp.plugins.loader import PluginLoader
from superapp.plugins.registry import PluginInstance, PluginRegistry, PluginState
from superapp.plugins.resolve import ResolvedPlugins, resolve_plugins

logger = logging.getLogger(__name__)


class PluginManager:
    """Top-level orchestrator for the host side of the plugin system.

    Coordinates discovery, loading and resolution. Conflicts raised by
    resolve_plugins() propagate to the caller; an aborted resolution is a
    startup failure for the host.
    """

    def __init__(
        self,
        bundled_dir: Path,
        installed_dir: Path,
        config_file: Path,
        extra_paths: Optional[List[Path]] = None,
    ):
        self.registry = PluginRegistry()
        self.config_service = PluginConfigService(config_file)
        self.loader = PluginLoader()

        search_paths = [
            (bundled_dir, "bundled"),
            (installed_dir, "installed"),
        ]
        for p in extra_paths or []:
            search_paths.append((p, "external"))

        self.discovery = PluginDiscovery(search_paths)

    def discover(self) -> List[PluginInstance]:
        """(Re)scan search paths and mark which plugins are enabled."""
        self.registry = PluginRegistry()
        for instance in self.discovery.discover_all():
            instance.enabled = self.config_service.is_enabled(instance.id)
            self.registry.register(instance)
        return self.registry.get_all()

    def load_enabled(self) -> List[Plugin]:
        """Load every enabled plugin, in config order.

        Plugins that fail to load are marked ERROR and left out.

        Returns:
            Descriptors ready for resolve_plugins()
        """
        self.discover()

        descriptors: List[Plugin] = []
        seen_ids = set()
        for plugin_id in self.config_service.get_enabled_list():
            if plugin_id in seen_ids:
                logger.warning(f"Plugin '{plugin_id}' listed more than once in enabled, keeping first position")
                continue
            seen_ids.add(plugin_id)

            instance = self.registry.get(plugin_id)
            if instance is None:
                logger.warning(f"Enabled plugin '{plugin_id}' not found in any search path")
                continue
            if self.loader.load_into(instance, self.config_service.get_plugin_config(plugin_id)):
                descriptors.append(instance.descriptor)

        logger.info(
            f"Loaded {len(descriptors)}/{len(seen_ids)} enabled plugin(s)"
        )
        return descriptors

    def resolve(self, host: Optional[Plugin] = None) -> ResolvedPlugins:
        """Load the enabled plugins and merge them into one configuration.

        Raises:
            PluginConflictError: If two contributors claim the same key
        """
        return resolve_plugins(self.load_enabled(), host=host)

    def enable_plugin(self, plugin_id: str, position: Optional[int] = None) -> Optional[PluginInstance]:
        """Enable a discovered plugin. Takes effect on the next resolve()."""
        if not self.registry.count():
            self.discover()
        instance = self.registry.get(plugin_id)
        if not instance:
            logger.error(f"Plugin not found: {plugin_id}")
            return None

        self.config_service.enable(plugin_id, position)
        instance.enabled = True
        return instance

    def disable_plugin(self, plugin_id: str) -> Optional[PluginInstance]:
        """Disable a plugin. Takes effect on the next resolve()."""
        if not self.registry.count():
            self.discover()
        instance = self.registry.get(plugin_id)
        if not instance:
            logger.error(f"Plugin not found: {plugin_id}")
            return None

        self.config_service.disable(plugin_id)
        instance.enabled = False
        if instance.state == PluginState.LOADED:
            instance.state = PluginState.DISCOVERED
            instance.descriptor = None
        return instance

    def get_plugin_info(self, plugin_id: str) -> Optional[dict]:
        instance = self.registry.get(plugin_id)
        if not instance:
            return None
        info = instance.to_dict()
        info["config"] = self.config_service.get_plugin_config(plugin_id)
        return info

    def list_plugins(self) -> List[dict]:
        return [p.to_dict() for p in self.registry.get_all()]
