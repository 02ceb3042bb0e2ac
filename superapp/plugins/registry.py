"""Plugin registry - tracks discovered plugins and their loaded descriptors."""
from __future__ import annotations

import logging
from enum import Enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from superapp.plugins.descriptor import Plugin
from superapp.plugins.manifest import PluginManifest

logger = logging.getLogger(__name__)


class PluginState(str, Enum):
    """Plugin load states."""

    DISCOVERED = "discovered"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class PluginInstance:
    """A discovered plugin and, once loaded, its descriptor."""

    manifest: PluginManifest
    path: Path
    source: str  # "bundled" | "installed" | "external"
    state: PluginState = PluginState.DISCOVERED
    enabled: bool = False
    descriptor: Optional[Plugin] = field(default=None, repr=False)
    error: Optional[str] = None

    @property
    def id(self) -> str:
        return self.manifest.id

    def to_dict(self) -> dict:
        """Serialize plugin instance to dict for CLI output."""
        return {
            "id": self.manifest.id,
            "name": self.manifest.name,
            "version": self.manifest.version,
            "description": self.manifest.description,
            "source": self.source,
            "state": self.state.value,
            "enabled": self.enabled,
            "error": self.error,
            "config_schema": self.manifest.config_schema,
        }


class PluginRegistry:
    """Discovered plugins, keyed by manifest id."""

    def __init__(self):
        self._plugins: Dict[str, PluginInstance] = {}

    def register(self, instance: PluginInstance) -> None:
        if instance.id in self._plugins:
            logger.warning(f"Plugin '{instance.id}' already registered, overwriting")
        self._plugins[instance.id] = instance
        logger.debug(f"Registered plugin: {instance.id} ({instance.source})")

    def get(self, plugin_id: str) -> Optional[PluginInstance]:
        return self._plugins.get(plugin_id)

    def get_all(self) -> list[PluginInstance]:
        return list(self._plugins.values())

    def get_enabled(self) -> list[PluginInstance]:
        return [p for p in self._plugins.values() if p.enabled]

    def get_loaded(self) -> list[PluginInstance]:
        return [p for p in self._plugins.values() if p.state == PluginState.LOADED]

    def has(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    def count(self) -> int:
        return len(self._plugins)
