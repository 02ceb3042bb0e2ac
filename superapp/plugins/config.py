"""Plugin configuration service - manages plugins/config.json."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class PluginConfigService:
    """Reads and updates the plugin config file.

    Config format:
    {
        "enabled": ["health", "audit-log"],
        "plugins": {
            "audit-log": {"retention_days": 30}
        }
    }

    The order of "enabled" is the order plugins are resolved in, so it
    decides middleware nesting and hook call order.
    """

    def __init__(self, config_file: Path):
        self.config_file = config_file
        self._config: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    data.setdefault("enabled", [])
                    data.setdefault("plugins", {})
                    return data
                logger.error(f"Plugin config {self.config_file} is not a JSON object, ignoring")
            except (json.JSONDecodeError, OSError) as e:
                logger.error(f"Error loading plugin config: {e}")

        return {"enabled": [], "plugins": {}}

    def _save(self) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved plugin config to {self.config_file}")

    def is_enabled(self, plugin_id: str) -> bool:
        return plugin_id in self._config["enabled"]

    def get_enabled_list(self) -> List[str]:
        """Enabled plugin ids, in resolution order."""
        return list(self._config["enabled"])

    def get_plugin_config(self, plugin_id: str) -> Dict[str, Any]:
        return dict(self._config["plugins"].get(plugin_id, {}))

    def enable(self, plugin_id: str, position: Optional[int] = None) -> None:
        """Enable a plugin, appending it or inserting it at a given position.

        Enabling an already enabled plugin with a position moves it there.
        """
        enabled: List[str] = self._config["enabled"]
        if plugin_id in enabled:
            if position is None:
                return
            enabled.remove(plugin_id)

        if position is None:
            enabled.append(plugin_id)
        else:
            enabled.insert(position, plugin_id)
        self._save()
        logger.info(f"Enabled plugin: {plugin_id} (position {enabled.index(plugin_id)})")

    def disable(self, plugin_id: str) -> None:
        enabled: List[str] = self._config["enabled"]
        if plugin_id in enabled:
            enabled.remove(plugin_id)
            self._save()
            logger.info(f"Disabled plugin: {plugin_id}")

    def update_plugin_config(self, plugin_id: str, config: Dict[str, Any]) -> None:
        self._config["plugins"][plugin_id] = config
        self._save()
        logger.info(f"Updated config for plugin: {plugin_id}")
