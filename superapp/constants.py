"""Global constants for the plugin tooling."""

import os
from pathlib import Path

# Project root (the directory holding plugins/)
SUPERAPP_ROOT = Path(os.getenv("SUPERAPP_ROOT", Path(__file__).resolve().parent.parent))

PLUGINS_DIR = SUPERAPP_ROOT / "plugins"
BUNDLED_PLUGINS_DIR = PLUGINS_DIR / "bundled"
INSTALLED_PLUGINS_DIR = PLUGINS_DIR / "installed"

_config_env = os.getenv("PLUGIN_CONFIG_FILE", "")
PLUGIN_CONFIG_FILE = Path(_config_env) if _config_env else PLUGINS_DIR / "config.json"

# Additional plugin search paths, os.pathsep-separated
EXTRA_PLUGIN_PATHS = [Path(p) for p in os.getenv("PLUGIN_PATHS", "").split(os.pathsep) if p.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
