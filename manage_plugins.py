#!/usr/bin/env python3
"""Plugin management CLI tool."""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure project root is in path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

load_dotenv()

from superapp.constants import (  # noqa: E402
    BUNDLED_PLUGINS_DIR,
    EXTRA_PLUGIN_PATHS,
    INSTALLED_PLUGINS_DIR,
    LOG_LEVEL,
    PLUGIN_CONFIG_FILE,
)
from superapp.plugins.errors import PluginConflictError  # noqa: E402
from superapp.plugins.manager import PluginManager  # noqa: E402


def get_manager() -> PluginManager:
    """Create a PluginManager over the configured search paths."""
    manager = PluginManager(
        bundled_dir=BUNDLED_PLUGINS_DIR,
        installed_dir=INSTALLED_PLUGINS_DIR,
        config_file=PLUGIN_CONFIG_FILE,
        extra_paths=EXTRA_PLUGIN_PATHS,
    )
    manager.discover()
    return manager


def cmd_list(args):
    """List all discovered plugins."""
    manager = get_manager()
    plugins = manager.list_plugins()

    if not plugins:
        print("No plugins found.")
        return

    enabled_ids = manager.config_service.get_enabled_list()

    print(f"{'ID':<20} {'Name':<30} {'Source':<10} {'Order':<6} {'Version'}")
    print("-" * 80)

    for p in plugins:
        order = str(enabled_ids.index(p["id"]) + 1) if p["id"] in enabled_ids else "-"
        print(f"{p['id']:<20} {p['name']:<30} {p['source']:<10} {order:<6} {p['version']}")


def cmd_info(args):
    """Show detailed plugin information."""
    manager = get_manager()
    info = manager.get_plugin_info(args.plugin_id)
    if not info:
        print(f"Plugin '{args.plugin_id}' not found.")
        sys.exit(1)

    instance = manager.registry.get(args.plugin_id)
    print(f"Plugin: {info['id']}")
    print(f"  Name:        {info['name']}")
    print(f"  Version:     {info['version']}")
    print(f"  Description: {info['description']}")
    print(f"  Source:      {info['source']}")
    print(f"  Path:        {instance.path}")
    print(f"  Entry Point: {instance.manifest.entry_point}")
    print(f"  Enabled:     {info['enabled']}")
    if info["config"]:
        print(f"  Config:      {json.dumps(info['config'], indent=4, ensure_ascii=False)}")
    if info["config_schema"]:
        print(f"  Schema:      {json.dumps(info['config_schema'], indent=4)}")


def cmd_enable(args):
    """Enable a plugin."""
    manager = get_manager()
    if not manager.enable_plugin(args.plugin_id, args.position):
        print(f"Plugin '{args.plugin_id}' not found.")
        sys.exit(1)
    print(f"Plugin '{args.plugin_id}' enabled. Restart the service to take effect.")


def cmd_disable(args):
    """Disable a plugin."""
    manager = get_manager()
    if not manager.disable_plugin(args.plugin_id):
        print(f"Plugin '{args.plugin_id}' not found.")
        sys.exit(1)
    print(f"Plugin '{args.plugin_id}' disabled. Restart the service to take effect.")


def cmd_resolve(args):
    """Load the enabled plugins and print the merged configuration."""
    manager = get_manager()
    try:
        resolved = manager.resolve()
    except PluginConflictError as e:
        print(str(e))
        sys.exit(1)

    failed = [p for p in manager.registry.get_enabled() if p.error]
    for p in failed:
        print(f"Plugin '{p.id}' failed to load: {p.error}")
    print(json.dumps(resolved.to_dict(), indent=2, ensure_ascii=False))
    if failed:
        sys.exit(1)


def cmd_doctor(args):
    """Run health checks on the plugin system."""
    issues = []

    if not BUNDLED_PLUGINS_DIR.exists():
        issues.append(f"Bundled plugins directory missing: {BUNDLED_PLUGINS_DIR}")

    if not PLUGIN_CONFIG_FILE.exists():
        issues.append(f"Plugin config file missing: {PLUGIN_CONFIG_FILE}")
    else:
        try:
            with open(PLUGIN_CONFIG_FILE) as f:
                json.load(f)
        except json.JSONDecodeError as e:
            issues.append(f"Plugin config file has invalid JSON: {e}")

    manager = get_manager()
    enabled_ids = manager.config_service.get_enabled_list()

    for eid in enabled_ids:
        if not manager.registry.has(eid):
            issues.append(f"Enabled plugin '{eid}' not found in any search path")

    for instance in manager.registry.get_all():
        entry_file = instance.path / f"{instance.manifest.entry_module}.py"
        if not entry_file.exists():
            issues.append(f"Plugin '{instance.id}': entry point file missing: {entry_file}")

    # Load and resolve to surface import errors and key conflicts
    try:
        manager.resolve()
    except PluginConflictError as e:
        issues.append(str(e))
    for instance in manager.registry.get_enabled():
        if instance.error:
            issues.append(f"Plugin '{instance.id}': {instance.error}")

    if issues:
        print(f"Found {len(issues)} issue(s):")
        for i, issue in enumerate(issues, 1):
            print(f"  {i}. {issue}")
        sys.exit(1)
    else:
        print(
            f"All checks passed. {manager.registry.count()} plugin(s) found, "
            f"{len(manager.registry.get_loaded())}/{len(enabled_ids)} enabled plugin(s) loaded."
        )


def main():
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Superapp Plugin Manager")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list
    subparsers.add_parser("list", help="List all plugins")

    # info
    info_parser = subparsers.add_parser("info", help="Show plugin details")
    info_parser.add_argument("plugin_id", help="Plugin ID")

    # enable
    enable_parser = subparsers.add_parser("enable", help="Enable a plugin")
    enable_parser.add_argument("plugin_id", help="Plugin ID")
    enable_parser.add_argument(
        "--position", type=int, default=None, help="Position in resolution order (0 = first)"
    )

    # disable
    disable_parser = subparsers.add_parser("disable", help="Disable a plugin")
    disable_parser.add_argument("plugin_id", help="Plugin ID")

    # resolve
    subparsers.add_parser("resolve", help="Resolve enabled plugins and print the result")

    # doctor
    subparsers.add_parser("doctor", help="Run health checks")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    commands = {
        "list": cmd_list,
        "info": cmd_info,
        "enable": cmd_enable,
        "disable": cmd_disable,
        "resolve": cmd_resolve,
        "doctor": cmd_doctor,
    }

    commands[args.command](args)


if __name__ == "__main__":
    main()
