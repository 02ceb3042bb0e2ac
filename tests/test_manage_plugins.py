"""Tests for the manage_plugins CLI commands."""

import argparse
import json

import pytest

import manage_plugins
from superapp.plugins.manager import PluginManager


@pytest.fixture
def manager(tmp_path, monkeypatch):
    plugin_dir = tmp_path / "bundled" / "health"
    plugin_dir.mkdir(parents=True)
    (plugin_dir / "plugin.json").write_text(
        json.dumps({"id": "health", "name": "Health", "entry_point": "plugin:plugin"})
    )
    (plugin_dir / "plugin.py").write_text("from superapp.plugins import Plugin\nplugin = Plugin(name='health')\n")
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"enabled": ["health"], "plugins": {}}))

    def _get_manager():
        manager = PluginManager(
            bundled_dir=tmp_path / "bundled",
            installed_dir=tmp_path / "installed",
            config_file=config_file,
        )
        manager.discover()
        return manager

    monkeypatch.setattr(manage_plugins, "get_manager", _get_manager)
    return _get_manager


class TestCmdDisable:
    """Tests for the disable command."""

    def test_unknown_plugin_exits_with_error(self, manager, capsys):
        """测试禁用不存在的插件时报错退出。"""
        with pytest.raises(SystemExit) as exc_info:
            manage_plugins.cmd_disable(argparse.Namespace(plugin_id="ghost"))

        assert exc_info.value.code == 1
        assert "Plugin 'ghost' not found." in capsys.readouterr().out

    def test_known_plugin_disabled(self, manager, capsys):
        """测试禁用已发现的插件。"""
        manage_plugins.cmd_disable(argparse.Namespace(plugin_id="health"))

        assert "Plugin 'health' disabled." in capsys.readouterr().out
        assert manager().config_service.get_enabled_list() == []
