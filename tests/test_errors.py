"""Tests for plugin system exceptions."""

import pickle

from superapp.plugins.errors import ConflictKind, PluginConflictError, PluginLoadError


class TestPluginConflictError:
    """Tests for PluginConflictError."""

    def test_message_format(self):
        """测试冲突信息格式。"""
        err = PluginConflictError(ConflictKind.ACTION, "send_email", "mailer", "notifier")
        assert str(err) == (
            'Plugin conflict: action "send_email" is defined by both "mailer" and "notifier". '
            "Each action must be provided by exactly one plugin."
        )

    def test_fields_exposed(self):
        """测试四个字段都可访问。"""
        err = PluginConflictError("route", "GET /x", "A", "B")
        assert err.kind is ConflictKind.ROUTE
        assert (err.key, err.owner_a, err.owner_b) == ("GET /x", "A", "B")

    def test_auth_message(self):
        """测试 auth 冲突信息。"""
        err = PluginConflictError(ConflictKind.AUTH, "auth", "host configuration", "jwt")
        assert str(err).startswith('Plugin conflict: auth "auth" is defined by both "host configuration" and "jwt".')


    def test_survives_pickling(self):
        """测试冲突异常可以跨进程传递。"""
        err = PluginConflictError(ConflictKind.PERMISSION, "p1", "A", "B")
        restored = pickle.loads(pickle.dumps(err))

        assert isinstance(restored, PluginConflictError)
        assert (restored.kind, restored.key, restored.owner_a, restored.owner_b) == (
            ConflictKind.PERMISSION, "p1", "A", "B",
        )
        assert str(restored) == str(err)


class TestPluginLoadError:
    def test_message(self):
        err = PluginLoadError("health", "module 'plugin' has no attribute 'plugin'")
        assert err.plugin_id == "health"
        assert str(err) == "Cannot load plugin 'health': module 'plugin' has no attribute 'plugin'"

    def test_survives_pickling(self):
        restored = pickle.loads(pickle.dumps(PluginLoadError("health", "boom")))
        assert (restored.plugin_id, restored.reason) == ("health", "boom")
        assert str(restored) == "Cannot load plugin 'health': boom"
