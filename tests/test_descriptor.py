"""Tests for the Plugin descriptor and define_plugin."""

import pytest
from pydantic import ValidationError

from superapp.plugins import ConfigField, Plugin, define_plugin


class TestDefinePlugin:
    """Tests for define_plugin function."""

    def test_returns_same_object(self, make_auth):
        """测试 define_plugin 原样返回，不复制。"""
        plugin = Plugin(name="a", auth=make_auth())
        assert define_plugin(plugin) is plugin

    def test_all_fields_default_to_none(self):
        """测试所有贡献字段默认为空。"""
        plugin = Plugin(name="bare")
        for field_name in (
            "integrations", "auth", "permissions", "roles", "actions",
            "middleware", "routes", "on_init", "on_request", "on_error", "on_shutdown",
        ):
            assert getattr(plugin, field_name) is None


class TestPluginShape:
    """Tests for descriptor validation and immutability."""

    def test_descriptor_is_frozen(self):
        """测试描述符不可修改。"""
        plugin = Plugin(name="a")
        with pytest.raises(ValidationError):
            plugin.name = "b"

    def test_name_required(self):
        """测试 name 必填。"""
        with pytest.raises(ValidationError):
            Plugin()

    def test_auth_must_be_auth_provider(self):
        """测试 auth 必须是 AuthProvider。"""
        with pytest.raises(ValidationError):
            Plugin(name="a", auth={"verify_token": None})

    def test_hooks_must_be_callable(self):
        """测试生命周期回调必须可调用。"""
        with pytest.raises(ValidationError):
            Plugin(name="a", on_init="not callable")

    def test_roles_are_lists_of_slugs(self):
        """测试 roles 的值是权限 slug 列表。"""
        plugin = Plugin(name="a", roles={"editor": ["read", "write"]})
        assert plugin.roles == {"editor": ["read", "write"]}
        with pytest.raises(ValidationError):
            Plugin(name="a", roles={"editor": "read"})


class TestIntegrationProviderDefaults:
    """Tests for IntegrationProvider class defaults."""

    def test_default_config_schema_is_read_only(self, make_integration):
        """测试默认 config_schema 只读，子类之间不共享可变状态。"""
        integration = make_integration("postgres")
        with pytest.raises(TypeError):
            integration.config_schema["host"] = ConfigField(type="string")

        assert dict(make_integration("mysql").config_schema) == {}

    def test_subclass_declares_own_schema(self, make_integration):
        """测试实例可以声明自己的 config_schema。"""
        integration = make_integration("postgres")
        integration.config_schema = {"host": ConfigField(type="string", required=True)}

        assert list(integration.config_schema) == ["host"]
        assert dict(make_integration("mysql").config_schema) == {}
