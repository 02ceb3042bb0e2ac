"""Plugin system for the superapp backend.

The resolver (descriptor, resolve, errors, types) is pure and import-light.
Discovery, loading and config handling are imported lazily since only the
host tooling needs them.
"""

from superapp.plugins.descriptor import Plugin, define_plugin
from superapp.plugins.errors import ConflictKind, PluginConflictError, PluginLoadError
from superapp.plugins.resolve import (
    HOST_CONFIG_OWNER,
    ResolvedHooks,
    ResolvedPlugins,
    find_owner,
    resolve_plugins,
)
from superapp.plugins.types import (
    ActionDefinition,
    AuthProvider,
    ConditionTree,
    ConfigField,
    EngineContext,
    EnrichedUser,
    IntegrationCapabilities,
    IntegrationProvider,
    JWTPayload,
    MiddlewareContext,
    MiddlewareNext,
    Permission,
    PermissionCheck,
    PermissionFilter,
    PermissionOperation,
    PermissionPreset,
    PipelineContext,
    PipelineMiddleware,
    PipelineNext,
    QueryRequest,
    QueryResult,
    RouteHandler,
    TableSchema,
    User,
)

__all__ = [
    "Plugin",
    "define_plugin",
    "resolve_plugins",
    "find_owner",
    "ResolvedPlugins",
    "ResolvedHooks",
    "HOST_CONFIG_OWNER",
    "ConflictKind",
    "PluginConflictError",
    "PluginLoadError",
    "ActionDefinition",
    "AuthProvider",
    "ConditionTree",
    "ConfigField",
    "EngineContext",
    "EnrichedUser",
    "IntegrationCapabilities",
    "IntegrationProvider",
    "JWTPayload",
    "MiddlewareContext",
    "MiddlewareNext",
    "Permission",
    "PermissionCheck",
    "PermissionFilter",
    "PermissionOperation",
    "PermissionPreset",
    "PipelineContext",
    "PipelineMiddleware",
    "PipelineNext",
    "QueryRequest",
    "QueryResult",
    "RouteHandler",
    "TableSchema",
    "User",
    "PluginManifest",
    "PluginRegistry",
    "PluginInstance",
    "PluginState",
    "PluginDiscovery",
    "PluginLoader",
    "PluginManager",
    "PluginConfigService",
]


def __getattr__(name):
    if name == "PluginManifest":
        from superapp.plugins.manifest import PluginManifest
        return PluginManifest
    if name in ("PluginRegistry", "PluginInstance", "PluginState"):
        from superapp.plugins import registry
        return getattr(registry, name)
    if name == "PluginDiscovery":
        from superapp.plugins.discovery import PluginDiscovery
        return PluginDiscovery
    if name == "PluginLoader":
        from superapp.plugins.loader import PluginLoader
        return PluginLoader
    if name == "PluginManager":
        from superapp.plugins.manager import PluginManager
        return PluginManager
    if name == "PluginConfigService":
        from superapp.plugins.config import PluginConfigService
        return PluginConfigService
    raise AttributeError(f"module 'superapp.plugins' has no attribute {name!r}")
