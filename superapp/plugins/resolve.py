"""Resolves an ordered list of plugins into a single, merged configuration.

Merge strategy:
    - integrations  -> concatenated
    - auth          -> single provider (conflict = error)
    - permissions   -> merged by slug (conflict = error)
    - roles         -> merged by name, permission slugs unioned
    - actions       -> merged by name (conflict = error)
    - middleware    -> concatenated in declaration order
    - routes        -> merged by key (conflict = error)
    - lifecycle     -> all collected, in plugin order

Resolution stops at the first conflict; no partial result is returned.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from superapp.plugins.descriptor import Plugin
from superapp.plugins.errors import ConflictKind, PluginConflictError
from superapp.plugins.types import (
    ActionDefinition,
    AuthProvider,
    IntegrationProvider,
    OnErrorHook,
    OnInitHook,
    OnRequestHook,
    OnShutdownHook,
    Permission,
    PipelineMiddleware,
    RouteHandler,
)

logger = logging.getLogger(__name__)

# Owner reported for keys contributed by the host runtime rather than a plugin.
HOST_CONFIG_OWNER = "host configuration"

HOOK_NAMES = ("on_init", "on_request", "on_error", "on_shutdown")

_FIELD_BY_KIND = {
    ConflictKind.PERMISSION: "permissions",
    ConflictKind.ACTION: "actions",
    ConflictKind.ROUTE: "routes",
}


# ---------------------------------------------------------------------------
# Resolved output - what the host runtime consumes after plugin resolution
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolvedHooks:
    """Lifecycle callbacks collected from every plugin, in plugin order."""

    on_init: Tuple[OnInitHook, ...] = ()
    on_request: Tuple[OnRequestHook, ...] = ()
    on_error: Tuple[OnErrorHook, ...] = ()
    on_shutdown: Tuple[OnShutdownHook, ...] = ()


@dataclass(frozen=True)
class ResolvedPlugins:
    """Read-only snapshot produced by one resolve_plugins() call."""

    integrations: Tuple[IntegrationProvider, ...] = ()
    auth: Optional[AuthProvider] = None
    permissions: Mapping[str, Permission] = field(default_factory=lambda: MappingProxyType({}))
    roles: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    actions: Mapping[str, ActionDefinition] = field(default_factory=lambda: MappingProxyType({}))
    middleware: Tuple[PipelineMiddleware, ...] = ()
    routes: Mapping[str, RouteHandler] = field(default_factory=lambda: MappingProxyType({}))
    hooks: ResolvedHooks = field(default_factory=ResolvedHooks)

    def to_dict(self) -> dict:
        """Summarize the resolution for logging and CLI output."""
        return {
            "integrations": [getattr(p, "type", "") or type(p).__name__ for p in self.integrations],
            "auth": type(self.auth).__name__ if self.auth is not None else None,
            "permissions": list(self.permissions),
            "roles": {role: list(slugs) for role, slugs in self.roles.items()},
            "actions": list(self.actions),
            "middleware": len(self.middleware),
            "routes": list(self.routes),
            "hooks": {name: len(getattr(self.hooks, name)) for name in HOOK_NAMES},
        }


# ---------------------------------------------------------------------------
# Builder - private accumulator for a single resolution pass
# ---------------------------------------------------------------------------

OwnerLookup = Callable[[ConflictKind, str], str]


@dataclass
class _ResolutionBuilder:
    integrations: List[IntegrationProvider] = field(default_factory=list)
    auth: Optional[AuthProvider] = None
    auth_owner: Optional[str] = None
    permissions: Dict[str, Permission] = field(default_factory=dict)
    roles: Dict[str, List[str]] = field(default_factory=dict)
    actions: Dict[str, ActionDefinition] = field(default_factory=dict)
    middleware: List[PipelineMiddleware] = field(default_factory=list)
    routes: Dict[str, RouteHandler] = field(default_factory=dict)
    hooks: Dict[str, List[Any]] = field(default_factory=lambda: {name: [] for name in HOOK_NAMES})

    def merge(self, plugin: Plugin, owner: str, lookup_owner: OwnerLookup) -> None:
        """Fold one descriptor into the accumulator.

        Args:
            plugin: Descriptor to merge
            owner: Name reported as the second registrant on conflict
            lookup_owner: Returns the first registrant of an exclusive key
        """
        # -- integrations (concatenate) ------------------------------------
        if plugin.integrations:
            self.integrations.extend(plugin.integrations)

        # -- auth (single provider) ----------------------------------------
        if plugin.auth is not None:
            if self.auth is not None:
                raise PluginConflictError(ConflictKind.AUTH, "auth", self.auth_owner, owner)
            self.auth = plugin.auth
            self.auth_owner = owner

        # -- permissions / actions / routes (exclusive keys) ---------------
        self._insert_exclusive(self.permissions, plugin.permissions, ConflictKind.PERMISSION, owner, lookup_owner)

        # -- roles (union, first-seen order) -------------------------------
        if plugin.roles:
            for role, slugs in plugin.roles.items():
                merged = self.roles.setdefault(role, [])
                for slug in slugs:
                    if slug not in merged:
                        merged.append(slug)

        self._insert_exclusive(self.actions, plugin.actions, ConflictKind.ACTION, owner, lookup_owner)

        # -- middleware (concatenate in order) -----------------------------
        if plugin.middleware:
            self.middleware.extend(plugin.middleware)

        self._insert_exclusive(self.routes, plugin.routes, ConflictKind.ROUTE, owner, lookup_owner)

        # -- lifecycle hooks -----------------------------------------------
        for name in HOOK_NAMES:
            hook = getattr(plugin, name)
            if hook is not None:
                self.hooks[name].append(hook)

    @staticmethod
    def _insert_exclusive(
        target: Dict[str, Any],
        contributed: Optional[Mapping[str, Any]],
        kind: ConflictKind,
        owner: str,
        lookup_owner: OwnerLookup,
    ) -> None:
        if not contributed:
            return
        for key, value in contributed.items():
            if key in target:
                raise PluginConflictError(kind, key, lookup_owner(kind, key), owner)
            target[key] = value

    def build(self) -> ResolvedPlugins:
        return ResolvedPlugins(
            integrations=tuple(self.integrations),
            auth=self.auth,
            permissions=MappingProxyType(dict(self.permissions)),
            roles=MappingProxyType({role: tuple(slugs) for role, slugs in self.roles.items()}),
            actions=MappingProxyType(dict(self.actions)),
            middleware=tuple(self.middleware),
            routes=MappingProxyType(dict(self.routes)),
            hooks=ResolvedHooks(**{name: tuple(hooks) for name, hooks in self.hooks.items()}),
        )


# ---------------------------------------------------------------------------
# resolve_plugins()
# ---------------------------------------------------------------------------


def resolve_plugins(plugins: Iterable[Plugin], host: Optional[Plugin] = None) -> ResolvedPlugins:
    """Merge plugins, in order, into one resolved configuration.

    Args:
        plugins: Plugin descriptors; order decides integration, middleware
            and hook ordering
        host: Optional contributions from the host runtime itself, merged
            before any plugin and owned by "host configuration"

    Returns:
        ResolvedPlugins snapshot

    Raises:
        PluginConflictError: On the first key claimed by two contributors
    """
    # find_owner re-scans the plugins on conflict, so a one-shot iterable won't do.
    plugins = list(plugins)
    builder = _ResolutionBuilder()

    try:
        if host is not None:
            builder.merge(host, HOST_CONFIG_OWNER, lambda kind, key: HOST_CONFIG_OWNER)

        for plugin in plugins:
            logger.debug(f"Merging plugin: {plugin.name}")
            builder.merge(
                plugin,
                plugin.name,
                lambda kind, key, current=plugin.name: find_owner(plugins, kind, key, current),
            )
    except PluginConflictError as e:
        logger.error(str(e))
        raise

    resolved = builder.build()
    logger.info(
        f"Resolved {len(plugins)} plugin(s): "
        f"{len(resolved.permissions)} permissions, {len(resolved.actions)} actions, "
        f"{len(resolved.routes)} routes, {len(resolved.middleware)} middleware"
    )
    return resolved


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def find_owner(plugins: Sequence[Plugin], kind: ConflictKind, key: str, current_name: str) -> str:
    """Find which earlier plugin owns a given key, for error messages.

    Scans plugins in order up to (not including) the first one named
    current_name. Falls back to HOST_CONFIG_OWNER when no earlier plugin
    contributed the key.
    """
    kind = ConflictKind(kind)
    for plugin in plugins:
        if plugin.name == current_name:
            break
        if kind is ConflictKind.AUTH:
            if plugin.auth is not None:
                return plugin.name
            continue
        contributed = getattr(plugin, _FIELD_BY_KIND[kind])
        if contributed and key in contributed:
            return plugin.name
    return HOST_CONFIG_OWNER
