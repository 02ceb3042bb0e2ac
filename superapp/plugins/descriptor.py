"""Plugin descriptor - the single concept plugin authors learn.

Usage:
    from superapp.plugins import Plugin, define_plugin

    plugin = define_plugin(Plugin(
        name="audit-log",
        permissions={"read_audit": Permission(name="Read audit", table="audit")},
    ))
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

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


class Plugin(BaseModel):
    """A bundle of optional contributions to the host runtime configuration.

    Descriptors are frozen: once built they are handed to resolve_plugins()
    as-is and never modified.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Plugin name, used in error messages and debug logging")

    integrations: Optional[List[IntegrationProvider]] = Field(
        default=None,
        description="Data-source integrations, concatenated with other plugins'",
    )
    auth: Optional[AuthProvider] = Field(
        default=None,
        description="Authentication provider. Only one contributor may supply it",
    )
    permissions: Optional[Dict[str, Permission]] = Field(
        default=None,
        description="Permissions keyed by snake_case slug. Duplicate slugs are a startup error",
    )
    roles: Optional[Dict[str, List[str]]] = Field(
        default=None,
        description="Role name -> permission slugs. Same-named roles are unioned",
    )
    actions: Optional[Dict[str, ActionDefinition]] = Field(
        default=None,
        description="Server actions keyed by name. Duplicate names are a startup error",
    )
    middleware: Optional[List[PipelineMiddleware]] = Field(
        default=None,
        description="Request pipeline middleware; the first plugin's runs outermost",
    )
    routes: Optional[Dict[str, RouteHandler]] = Field(
        default=None,
        description='Route handlers keyed by "METHOD /path". Duplicate keys are a startup error',
    )

    on_init: Optional[OnInitHook] = None
    on_request: Optional[OnRequestHook] = None
    on_error: Optional[OnErrorHook] = None
    on_shutdown: Optional[OnShutdownHook] = None


def define_plugin(plugin: Plugin) -> Plugin:
    """Return the descriptor unchanged.

    Gives plugin modules a single, well-known entry point; shape validation
    already happened when the Plugin was constructed.
    """
    return plugin
