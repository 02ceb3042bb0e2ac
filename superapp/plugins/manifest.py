"""Plugin manifest model - metadata read from a plugin's plugin.json."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class PluginManifest(BaseModel):
    """Plugin manifest loaded from plugin.json."""

    id: str = Field(..., description="Unique plugin identifier (kebab-case)")
    name: str = Field(..., description="Human-readable plugin name")
    version: str = Field(default="1.0.0", description="Plugin version")
    description: str = Field(default="", description="Plugin description")
    entry_point: str = Field(
        ...,
        description="module:attribute path relative to the plugin directory, e.g. 'plugin:plugin'",
    )
    config_schema: Optional[Dict[str, Any]] = Field(
        default=None,
        description="JSON Schema for plugin configuration",
    )

    @field_validator("entry_point")
    @classmethod
    def _check_entry_point(cls, value: str) -> str:
        module_name, sep, attr = value.partition(":")
        if not sep or not module_name or not attr:
            raise ValueError(f"entry_point must look like 'module:attribute', got {value!r}")
        return value

    @property
    def entry_module(self) -> str:
        return self.entry_point.split(":", 1)[0]

    @property
    def entry_attribute(self) -> str:
        return self.entry_point.split(":", 1)[1]
