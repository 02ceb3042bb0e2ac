"""Plugin system exceptions."""

from enum import Enum


class ConflictKind(str, Enum):
    """Contribution categories that allow exactly one owner per key."""

    AUTH = "auth"
    PERMISSION = "permission"
    ACTION = "action"
    ROUTE = "route"


class PluginConflictError(Exception):
    """Raised when two contributors claim the same exclusive key.

    Attributes:
        kind: Contribution category of the collision
        key: The colliding key ("auth" for auth conflicts)
        owner_a: Name of the contributor that registered the key first
        owner_b: Name of the plugin that attempted the second registration
    """

    def __init__(self, kind: ConflictKind, key: str, owner_a: str, owner_b: str):
        self.kind = ConflictKind(kind)
        self.key = key
        self.owner_a = owner_a
        self.owner_b = owner_b
        kind_name = self.kind.value
        super().__init__(
            f'Plugin conflict: {kind_name} "{key}" is defined by both "{owner_a}" and "{owner_b}". '
            f"Each {kind_name} must be provided by exactly one plugin."
        )

    def __reduce__(self):
        return self.__class__, (self.kind, self.key, self.owner_a, self.owner_b)


class PluginLoadError(Exception):
    """Raised when a plugin entry point cannot be turned into a Plugin descriptor."""

    def __init__(self, plugin_id: str, reason: str):
        self.plugin_id = plugin_id
        self.reason = reason
        super().__init__(f"Cannot load plugin '{plugin_id}': {reason}")

    def __reduce__(self):
        return self.__class__, (self.plugin_id, self.reason)
