"""Capability contracts carried by plugins.

Every value a plugin contributes is one of the types below. The resolver only
moves these objects around; it never calls or inspects them. Executing them is
the host runtime's job.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, List, Literal, Mapping, Optional, Type, Union

from fastapi import Request, Response
from pydantic import BaseModel, ConfigDict, Field

PermissionOperation = Literal["select", "insert", "update", "delete"]

# Filter/check/preset values are interpreted by the permission layer, not here.
ConditionTree = Dict[str, Any]
PermissionFilter = ConditionTree
PermissionCheck = ConditionTree
PermissionPreset = ConditionTree

JWTPayload = Dict[str, Any]


class User(BaseModel):
    """Authenticated user record returned by an auth provider."""

    model_config = ConfigDict(extra="allow")

    id: str
    email: Optional[str] = None
    role: Optional[str] = None


class EnrichedUser(User):
    """User with session data attached (organisation membership)."""

    org_ids: List[str] = Field(default_factory=list)
    current_org_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Integrations
# ---------------------------------------------------------------------------


class ConfigField(BaseModel):
    """One entry of an integration's connection config schema."""

    type: Literal["string", "number", "boolean"]
    required: bool = False
    secret: bool = False
    default: Any = None
    description: str = ""


class ColumnSchema(BaseModel):
    name: str
    type: str
    nullable: bool
    primary_key: bool = False


class TableSchema(BaseModel):
    name: str
    columns: List[ColumnSchema] = Field(default_factory=list)


class QueryRequest(BaseModel):
    table: str
    operation: PermissionOperation
    where: Optional[Dict[str, Any]] = None
    columns: Optional[List[str]] = None
    values: Optional[Dict[str, Any]] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class QueryResult(BaseModel):
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    count: Optional[int] = None


@dataclass(frozen=True)
class IntegrationCapabilities:
    """Declares what a data source supports."""

    read: bool = True
    write: bool = False
    transactions: bool = False


class IntegrationProvider(ABC):
    """Data-source integration contributed by a plugin."""

    type: str = ""
    capabilities: IntegrationCapabilities = IntegrationCapabilities()
    config_schema: Mapping[str, ConfigField] = MappingProxyType({})

    @abstractmethod
    async def test_connection(self, config: Dict[str, Any]) -> bool:
        ...

    @abstractmethod
    async def introspect(self, config: Dict[str, Any]) -> List[TableSchema]:
        ...

    @abstractmethod
    async def execute(self, config: Dict[str, Any], query: QueryRequest) -> QueryResult:
        ...


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class AuthProvider(ABC):
    """Authentication provider. At most one may be active per resolution."""

    @abstractmethod
    async def verify_token(self, token: str) -> JWTPayload:
        """Verify a bearer token and return its claims."""
        ...

    @abstractmethod
    async def find_user(self, payload: JWTPayload, db: Any) -> Optional[User]:
        """Look up the user the claims refer to."""
        ...

    async def resolve_session(self, user: User, db: Any) -> EnrichedUser:
        """Attach session data to a user. Override to load org membership."""
        return EnrichedUser(**user.model_dump())

    @property
    def routes(self) -> Dict[str, RouteHandler]:
        """Routes the provider needs mounted (login callbacks and the like)."""
        return {}


# ---------------------------------------------------------------------------
# Request pipeline
# ---------------------------------------------------------------------------


@dataclass
class PipelineContext:
    """Per-request context handed to pipeline middleware and request hooks."""

    request: Request
    user: Optional[EnrichedUser] = None
    operation: Optional[PermissionOperation] = None
    table: Optional[str] = None
    sql: Optional[str] = None
    params: List[Any] = field(default_factory=list)


PipelineNext = Callable[[], Awaitable[Response]]
PipelineMiddleware = Callable[[PipelineContext, PipelineNext], Awaitable[Response]]
RouteHandler = Callable[[Request], Union[Response, Awaitable[Response]]]


@dataclass
class EngineContext:
    """Passed to on_init hooks once the host runtime is up."""

    db: Any
    connections: Dict[str, Any] = field(default_factory=dict)
    config: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Permissions
# ---------------------------------------------------------------------------


@dataclass
class MiddlewareContext:
    """Context for per-permission middleware around a single query."""

    user: EnrichedUser
    db: Any
    table: str
    operation: PermissionOperation
    columns: List[str]
    sql: str
    params: List[Any] = field(default_factory=list)
    input: Optional[Dict[str, Any]] = None
    filter: Optional[PermissionFilter] = None


MiddlewareNext = Callable[..., Awaitable[List[Dict[str, Any]]]]
PermissionMiddleware = Callable[[MiddlewareContext, MiddlewareNext], Awaitable[Any]]


class Permission(BaseModel):
    """Access rule for one table, keyed by slug in a plugin's permissions."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Human-readable permission name")
    table: str = Field(..., description="Table the rule applies to")
    operations: Dict[PermissionOperation, bool] = Field(default_factory=dict)
    columns: Union[List[str], Literal["*"], None] = None
    filter: Optional[PermissionFilter] = None
    check: Optional[PermissionCheck] = None
    preset: Optional[PermissionPreset] = None
    middleware: Optional[PermissionMiddleware] = None


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class ActionDefinition(BaseModel):
    """Server-side action. Input and output are validated with pydantic models."""

    model_config = ConfigDict(frozen=True)

    input: Type[BaseModel]
    output: Optional[Type[BaseModel]] = None
    run: Callable[..., Awaitable[Any]]


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

OnInitHook = Callable[[EngineContext], Optional[Awaitable[None]]]
OnRequestHook = Callable[[PipelineContext], Optional[Awaitable[None]]]
OnErrorHook = Callable[[Exception, PipelineContext], Optional[Awaitable[None]]]
OnShutdownHook = Callable[[], Optional[Awaitable[None]]]
