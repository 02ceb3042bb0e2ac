"""Shared fixtures: fake capability objects for plugin descriptors."""

from typing import Any, Dict, List, Optional

import pytest

from superapp.plugins.types import (
    AuthProvider,
    IntegrationProvider,
    Permission,
    QueryRequest,
    QueryResult,
    TableSchema,
    User,
)


class FakeAuthProvider(AuthProvider):
    def __init__(self, label: str = "fake"):
        self.label = label

    async def verify_token(self, token: str) -> Dict[str, Any]:
        return {"sub": token}

    async def find_user(self, payload: Dict[str, Any], db: Any) -> Optional[User]:
        return User(id=payload["sub"])


class FakeIntegration(IntegrationProvider):
    def __init__(self, type: str):
        self.type = type

    async def test_connection(self, config: Dict[str, Any]) -> bool:
        return True

    async def introspect(self, config: Dict[str, Any]) -> List[TableSchema]:
        return []

    async def execute(self, config: Dict[str, Any], query: QueryRequest) -> QueryResult:
        return QueryResult()


@pytest.fixture
def make_auth():
    return FakeAuthProvider


@pytest.fixture
def make_integration():
    return FakeIntegration


@pytest.fixture
def make_permission():
    def _make(table: str, **operations: bool) -> Permission:
        return Permission(name=f"{table} access", table=table, operations=operations or {"select": True})

    return _make
