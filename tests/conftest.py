"""
Shared fixtures.

``FakeSupabase`` stands in for the Supabase client: it implements the slice of
the postgrest query builder the services use (select / insert / update /
delete with eq, order and limit) over in-memory tables, plus enough of
``auth`` for sign-up, sign-in, token lookup and sign-out. No network is used.
"""

from __future__ import annotations

import itertools
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from research_navigator.core.dependencies import get_auth_service, get_user_supabase
from research_navigator.core.session import SessionContext
from research_navigator.database.supabase_client import get_supabase
from research_navigator.main import app
from research_navigator.modules.auth.service import AuthService, clear_auth_cache
from research_navigator.views.notifications import Notifier

UNIQUE_COLUMNS = {"profiles": ("user_id",)}
EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: Any = None
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None
        self.max_rows: Optional[int] = None

    def select(self, columns: str = "*"):
        return self

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.max_rows = n
        return self

    def _matches(self, row) -> bool:
        return all(row.get(c) == v for c, v in self.filters)

    def execute(self):
        self.db.calls.append((self.table, self.op))
        failure = self.db.failures.pop((self.table, self.op), None)
        if failure is not None:
            raise failure
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for payload in payloads:
                for column in UNIQUE_COLUMNS.get(self.table, ()):
                    if any(r.get(column) == payload.get(column) for r in rows):
                        raise APIError({
                            "message": f'duplicate key value violates unique constraint "{self.table}_{column}_key"',
                            "code": "23505",
                            "hint": None,
                            "details": None,
                        })
                row = {"id": str(uuid.uuid4()), "created_at": self.db.now(), **payload}
                rows.append(row)
                created.append(dict(row))
            return SimpleNamespace(data=created, count=None)

        matched = [r for r in rows if self._matches(r)]
        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(r) for r in matched], count=None)
        if self.op == "delete":
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=[dict(r) for r in matched], count=None)

        result = [dict(r) for r in matched]
        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda r: r[column], reverse=desc)
        if self.max_rows is not None:
            result = result[: self.max_rows]
        return SimpleNamespace(data=result, count=None)


class FakeAuth:
    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}
        self.tokens: Dict[str, Dict[str, Any]] = {}
        self.signed_out = 0
        self.fail_sign_out = False

    def _user(self, record):
        return SimpleNamespace(
            id=record["id"],
            email=record["email"],
            user_metadata=record["metadata"],
            app_metadata={},
            created_at=EPOCH.isoformat(),
        )

    def _session(self, record):
        token = f"token-{uuid.uuid4().hex}"
        self.tokens[token] = record
        return SimpleNamespace(access_token=token, refresh_token=f"refresh-{token}")

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.users:
            raise Exception("User already registered")
        record = {
            "id": str(uuid.uuid4()),
            "email": email,
            "password": credentials["password"],
            "metadata": credentials.get("options", {}).get("data", {}),
        }
        self.users[email] = record
        return SimpleNamespace(user=self._user(record), session=self._session(record))

    def sign_in_with_password(self, credentials):
        record = self.users.get(credentials["email"])
        if record is None or record["password"] != credentials["password"]:
            raise Exception("Invalid login credentials")
        return SimpleNamespace(user=self._user(record), session=self._session(record))

    def sign_in_with_oauth(self, credentials):
        provider = credentials["provider"]
        redirect = credentials.get("options", {}).get("redirect_to", "")
        return SimpleNamespace(
            provider=provider,
            url=f"https://example.supabase.co/auth/v1/authorize?provider={provider}&redirect_to={redirect}",
        )

    def get_user(self, jwt=None):
        record = self.tokens.get(jwt)
        if record is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self._user(record))

    def sign_out(self):
        if self.fail_sign_out:
            raise Exception("network down")
        self.signed_out += 1


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict[tuple, Exception] = {}
        self.calls: List[tuple] = []
        self.auth = FakeAuth()
        self._clock = itertools.count()

    def now(self) -> str:
        return (EPOCH + timedelta(seconds=next(self._clock))).isoformat()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, op: str, exc: Optional[Exception] = None) -> None:
        """Make the next ``op`` on ``table`` raise."""
        self.failures[(table, op)] = exc or APIError({
            "message": "connection reset by peer", "code": "08006", "hint": None, "details": None
        })

    def register(self, email: str, password: str = "secret123") -> str:
        """Create an auth user and return a valid access token."""
        response = self.auth.sign_up({"email": email, "password": password})
        return response.session.access_token

    def user_id_for(self, token: str) -> str:
        return self.auth.tokens[token]["id"]


@pytest.fixture(autouse=True)
def _reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def auth_service(fake_supabase) -> AuthService:
    return AuthService(fake_supabase, user_client_factory=lambda token: fake_supabase)


@pytest.fixture
def client(fake_supabase, auth_service):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_user_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier(duration=3.0)


@pytest.fixture
def session(auth_service) -> SessionContext:
    return SessionContext(auth_service)


@pytest.fixture
def bearer():
    def _headers(token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
    return _headers
