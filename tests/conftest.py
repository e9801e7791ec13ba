"""
Pytest configuration and fixtures.

The Supabase client is swapped for an in-memory table store through FastAPI's
dependency overrides, so the routers run their real query chains without a
network.
"""

import copy
import os
import uuid
from types import SimpleNamespace

import pytest

os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret-that-is-long-enough-for-hs256")
os.environ.setdefault("ENVIRONMENT", "development")

from fastapi.testclient import TestClient  # noqa: E402

from studyhard.core.database import get_supabase  # noqa: E402
from studyhard.main import app  # noqa: E402


class FakeQuery:
    """Subset of the PostgREST request builder used by the routers."""

    def __init__(self, store: "FakeSupabase", table: str):
        self.store = store
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.max_rows = None

    def select(self, *columns):
        self.op = "select"
        return self

    def insert(self, data):
        self.op, self.payload = "insert", data
        return self

    def update(self, data):
        self.op, self.payload = "update", data
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def limit(self, n):
        self.max_rows = n
        return self

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def execute(self):
        self.store.calls.append((self.table, self.op))
        if self.store.error is not None:
            raise self.store.error

        rows = self.store.tables.setdefault(self.table, [])

        if self.op == "insert":
            row = {"id": str(uuid.uuid4()), **copy.deepcopy(self.payload)}
            rows.append(row)
            data = [copy.deepcopy(row)]
        elif self.op == "update":
            data = []
            for row in rows:
                if self._matches(row):
                    row.update(copy.deepcopy(self.payload))
                    data.append(copy.deepcopy(row))
        elif self.op == "delete":
            data = [copy.deepcopy(r) for r in rows if self._matches(r)]
            rows[:] = [r for r in rows if not self._matches(r)]
        else:
            data = [copy.deepcopy(r) for r in rows if self._matches(r)]
            if self.max_rows is not None:
                data = data[: self.max_rows]

        return SimpleNamespace(data=data)


class FakeSupabase:
    def __init__(self):
        self.tables = {"assignments": [], "submissions": []}
        self.calls = []
        self.error = None

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def db():
    fake = FakeSupabase()
    app.dependency_overrides[get_supabase] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login(client):
    """Start a session for the given email on the shared test client."""

    def _login(email, **profile):
        res = client.post("/jwt", json={"email": email, **profile})
        assert res.status_code == 200
        return res

    return _login


@pytest.fixture
def assignment_body():
    return {
        "title": "Algebra",
        "description": "Linear equations",
        "difficulty": "easy",
        "marks": 100,
        "email": "a@x.com",
        "due_date": "2026-11-01",
        "thumbnail": "https://img.example.com/algebra.png",
    }
