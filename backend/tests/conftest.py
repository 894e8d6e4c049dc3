"""
Shared test fixtures
====================
``FakeSupabase`` is a small in-memory stand-in for the Supabase client.
It understands the query-builder chains the backend issues:

  - .table(t).insert(row).execute()
  - .table(t).select(...).eq(...).maybe_single().execute()
  - .table(t).select(...).eq(...).gte(...).order(..., desc=...).execute()
  - .table(t).update(changes).eq(...).execute()
  - .table(t).delete().eq(...).execute()
  - .auth.get_user(token)

Rows get a generated ``id`` and a ``created_at`` write time on insert,
like the real tables.
"""

from __future__ import annotations

import operator
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Optional
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

ALICE_ID = "user-alice"
BOB_ID = "user-bob"
ALICE_TOKEN = "alice-valid-token"
BOB_TOKEN = "bob-valid-token"


def _comparable(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value


class _Result:
    def __init__(self, data: Any) -> None:
        self.data = data
        self.count = len(data) if isinstance(data, list) else None


class _FakeQuery:

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self._db = db
        self._table = table
        self._op = "select"
        self._payload: Optional[dict] = None
        self._filters: list[tuple] = []
        self._order: Optional[tuple[str, bool]] = None
        self._single = False

    # --- operations ---
    def select(self, *columns: str, **kwargs: Any) -> "_FakeQuery":
        self._op = "select"
        return self

    def insert(self, row: dict) -> "_FakeQuery":
        self._op, self._payload = "insert", dict(row)
        return self

    def update(self, changes: dict) -> "_FakeQuery":
        self._op, self._payload = "update", dict(changes)
        return self

    def delete(self) -> "_FakeQuery":
        self._op = "delete"
        return self

    # --- modifiers ---
    def eq(self, column: str, value: Any) -> "_FakeQuery":
        self._filters.append((operator.eq, column, value))
        return self

    def gte(self, column: str, value: Any) -> "_FakeQuery":
        self._filters.append((operator.ge, column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "_FakeQuery":
        self._order = (column, desc)
        return self

    def maybe_single(self) -> "_FakeQuery":
        self._single = True
        return self

    def _matches(self, row: dict) -> bool:
        return all(
            column in row and op(_comparable(row[column]), _comparable(value))
            for op, column, value in self._filters
        )

    def execute(self) -> Optional[_Result]:
        if self._db.fail_with is not None:
            raise self._db.fail_with

        rows = self._db.tables.setdefault(self._table, [])
        self._db.calls.append((self._table, self._op, self._payload))

        if self._op == "insert":
            row = {
                "id": str(uuid.uuid4()),
                "created_at": datetime.now(timezone.utc).isoformat(),
                **self._payload,
            }
            rows.append(row)
            return _Result([dict(row)])

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return _Result([dict(row) for row in matched])

        if self._op == "delete":
            gone = {id(row) for row in matched}
            self._db.tables[self._table] = [row for row in rows if id(row) not in gone]
            return _Result([dict(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched.sort(key=lambda r: _comparable(r[column]), reverse=desc)

        if self._single:
            return _Result(dict(matched[0])) if matched else None
        return _Result([dict(row) for row in matched])


class _FakeAuth:

    def __init__(self) -> None:
        self._tokens: dict[str, SimpleNamespace] = {}

    def register(self, token: str, user_id: str, email: str) -> None:
        self._tokens[token] = SimpleNamespace(id=user_id, email=email)

    def get_user(self, token: str) -> SimpleNamespace:
        if token not in self._tokens:
            raise Exception("Invalid JWT")
        return SimpleNamespace(user=self._tokens[token])


class FakeSupabase:

    def __init__(self) -> None:
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple] = []
        self.auth = _FakeAuth()
        self.fail_with: Optional[Exception] = None

    def table(self, name: str) -> _FakeQuery:
        return _FakeQuery(self, name)

    def rows(self, name: str = "mood_ratings") -> list[dict]:
        return self.tables.get(name, [])


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_db() -> FakeSupabase:
    db = FakeSupabase()
    db.auth.register(ALICE_TOKEN, ALICE_ID, "alice@example.com")
    db.auth.register(BOB_TOKEN, BOB_ID, "bob@example.com")
    return db


@pytest.fixture
def client(fake_db: FakeSupabase):
    with (
        patch("app.auth.get_supabase_client", return_value=fake_db),
        patch("app.services.mood_entries.get_supabase_client", return_value=fake_db),
        patch("app.services.users.get_supabase_client", return_value=fake_db),
    ):
        from app.main import app
        yield TestClient(app)


@pytest.fixture
def alice_headers() -> dict:
    return {"Authorization": f"Bearer {ALICE_TOKEN}"}


@pytest.fixture
def bob_headers() -> dict:
    return {"Authorization": f"Bearer {BOB_TOKEN}"}
