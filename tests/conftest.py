"""Shared fixtures: an in-memory Supabase stand-in and an authenticated test client."""

import uuid
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from app.core.ai import get_ai_provider
from app.core.dependencies import get_current_user_id
from app.core.rate_limit import limiter
from app.database.supabase_client import get_supabase, get_service_supabase
from app.main import app
from app.modules.speech.whisper import get_whisper_provider

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"

UNIQUE_KEYS = {
    "daily_checkins": ("user_id", "checkin_date"),
}


class FakePostgrestError(Exception):
    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code


def _sort_key(value: Any) -> Tuple[bool, Any]:
    return (value is None, "" if value is None else str(value))


class FakeQuery:
    """Mimics the supabase-py query builder closely enough for the services."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.action = "select"
        self.payload: Any = None
        self.filters: List[Tuple[str, str, Any]] = []
        self.ordering: List[Tuple[str, bool]] = []
        self.row_limit: Optional[int] = None
        self.row_offset = 0
        self.count_mode: Optional[str] = None

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return self.db.tables.setdefault(self.table_name, [])

    def select(self, columns: str = "*", count: Optional[str] = None):
        self.count_mode = count
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def upsert(self, payload):
        self.action, self.payload = "upsert", payload
        return self

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def gte(self, column, value):
        self.filters.append(("gte", column, value))
        return self

    def lte(self, column, value):
        self.filters.append(("lte", column, value))
        return self

    def in_(self, column, values):
        self.filters.append(("in", column, list(values)))
        return self

    def order(self, column, desc=False):
        self.ordering.append((column, desc))
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def offset(self, count):
        self.row_offset = count
        return self

    def range(self, start, end):
        self.row_offset, self.row_limit = start, end - start + 1
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        for op, column, value in self.filters:
            current = row.get(column)
            if op == "eq" and current != value:
                return False
            if op == "gte" and (current is None or str(current) < str(value)):
                return False
            if op == "lte" and (current is None or str(current) > str(value)):
                return False
            if op == "in" and current not in value:
                return False
        return True

    def _new_row(self, data: Dict[str, Any]) -> Dict[str, Any]:
        row = deepcopy(data)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", self.db.now().isoformat())
        keys = UNIQUE_KEYS.get(self.table_name)
        if keys and any(all(r.get(k) == row.get(k) for k in keys) for r in self.rows):
            raise FakePostgrestError("duplicate key value violates unique constraint", "23505")
        self.rows.append(row)
        return deepcopy(row)

    def execute(self):
        if self.db.fail_tables.get(self.table_name):
            raise self.db.fail_tables[self.table_name]

        payloads = self.payload if isinstance(self.payload, list) else [self.payload]
        if self.action == "insert":
            return SimpleNamespace(data=[self._new_row(p) for p in payloads])

        if self.action == "upsert":
            data = []
            for p in payloads:
                existing = next((r for r in self.rows if "id" in p and r.get("id") == p["id"]), None)
                if existing is None:
                    data.append(self._new_row(p))
                else:
                    existing.update(deepcopy(p))
                    data.append(deepcopy(existing))
            return SimpleNamespace(data=data)

        matched = [r for r in self.rows if self._matches(r)]

        if self.action == "update":
            for r in matched:
                r.update(deepcopy(self.payload))
            return SimpleNamespace(data=deepcopy(matched))

        if self.action == "delete":
            self.db.tables[self.table_name] = [r for r in self.rows if r not in matched]
            return SimpleNamespace(data=deepcopy(matched))

        for column, desc in reversed(self.ordering):
            matched = sorted(matched, key=lambda r: _sort_key(r.get(column)), reverse=desc)
        total = len(matched) if self.count_mode else None
        matched = matched[self.row_offset:]
        for cap in (self.row_limit, self.db.max_rows):
            if cap is not None:
                matched = matched[:cap]
        return SimpleNamespace(data=deepcopy(matched), count=total)


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.fail_tables: Dict[str, Exception] = {}
        self._last_created: Optional[datetime] = None
        # PostgREST max-rows: responses never carry more rows than this
        self.max_rows: Optional[int] = None

    def now(self) -> datetime:
        """Strictly increasing timestamps so created_at ordering is deterministic."""
        moment = datetime.now(timezone.utc)
        if self._last_created is not None and moment <= self._last_created:
            moment = self._last_created + timedelta(microseconds=1)
        self._last_created = moment
        return moment

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, *rows: Dict[str, Any]) -> None:
        for row in rows:
            FakeQuery(self, table)._new_row(row)


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def current_user():
    return {"id": USER_ID, "email": "user@example.com", "user_metadata": {"full_name": "Test User"}}


@pytest.fixture
def client(fake_db, current_user):
    limiter.enabled = False
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_service_supabase] = lambda: fake_db
    app.dependency_overrides[get_current_user_id] = lambda: current_user
    app.dependency_overrides[get_ai_provider] = lambda: None
    app.dependency_overrides[get_whisper_provider] = lambda: None
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def admin_client(client, fake_db):
    fake_db.seed("admin_users", {"id": USER_ID, "email": "user@example.com"})
    return client


def make_checkin(day: str, user_id: str = USER_ID, **fields) -> Dict[str, Any]:
    row = {
        "user_id": user_id,
        "checkin_date": day,
        "mood": "calm",
        "energy_level": 5,
        "sleep_quality": 6,
        "stress_level": 5,
    }
    row.update(fields)
    return row
