"""Shared test fixtures.

Provides an in-memory stand-in for the Supabase fluent query builder, a
fixture that patches it into every module calling ``get_supabase``, and a
FastAPI ``TestClient`` authenticated as a fixed account.
"""

import os

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")

from collections.abc import Callable, Generator  # noqa: E402
from contextlib import ExitStack  # noqa: E402
from copy import deepcopy  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import patch  # noqa: E402
from uuid import UUID, uuid4  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

OWNER_ID = UUID("11111111-1111-1111-1111-111111111111")
OTHER_OWNER_ID = UUID("22222222-2222-2222-2222-222222222222")

_PATCH_TARGETS = (
    "app.services.cards.get_supabase",
    "app.services.social_links.get_supabase",
    "app.services.profiles.get_supabase",
    "app.services.dashboard.get_supabase",
    "app.routers.health.get_supabase",
)


class FakeResponse:
    """Mimics postgrest's ``APIResponse`` (only ``data`` is used)."""

    def __init__(self, data: list[dict[str, Any]]) -> None:
        self.data = data


class FakeQuery:
    """One ``client.table(name)...execute()`` chain against ``FakeSupabase``."""

    def __init__(self, store: "FakeSupabase", table: str) -> None:
        self._store = store
        self._table = table
        self._op = "select"
        self._columns = "*"
        self._payload: Any = None
        self._filters: list[Callable[[dict[str, Any]], bool]] = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    # -- operations --------------------------------------------------------
    def select(self, columns: str = "*") -> "FakeQuery":
        self._op, self._columns = "select", columns
        return self

    def insert(self, payload: dict[str, Any] | list[dict[str, Any]]) -> "FakeQuery":
        self._op, self._payload = "insert", payload
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self._op, self._payload = "update", payload
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    # -- modifiers ---------------------------------------------------------
    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def in_(self, column: str, values: list[Any]) -> "FakeQuery":
        wanted = {str(v) for v in values}
        self._filters.append(lambda row: str(row.get(column)) in wanted)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    # -- execution ---------------------------------------------------------
    def _matches(self, row: dict[str, Any]) -> bool:
        return all(check(row) for check in self._filters)

    def _project(self, row: dict[str, Any]) -> dict[str, Any]:
        if self._columns.strip() == "*":
            return deepcopy(row)
        names = [name.strip() for name in self._columns.split(",")]
        return {name: deepcopy(row.get(name)) for name in names}

    def execute(self) -> FakeResponse:
        self._store.calls.append((self._table, self._op))
        if (self._table, self._op) in self._store.fail_on:
            raise RuntimeError(f"simulated failure: {self._op} on {self._table}")

        rows = self._store.tables.setdefault(self._table, [])

        if self._op == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            created = []
            for item in payload:
                row = deepcopy(item)
                row.setdefault("id", str(uuid4()))
                row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
                rows.append(row)
                created.append(deepcopy(row))
            return FakeResponse(created)

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(deepcopy(self._payload))
            return FakeResponse([deepcopy(row) for row in matched])

        if self._op == "delete":
            self._store.tables[self._table] = [row for row in rows if not self._matches(row)]
            return FakeResponse([deepcopy(row) for row in matched])

        if self._order is not None:
            column, desc = self._order
            matched.sort(key=lambda row: row.get(column), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return FakeResponse([self._project(row) for row in matched])


class FakeSupabase:
    """Dict-of-lists table store speaking the supabase-py query API."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_on: set[tuple[str, str]] = set()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> list[dict[str, Any]]:
        return self.tables.get(name, [])


def make_card_row(owner_id: UUID = OWNER_ID, **overrides: Any) -> dict[str, Any]:
    """Return a realistic ``business_cards`` row."""
    row: dict[str, Any] = {
        "id": str(uuid4()),
        "user_id": str(owner_id),
        "title": "Jane Doe",
        "slug": "jane-doe",
        "company": "Acme",
        "position": "Engineer",
        "bio": None,
        "avatar_url": None,
        "phone": None,
        "whatsapp": None,
        "email": "jane@example.com",
        "website": None,
        "address": None,
        "map_link": None,
        "theme": {
            "name": "default",
            "primary": "#3B82F6",
            "secondary": "#1E40AF",
            "background": "#FFFFFF",
            "text": "#1F2937",
        },
        "shape": "rounded",
        "layout": {"style": "modern", "alignment": "center", "font": "Inter"},
        "is_published": False,
        "view_count": 0,
        "created_at": "2026-01-01T00:00:00+00:00",
        "updated_at": "2026-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def make_link_row(card_id: str, **overrides: Any) -> dict[str, Any]:
    """Return a realistic ``social_links`` row."""
    row: dict[str, Any] = {
        "id": str(uuid4()),
        "card_id": card_id,
        "platform": "github",
        "username": "janedoe",
        "url": "https://github.com/janedoe",
        "display_order": 0,
        "is_active": True,
        "is_auto_synced": False,
        "created_at": "2026-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture()
def fake_supabase() -> Generator[FakeSupabase, None, None]:
    """Patch ``get_supabase`` everywhere with one in-memory store."""
    store = FakeSupabase()
    with ExitStack() as stack:
        for target in _PATCH_TARGETS:
            stack.enter_context(patch(target, return_value=store))
        yield store


@pytest.fixture()
def test_client(fake_supabase: FakeSupabase) -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient authenticated as ``OWNER_ID``."""
    from app.dependencies import get_current_account
    from app.main import app
    from app.models.profile import Account

    app.dependency_overrides[get_current_account] = lambda: Account(
        id=OWNER_ID, email="jane@example.com", full_name="Jane Doe"
    )
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
