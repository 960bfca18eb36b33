"""Pytest configuration and test helpers."""

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

# Ensure the project packages are importable when running tests without an
# editable install. ``cli.py``, ``syncer`` and ``catalog`` sit at the root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def response(data: Any = None, count: int | None = None) -> SimpleNamespace:
    """Mimic the ``APIResponse`` object returned by ``execute()``."""

    return SimpleNamespace(data=[] if data is None else data, count=count)


class FakeQuery:
    """Query-builder double: every builder call is recorded and returns ``self``."""

    def __init__(self, table: str, outcomes: list[Any]):
        self.table_name = table
        self.calls: list[tuple[str, tuple, dict]] = []
        self._outcomes = outcomes

    def __getattr__(self, name: str):
        def method(*args: Any, **kwargs: Any) -> "FakeQuery":
            self.calls.append((name, args, kwargs))
            return self

        return method

    def execute(self) -> Any:
        self.calls.append(("execute", (), {}))
        # The last outcome sticks so repeated queries keep getting it.
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def called(self, name: str) -> list[tuple[tuple, dict]]:
        return [(args, kwargs) for call, args, kwargs in self.calls if call == name]


class FakeClient:
    """Stands in for ``supabase.Client``; outcomes are queued per table."""

    def __init__(self) -> None:
        self.queries: dict[str, list[FakeQuery]] = {}
        self._outcomes: dict[str, list[Any]] = {}

    def respond(self, table: str, *outcomes: Any) -> None:
        self._outcomes[table] = list(outcomes)

    def table(self, name: str) -> FakeQuery:
        outcomes = self._outcomes.setdefault(name, [response()])
        query = FakeQuery(name, outcomes)
        self.queries.setdefault(name, []).append(query)
        return query

    def last(self, table: str) -> FakeQuery:
        return self.queries[table][-1]


class InMemoryStore:
    """Supabase double that honours ``upsert(..., on_conflict=...)`` semantics."""

    def __init__(self) -> None:
        self.tables: dict[str, dict[str, dict]] = {}
        self.upsert_calls: list[dict[str, Any]] = []
        self.fail_with: BaseException | None = None

    def table(self, name: str) -> "_UpsertQuery":
        return _UpsertQuery(self, name)


class _UpsertQuery:
    def __init__(self, store: InMemoryStore, table: str) -> None:
        self._store = store
        self._table = table
        self._rows: list[dict] = []
        self._key = "id"

    def upsert(self, rows, *, on_conflict: str = "", ignore_duplicates: bool = False, **kwargs):
        self._rows = list(rows)
        self._key = on_conflict or "id"
        self._store.upsert_calls.append(
            {
                "table": self._table,
                "rows": self._rows,
                "on_conflict": on_conflict,
                "ignore_duplicates": ignore_duplicates,
            }
        )
        return self

    def execute(self):
        if self._store.fail_with is not None:
            raise self._store.fail_with
        rows = self._store.tables.setdefault(self._table, {})
        for row in self._rows:
            rows[row[self._key]] = dict(row)
        return response()


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def make_media():
    """Factory for AniList ``Media`` payloads."""

    def factory(media_id: int = 1, **overrides: Any) -> dict[str, Any]:
        media = {
            "id": media_id,
            "title": {"romaji": f"Romaji {media_id}", "english": f"English {media_id}"},
            "averageScore": 84,
            "genres": ["Action", "Drama"],
            "startDate": {"year": 2013},
            "season": "SPRING",
            "status": "FINISHED",
            "episodes": 25,
            "description": "Humans fight <i>titans</i>.<br>",
            "coverImage": {"large": f"https://img.anili.st/cover/{media_id}.jpg"},
            "bannerImage": f"https://img.anili.st/banner/{media_id}.jpg",
            "trailer": {"id": "abc123", "site": "youtube"},
        }
        media.update(overrides)
        return media

    return factory


@pytest.fixture
def api_response():
    return response
