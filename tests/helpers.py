"""Shared test helpers for the GenieCMS test suite.

``FakeSupabase`` is an in-memory stand-in for the Supabase client covering
the query-builder calls the services make:
``table().select().eq().order().limit().execute()``, ``insert``, ``update``.
"""

import copy
from typing import Any, Dict, List, Optional


TEST_PASSWORD = "correct-horse"


class FakeResult:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self._db = db
        self._table = table
        self._op = "select"
        self._payload: Optional[Dict[str, Any]] = None
        self._filters: List[tuple] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None

    def select(self, columns: str = "*"):
        self._op = "select"
        return self

    def insert(self, record: Dict[str, Any]):
        self._op = "insert"
        self._payload = record
        return self

    def update(self, changes: Dict[str, Any]):
        self._op = "update"
        self._payload = changes
        return self

    def eq(self, column: str, value: Any):
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self._order = (column, desc)
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> FakeResult:
        self._db.calls.append((self._table, self._op, list(self._filters)))
        if self._db.fail:
            raise ConnectionError("supabase is unreachable")

        rows = self._db.tables.setdefault(self._table, [])

        if self._op == "insert":
            record = dict(self._payload)
            record.setdefault("id", self._db.next_id(self._table))
            rows.append(record)
            return FakeResult([copy.deepcopy(record)])

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResult(copy.deepcopy(matched))

        if self._order is not None:
            column, desc = self._order
            matched = sorted(matched, key=lambda r: (r.get(column) is None, r.get(column) or ""), reverse=desc)
        if self._limit is not None:
            matched = matched[:self._limit]
        return FakeResult(copy.deepcopy(matched))


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.fail = False
        self._ids: Dict[str, int] = {}

    def next_id(self, table: str) -> int:
        self._ids[table] = self._ids.get(table, 0) + 1
        return self._ids[table]

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.get(name, [])
