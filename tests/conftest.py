"""
Shared fixtures: an in-memory database standing in for PostgreSQL.

FakeDatabase answers both catalog and statistics questions from plain
Python rows and records every statistics call it receives.
"""

import pytest

from join_size.estimator import ForeignKeyEdge, JoinSizeEstimator


class FakeDatabase:
    """Catalog and statistics provider over in-memory tables."""

    def __init__(self):
        self._tables: dict[str, tuple[list[str], list[tuple]]] = {}
        self._stored_names: dict[str, str] = {}
        self._foreign_keys: dict[tuple[str, str], set[str]] = {}
        self.stat_calls: list[tuple] = []

    def add_table(self, name: str, columns: list[str], rows: list[tuple]) -> None:
        self._tables[name.lower()] = (columns, rows)
        self._stored_names[name.lower()] = name

    def add_foreign_key(self, from_table: str, to_table: str, columns: list[str]) -> None:
        key = (from_table.lower(), to_table.lower())
        self._foreign_keys.setdefault(key, set()).update(columns)

    # Catalog

    def table_exists(self, name: str) -> bool:
        return name.lower() in self._tables

    def resolve_table(self, name: str) -> str | None:
        return self._stored_names.get(name.lower())

    def columns_of(self, table: str) -> set[str]:
        return set(self._tables[table.lower()][0])

    def foreign_keys_referencing(self, from_table: str, to_table: str) -> set[str]:
        return set(self._foreign_keys.get((from_table.lower(), to_table.lower()), set()))

    def foreign_key_edge(self, from_table: str, to_table: str) -> ForeignKeyEdge:
        return ForeignKeyEdge(
            from_table, to_table, frozenset(self.foreign_keys_referencing(from_table, to_table))
        )

    # Statistics

    def row_count(self, table: str) -> int:
        self.stat_calls.append(("row_count", table))
        return len(self._rows(table))

    def distinct_projection_count(self, table: str, column: str) -> int:
        self.stat_calls.append(("distinct_projection_count", table, column))
        return len({v for v in self._project(table, [column]) if v[0] is not None})

    def is_key_for(self, table: str, expected_row_count: int, attributes) -> bool:
        attributes = sorted(attributes)
        if not attributes:
            return False
        self.stat_calls.append(("is_key_for", table, tuple(attributes)))
        return len(set(self._project(table, attributes))) == expected_row_count

    def actual_join_size(self, table1: str, table2: str) -> int:
        self.stat_calls.append(("actual_join_size", table1, table2))
        shared = sorted(self.columns_of(table1) & self.columns_of(table2))
        if not shared:
            return len(self._rows(table1)) * len(self._rows(table2))
        left = self._project(table1, shared)
        right = self._project(table2, shared)
        return sum(
            1
            for lv in left
            for rv in right
            if lv == rv and None not in lv
        )

    def _rows(self, table: str) -> list[tuple]:
        return self._tables[table.lower()][1]

    def _project(self, table: str, columns: list[str]) -> list[tuple]:
        names, rows = self._tables[table.lower()]
        idx = [names.index(c) for c in columns]
        return [tuple(row[i] for i in idx) for row in rows]


@pytest.fixture
def db():
    """Empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def estimator(db):
    """Estimator wired to the in-memory database."""
    return JoinSizeEstimator(catalog=db, statistics=db)


@pytest.fixture
def university(db):
    """
    Small university schema.

    dept(dept_name PK, building)              10 rows
    instructor(i_id PK, dept_name FK, salary) 100 rows, 10 per department
    room(room_no, capacity)                   50 rows, no shared columns
    """
    db.add_table(
        "dept",
        ["dept_name", "building"],
        [(f"d{i}", f"b{i % 3}") for i in range(10)],
    )
    db.add_table(
        "instructor",
        ["i_id", "dept_name", "salary"],
        [(i, f"d{i % 10}", 50_000 + i) for i in range(100)],
    )
    db.add_table(
        "room",
        ["room_no", "capacity"],
        [(i, 20 + i) for i in range(50)],
    )
    db.add_foreign_key("instructor", "dept", ["dept_name"])
    return db
