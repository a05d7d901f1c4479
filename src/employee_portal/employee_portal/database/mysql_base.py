from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import mysql.connector

from ..core.exceptions import DataAccessError
from .connection import DatabaseConnection

# Suffixes accepted in filter keys, e.g. {"created_at__gte": day}.
_OPERATORS = {
    "eq": "=",
    "ne": "<>",
    "gte": ">=",
    "lte": "<=",
    "gt": ">",
    "lt": "<",
    "in": "IN",
}

# Optional transform between column and operator, e.g. {"updated_at__date__lte": day}.
_TRANSFORMS = {
    "date": "DATE({})",
}


@dataclass(frozen=True)
class ColumnRef:
    """Filter value naming another column of the same row instead of a parameter."""

    name: str


def _backend_message(exc: mysql.connector.Error) -> str:
    return getattr(exc, "msg", None) or str(exc)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise DataAccessError(_backend_message(exc)) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise DataAccessError(_backend_message(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


@dataclass(frozen=True)
class ProfileJoin:
    """Join one level to ``profiles`` to pull a display name.

    ``column`` is the foreign key on the gateway's table, ``alias`` the key the
    name is returned under. ``department`` restricts rows to profiles of that
    department (team scope), ``role`` to profiles holding that role.
    """

    column: str
    alias: str = "profile_name"
    department: Optional[str] = None
    role: Optional[str] = None


class TableGateway:
    """Generic list/count/insert/update-by-id access to one table.

    Column names never come from user input, but they are still checked against
    the declared column list before being interpolated into SQL.
    """

    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        table: str,
        columns: Sequence[str],
        id_column: str = "id",
    ):
        self._conn_factory = conn_factory
        self.table = table
        self.columns = tuple(columns)
        self.id_column = id_column

    def _check_column(self, column: str) -> str:
        if column not in self.columns:
            raise ValueError(f"Unknown column {column!r} for table {self.table}")
        return column

    def _where(self, filters: Optional[Mapping[str, Any]], join: Optional[ProfileJoin]) -> Tuple[str, list]:
        clauses: list[str] = []
        params: list[Any] = []

        for key, value in (filters or {}).items():
            column, *rest = key.split("__")
            self._check_column(column)
            op = rest.pop() if rest else "eq"
            sql_op = _OPERATORS.get(op)
            if sql_op is None:
                raise ValueError(f"Unknown filter operator {op!r}")

            target = f"t.{column}"
            for name in rest:
                if name not in _TRANSFORMS:
                    raise ValueError(f"Unknown filter transform {name!r}")
                target = _TRANSFORMS[name].format(target)

            if sql_op == "IN":
                values = list(value)
                if not values:
                    clauses.append("1=0")
                    continue
                clauses.append(f"{target} IN ({','.join(['%s'] * len(values))})")
                params.extend(values)
            elif isinstance(value, ColumnRef):
                clauses.append(f"{target} {sql_op} t.{self._check_column(value.name)}")
            elif value is None and sql_op in {"=", "<>"}:
                clauses.append(f"{target} IS {'NOT ' if sql_op == '<>' else ''}NULL")
            else:
                clauses.append(f"{target} {sql_op} %s")
                params.append(value)

        if join is not None and join.department:
            clauses.append("p.department = %s")
            params.append(join.department)
        if join is not None and join.role:
            clauses.append("p.role = %s")
            params.append(join.role)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    def _from(self, join: Optional[ProfileJoin]) -> str:
        if join is None:
            return f"FROM {self.table} t"
        self._check_column(join.column)
        return f"FROM {self.table} t LEFT JOIN profiles p ON p.id = t.{join.column}"

    def list(
        self,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        join: Optional[ProfileJoin] = None,
    ) -> List[Dict[str, Any]]:
        select = ", ".join(f"t.{c}" for c in self.columns)
        if join is not None:
            select += f", p.name AS {join.alias}"

        where, params = self._where(filters, join)
        sql = f"SELECT {select} {self._from(join)} {where}"
        if order_by:
            sql += f" ORDER BY t.{self._check_column(order_by)} {'DESC' if descending else 'ASC'}"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return fetchall(cur)

    def get(self, row_id: int) -> Optional[Dict[str, Any]]:
        rows = self.list(filters={self.id_column: int(row_id)}, limit=1)
        return rows[0] if rows else None

    def count(self, *, filters: Optional[Mapping[str, Any]] = None, join: Optional[ProfileJoin] = None) -> int:
        where, params = self._where(filters, join)
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute(f"SELECT COUNT(*) {self._from(join)} {where}", tuple(params))
            row = cur.fetchone()
            return int(row[0]) if row else 0

    def insert(self, values: Mapping[str, Any]) -> int:
        cols = [self._check_column(c) for c in values]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {self.table}({', '.join(cols)}) VALUES({', '.join(['%s'] * len(cols))})",
                tuple(values[c] for c in cols),
            )
            return int(cur.lastrowid)

    def upsert(self, values: Mapping[str, Any], *, update_columns: Iterable[str]) -> int:
        """Insert, or overwrite ``update_columns`` when a unique key already matches."""

        cols = [self._check_column(c) for c in values]
        updates = [self._check_column(c) for c in update_columns]
        assignments = ", ".join(f"{c}=VALUES({c})" for c in updates)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {self.table}({', '.join(cols)}) VALUES({', '.join(['%s'] * len(cols))})
                ON DUPLICATE KEY UPDATE {self.id_column}=LAST_INSERT_ID({self.id_column}), {assignments}
                """,
                tuple(values[c] for c in cols),
            )
            return int(cur.lastrowid)

    def update_by_id(
        self,
        row_id: int,
        values: Mapping[str, Any],
        *,
        where: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Update a single row; ``where`` adds guard conditions (e.g. current status)."""

        cols = [self._check_column(c) for c in values]
        clauses = [f"{self.id_column}=%s"]
        params: list[Any] = [values[c] for c in cols]
        params.append(int(row_id))
        for column, value in (where or {}).items():
            clauses.append(f"{self._check_column(column)}=%s")
            params.append(value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {self.table} SET {', '.join(f'{c}=%s' for c in cols)} "
                f"WHERE {' AND '.join(clauses)} LIMIT 1",
                tuple(params),
            )
            return cur.rowcount > 0
