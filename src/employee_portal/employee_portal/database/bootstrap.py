from __future__ import annotations

import re
from datetime import date
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

DEMO_PROFILES = (
    # name, email, password, role, department, join_date
    ("John Smith", "owner@company.com", "owner123", "owner", "Management", date(2020, 1, 15)),
    ("Sarah Johnson", "admin@company.com", "admin123", "admin", "Development", date(2021, 3, 10)),
    ("Mike Davis", "employee@company.com", "employee123", "employee", "Development", date(2022, 6, 20)),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    # Whole-line "--" comments; the splitter below only understands quotes.
    sql = re.sub(r"(?m)^\s*--.*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _run_sql_file(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_mapping(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_sql_file(db_config, seed_path)


def ensure_demo_profiles(db_config: dict) -> None:
    """Create (or reset) one demo login per role."""

    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        for name, email, password, role, department, join_date in DEMO_PROFILES:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM profiles WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE profiles
                    SET name=%s, password_hash=%s, role=%s, department=%s, join_date=%s
                    WHERE email=%s
                    """,
                    (name, password_hash, role, department, join_date, email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO profiles (name, email, password_hash, role, department, join_date)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    (name, email, password_hash, role, department, join_date),
                )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
