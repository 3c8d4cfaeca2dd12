from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.enums import PresenceStatus, Role
from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

# (full_name, username, password, role)
DEMO_USERS = (
    ("Admin User", "admin", "admin", Role.ADMIN),
    ("Alice", "alice", "alice123", Role.EMPLOYEE),
    ("Bob", "bob", "bob123", Role.EMPLOYEE),
    ("Charlie", "charlie", "charlie123", Role.EMPLOYEE),
)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False

    for ch in sql:
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


def ensure_database_exists(conn_factory: DatabaseConnection, config: DBConfig) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, config: DBConfig, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory, config)
    sql = Path(schema_path).read_text(encoding="utf-8")

    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
    logger.info("schema ready on %s", config.database)


def ensure_demo_users(conn_factory: DatabaseConnection) -> None:
    """Create the demo accounts if they are missing; existing rows are left alone."""

    with db_cursor(conn_factory) as (_, cur):
        for full_name, username, password, role in DEMO_USERS:
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO users (full_name, username, password_hash, role, status)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (full_name, username, generate_password_hash(password), role.value, PresenceStatus.CHECKED_OUT.value),
            )
            logger.info("seeded demo user %s", username)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
