from __future__ import annotations

import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


# Quoted strings and '--' comments are matched whole so a ';' inside them
# never ends a statement.
_SQL_TOKEN = re.compile(
    r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|--[^\n]*|;|[^'";-]+|.""",
    re.DOTALL,
)


def iter_sql_statements(sql: str) -> Iterable[str]:
    buf: list[str] = []
    for token in _SQL_TOKEN.findall(sql):
        if token.startswith("--"):
            continue
        if token == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(token)

    tail = "".join(buf).strip()
    if tail:
        yield tail


@contextmanager
def _admin_cursor(db_config: dict, *, with_database: bool = True):
    """Plain cursor for setup scripts; commits when the block succeeds."""
    conn = mysql.connector.connect(**DBConfig.from_settings(db_config).connect_kwargs(with_database=with_database))
    try:
        cur = conn.cursor()
        yield cur
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    name = DBConfig.from_settings(db_config).database
    with _admin_cursor(db_config, with_database=False) as cur:
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    with _admin_cursor(db_config) as cur:
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)


def list_tables(db_config: dict) -> list[str]:
    with _admin_cursor(db_config) as cur:
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]


DEMO_PASSWORD = "demo123"
DEMO_INSTITUTE = "inst-demo"
DEMO_TRAINER = "trainer-demo"

DEMO_MEMBERS = (
    # (uid, email, kind, first_name, last_name)
    (DEMO_INSTITUTE, "institute@demo.local", "institute", "Demo Sports Institute", ""),
    (DEMO_TRAINER, "trainer@demo.local", "trainer", "Ravi", "Kumar"),
    ("student-demo", "student@demo.local", "student", "Asha", "Patel"),
    ("tstudent-demo", "tstudent@demo.local", "trainerstudent", "Kiran", "Rao"),
)

_PROFILE_SQL = {
    "institute": (
        "INSERT INTO institutes (institute_id, name) VALUES (%(uid)s, %(first)s) "
        "ON DUPLICATE KEY UPDATE name=VALUES(name)"
    ),
    "trainer": (
        "INSERT INTO institute_trainers (trainer_ref, institute_id, first_name, last_name, monthly_salary) "
        "VALUES (%(uid)s, %(institute)s, %(first)s, %(last)s, 30000.00) "
        "ON DUPLICATE KEY UPDATE first_name=VALUES(first_name), last_name=VALUES(last_name)"
    ),
    "student": (
        "INSERT INTO students (student_id, institute_id, first_name, last_name) "
        "VALUES (%(uid)s, %(institute)s, %(first)s, %(last)s) "
        "ON DUPLICATE KEY UPDATE first_name=VALUES(first_name), last_name=VALUES(last_name)"
    ),
    # trainer-student profiles are keyed by the login uid
    "trainerstudent": (
        "INSERT INTO trainer_students (doc_id, trainer_ref, student_uid, first_name, last_name, fee_amount) "
        "VALUES (%(uid)s, %(trainer)s, %(uid)s, %(first)s, %(last)s, 2000.00) "
        "ON DUPLICATE KEY UPDATE first_name=VALUES(first_name), last_name=VALUES(last_name)"
    ),
}


def ensure_demo_members(db_config: dict) -> None:
    """Upsert one account per dashboard role, all sharing DEMO_PASSWORD."""
    with _admin_cursor(db_config) as cur:
        for uid, email, kind, first_name, last_name in DEMO_MEMBERS:
            cur.execute(
                "INSERT INTO accounts (uid, email, password_hash) VALUES (%s, %s, %s) "
                "ON DUPLICATE KEY UPDATE email=VALUES(email), password_hash=VALUES(password_hash)",
                (uid, email, generate_password_hash(DEMO_PASSWORD)),
            )
            cur.execute(
                _PROFILE_SQL[kind],
                {
                    "uid": uid,
                    "institute": DEMO_INSTITUTE,
                    "trainer": DEMO_TRAINER,
                    "first": first_name,
                    "last": last_name,
                },
            )
