"""Apply database/schema.sql and database/seed.sql to a MySQL server.

Both files are idempotent (CREATE TABLE IF NOT EXISTS, INSERT IGNORE), so
running them on every start is safe.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Mapping

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

REQUIRED_TABLES = (
    "users",
    "results",
    "result_subjects",
    "teacher_attendance",
    "attendance_policy",
    "public_holidays",
)

_DATABASE_DIRECTIVE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def split_statements(sql: str) -> Iterator[str]:
    """Yield statements separated by ';' outside quoted literals."""
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _prepare(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    return _LINE_COMMENT.sub("", _DATABASE_DIRECTIVE.sub("", sql))


def _run_file(db_config: Mapping, path: Path) -> int:
    config = DBConfig.from_mapping(db_config)
    statements = list(split_statements(_prepare(path.read_text(encoding="utf-8"))))
    conn = mysql.connector.connect(**config.connect_kwargs(), use_pure=True)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %s (%d statements) to %s", path.name, len(statements), config.database)
    return len(statements)


def ensure_database_exists(db_config: Mapping) -> None:
    config = DBConfig.from_mapping(db_config)
    conn = mysql.connector.connect(**config.connect_kwargs(with_database=False), use_pure=True)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> int:
    ensure_database_exists(db_config)
    return _run_file(db_config, Path(schema_path))


def apply_seed_sql(db_config: Mapping, *, seed_path: str | Path) -> int:
    return _run_file(db_config, Path(seed_path))


def list_tables(db_config: Mapping) -> list[str]:
    config = DBConfig.from_mapping(db_config)
    conn = mysql.connector.connect(**config.connect_kwargs(), use_pure=True)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()


def missing_tables(db_config: Mapping) -> list[str]:
    present = set(list_tables(db_config))
    return [t for t in REQUIRED_TABLES if t not in present]
