from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateKeyError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple]:
    """One connection and cursor per unit of work.

    Commits when the block exits cleanly, rolls back and re-raises otherwise.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cur.close()
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def is_duplicate_key(exc: IntegrityError) -> bool:
    return getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


@contextmanager
def translate_duplicate_key(message: str):
    """Turn a rejected insert on a unique key into DuplicateKeyError.

    Any other integrity failure (foreign key, NOT NULL) propagates unchanged.
    """
    try:
        yield
    except IntegrityError as e:
        if is_duplicate_key(e):
            raise DuplicateKeyError(message) from e
        raise


def mysql_time_to_hhmm(value: Any) -> str:
    """HH:MM from a TIME column.

    The pure-Python connector returns TIME as timedelta, the C extension may
    hand back time or str.
    """
    if isinstance(value, timedelta):
        minutes = int(value.total_seconds()) // 60 % (24 * 60)
        return f"{minutes // 60:02d}:{minutes % 60:02d}"
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, str):
        hours, _, rest = value.strip().partition(":")
        if not rest:
            raise ValueError(f"Invalid TIME value: {value!r}")
        return f"{int(hours):02d}:{int(rest[:2]):02d}"
    raise TypeError(f"Unsupported TIME value: {type(value)!r}")
