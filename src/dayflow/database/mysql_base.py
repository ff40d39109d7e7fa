from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One transaction: commit on success, rollback on any exception.

    The connection goes back to the pool on every exit path.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(exc: BaseException, key_name: Optional[str] = None) -> bool:
    """True for a MySQL unique-key violation, optionally on a specific key."""
    if not isinstance(exc, mysql.connector.IntegrityError):
        return False
    if exc.errno != errorcode.ER_DUP_ENTRY:
        return False
    return key_name is None or key_name in str(exc.msg or "")


def is_deadlock(exc: BaseException) -> bool:
    return isinstance(exc, mysql.connector.Error) and exc.errno == errorcode.ER_LOCK_DEADLOCK


def like_prefix(prefix: str) -> str:
    """LIKE pattern matching values that start with ``prefix`` literally."""
    escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"{escaped}%"
