from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, isolation_level: str | None = None):
    """Yield ``(conn, cursor)``; commit on success, roll back on any error.

    Driver errors are re-raised as :class:`StoreError`.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("Cannot connect to the database: %s", e)
        raise StoreError(f"Database unavailable: {e}") from e

    try:
        if isolation_level:
            conn.start_transaction(isolation_level=isolation_level)
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("Database operation failed: %s", e)
        raise StoreError(f"Database operation failed: {e}") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Dict[str, Any] | None:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> time | None:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
