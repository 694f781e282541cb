from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Callable, Dict, List, Optional, TypeVar

import mysql.connector

from ..core.exceptions import ConflictError, PersistenceError
from .connection import DatabaseConnection

# mysql error code for a unique-key violation
ER_DUP_ENTRY = 1062

T = TypeVar("T")

DECODE_ERRORS = (KeyError, TypeError, ValueError, ArithmeticError)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, rollback on error.

    Driver errors are re-raised as `PersistenceError` (or `ConflictError`
    for duplicate keys) so services never see mysql types.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise PersistenceError(f"Database connection failed: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        if getattr(exc, "errno", None) == ER_DUP_ENTRY:
            raise ConflictError(str(exc)) from exc
        raise PersistenceError(str(exc)) from exc
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


def decode_row(decoder: Callable[[Dict[str, Any]], T], row: Dict[str, Any]) -> T:
    """Apply `decoder` to a fetched row; values it cannot read become `PersistenceError`."""
    try:
        return decoder(row)
    except DECODE_ERRORS as exc:
        raise PersistenceError(f"Could not decode stored row: {exc}") from exc


def mysql_time_to_clock(value: Any) -> str:
    """Render a MySQL TIME value as `HH:MM:SS`.

    mysql-connector can return TIME as:
    - datetime.timedelta (durations may exceed 24h, so no wrap-around)
    - datetime.time
    - string (e.g. '08:30:00')
    """

    if value is None:
        return "00:00:00"

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds())
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    if isinstance(value, time):
        return value.strftime("%H:%M:%S")

    if isinstance(value, (bytes, str)):
        text = value.decode() if isinstance(value, bytes) else value
        parts = text.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
