from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Iterator, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

Row = dict[str, Any]


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """Borrow a connection for one transaction.

    Commits when the block exits cleanly, rolls back and re-raises otherwise.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
        except Exception:
            logger.debug("Rolling back transaction", exc_info=True)
            conn.rollback()
            raise
        else:
            conn.commit()
        finally:
            cur.close()
    finally:
        conn.close()


def fetchone(cur) -> Optional[Row]:
    return cur.fetchone() or None


def fetchall(cur) -> list[Row]:
    return list(cur.fetchall() or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Coerce a TIME column to datetime.time.

    The C extension returns timedelta, the pure-Python driver may return
    time or a "HH:MM[:SS]" string.
    """
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        return (datetime.min + timedelta(seconds=int(value.total_seconds()) % 86400)).time()
    if isinstance(value, str):
        hours, minutes, *rest = (int(p or 0) for p in value.strip().split(":"))
        return time(hours, minutes, rest[0] if rest else 0)
    raise TypeError(f"Unsupported MySQL TIME value: {value!r}")


def load_json_list(value: Any) -> list[str]:
    """Decode a JSON column holding a list of strings (None -> [])."""
    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value else []
    return [str(v) for v in value]
