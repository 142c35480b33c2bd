from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn, *, dictionary: bool = True):
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield cur
        conn.commit()
    except Exception:
        try:
            conn.rollback()
        except Exception as exc:
            # A dropped connection cannot roll back; the original error wins.
            logger.debug("Rollback failed: %s", exc)
        raise
    finally:
        try:
            cur.close()
        except Exception as exc:
            logger.debug("Closing cursor failed: %s", exc)


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def first_or_none(rows: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return rows[0] if rows else None


def as_bool(value: Any) -> bool:
    """MySQL BOOLEAN columns come back as 0/1 ints."""
    return bool(int(value)) if value is not None else False
