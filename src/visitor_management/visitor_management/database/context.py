from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, TypeVar

from ..core.constants import BACKOFF_BASE_MS, BACKOFF_MAX_MS
from .connection import ConnectionPool, DBConfig
from .errors import classify_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Pool(Protocol):
    """What the context needs from a pool (ConnectionPool or a test double)."""

    def ping(self) -> None: ...

    def fetch_all(self, statement: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]: ...

    def insert(self, statement: str, params: Sequence[Any] = ()) -> int: ...

    def execute(self, statement: str, params: Sequence[Any] = ()) -> int: ...

    def stats(self) -> Dict[str, Any]: ...

    def close(self) -> None: ...


def backoff_delay_ms(retries: int) -> int:
    return min(BACKOFF_BASE_MS * (2 ** retries), BACKOFF_MAX_MS)


class DatabaseContext:
    """Owns the process-wide pool and the "is connected" flag.

    One instance is created by the composition root and handed to repositories and
    the health monitor. Pool replacement and flag updates happen under a single
    lock; a reconnect racing another reconnect only wastes a pool.
    """

    def __init__(self, config: DBConfig, *, pool_factory: Optional[Callable[[], Pool]] = None):
        self._config = config
        self._pool_factory = pool_factory or (lambda: ConnectionPool(config))
        self._lock = threading.RLock()
        self._pool: Pool = self.create_pool()
        self._connected = False
        self._retry_count = 0

    # -- pool manager -------------------------------------------------------

    def create_pool(self) -> Pool:
        return self._pool_factory()

    @property
    def pool(self) -> Pool:
        with self._lock:
            return self._pool

    @property
    def is_connected(self) -> bool:
        with self._lock:
            return self._connected

    @property
    def retry_count(self) -> int:
        with self._lock:
            return self._retry_count

    def mark_disconnected(self) -> None:
        with self._lock:
            if self._connected:
                logger.warning("Database marked as disconnected")
            self._connected = False

    def mark_connected(self) -> None:
        with self._lock:
            if not self._connected:
                logger.info("Database connected (%s@%s:%s/%s)", self._config.user, self._config.host, self._config.port, self._config.database)
            self._connected = True
            self._retry_count = 0

    def ensure_connection(self) -> bool:
        """Test the current pool; on failure swap in a fresh one and report False.

        Does not sleep: the next caller or periodic check tries again.
        """

        pool = self.pool
        try:
            pool.ping()
        except Exception as exc:
            with self._lock:
                self._connected = False
                self._replace_pool(expected=pool)
                self._retry_count += 1
                retries = self._retry_count
            logger.error(
                "Database connection check failed (attempt %d, next retry in ~%dms): %s",
                retries,
                backoff_delay_ms(retries),
                exc,
            )
            return False

        self.mark_connected()
        return True

    def reconnect(self) -> bool:
        """Unconditionally replace the pool, then retest it."""

        with self._lock:
            self._replace_pool(expected=self._pool)
        return self.ensure_connection()

    def _replace_pool(self, *, expected: Pool) -> None:
        # Another thread may already have swapped the pool we saw fail.
        if self._pool is not expected:
            return
        old = self._pool
        self._pool = self.create_pool()
        try:
            old.close()
        except Exception as exc:
            logger.debug("Closing stale pool failed: %s", exc)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            pool_stats = dict(self._pool.stats())
            pool_stats.update(connected=self._connected, retries=self._retry_count)
            return pool_stats

    def close(self) -> None:
        with self._lock:
            self._connected = False
            pool = self._pool
        pool.close()
        logger.info("Database pool closed")

    # -- safe query wrapper -------------------------------------------------

    def safe_query(self, statement: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        return self._with_retry(lambda: self.pool.fetch_all(statement, params))

    def safe_insert(self, statement: str, params: Sequence[Any] = ()) -> int:
        return self._with_retry(lambda: self.pool.insert(statement, params))

    def safe_execute(self, statement: str, params: Sequence[Any] = ()) -> int:
        return self._with_retry(lambda: self.pool.execute(statement, params))

    def _with_retry(self, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except Exception as exc:
            tag = classify_error(exc)
            if tag is None:
                raise
            logger.warning("Query failed with %s, reconnecting: %s", tag.value, exc)
            if not self.ensure_connection():
                raise
        # At most one retry; whatever it raises goes to the caller.
        return operation()
