from __future__ import annotations

import itertools
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence

from mysql.connector import pooling

from ..core.constants import CONNECTION_TIMEOUT_SECONDS, DEFAULT_POOL_SIZE, MAX_POOL_SIZE
from .errors import PoolClosedError
from .mysql_base import db_cursor, fetchall

logger = logging.getLogger(__name__)

_pool_ids = itertools.count(1)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_POOL_SIZE
    connection_timeout: int = CONNECTION_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        pool_size = int(db_config.get("pool_size", DEFAULT_POOL_SIZE))
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "visitor_management")),
            pool_size=max(1, min(pool_size, MAX_POOL_SIZE)),
            connection_timeout=int(db_config.get("connection_timeout", CONNECTION_TIMEOUT_SECONDS)),
        )

    def connect_kwargs(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.database,
            "connection_timeout": self.connection_timeout,
            "autocommit": False,
        }


class ConnectionPool:
    """Bounded MySQL connection pool with an unbounded wait queue.

    ``mysql.connector.pooling.MySQLConnectionPool`` raises immediately when every
    connection is checked out and opens all of its connections in the
    constructor. This wrapper makes callers wait on a semaphore instead, and builds
    the underlying pool on first use so that creating a pool never fails.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self.name = f"visitor_pool_{next(_pool_ids)}"
        self._slots = threading.BoundedSemaphore(config.pool_size)
        self._lock = threading.Lock()
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._in_use = 0
        self._closed = False

    @property
    def size(self) -> int:
        return self._config.pool_size

    def _mysql_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._closed:
                raise PoolClosedError(self.name)
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self.name,
                    pool_size=self._config.pool_size,
                    pool_reset_session=True,
                    **self._config.connect_kwargs(),
                )
            return self._pool

    @contextmanager
    def connection(self) -> Iterator[Any]:
        self._slots.acquire()
        try:
            conn = self._mysql_pool().get_connection()
            with self._lock:
                self._in_use += 1
            try:
                yield conn
            finally:
                with self._lock:
                    self._in_use -= 1
                    closed = self._closed
                self._release(conn, discard=closed)
        finally:
            self._slots.release()

    def _release(self, conn, *, discard: bool) -> None:
        try:
            if discard:
                # The pool was closed while this connection was checked out.
                conn.disconnect()
            else:
                # PooledMySQLConnection.close() hands the connection back to the pool.
                conn.close()
        except Exception as exc:
            logger.debug("Releasing connection to %s failed: %s", self.name, exc)

    def ping(self) -> None:
        with self.connection() as conn:
            conn.ping(reconnect=False)
            with db_cursor(conn) as cur:
                cur.execute("SELECT 1")
                cur.fetchall()

    def fetch_all(self, statement: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with self.connection() as conn:
            with db_cursor(conn) as cur:
                cur.execute(statement, tuple(params))
                return fetchall(cur)

    def insert(self, statement: str, params: Sequence[Any] = ()) -> int:
        with self.connection() as conn:
            with db_cursor(conn) as cur:
                cur.execute(statement, tuple(params))
                return int(cur.lastrowid)

    def execute(self, statement: str, params: Sequence[Any] = ()) -> int:
        with self.connection() as conn:
            with db_cursor(conn) as cur:
                cur.execute(statement, tuple(params))
                return int(cur.rowcount)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "name": self.name,
                "size": self._config.pool_size,
                "inUse": self._in_use,
                "initialized": self._pool is not None,
            }

    def close(self) -> None:
        with self._lock:
            pool, self._pool = self._pool, None
            self._closed = True
        if pool is not None:
            # Idle connections close here; checked-out ones disconnect on release.
            pool._remove_connections()
