from __future__ import annotations

import logging
import threading
from typing import Optional

import schedule

from ..core.constants import HEALTH_CHECK_INTERVAL_SECONDS, KEEP_ALIVE_INTERVAL_SECONDS
from .context import DatabaseContext

logger = logging.getLogger(__name__)


class HealthMonitor:
    """Two periodic checks against the shared DatabaseContext.

    - keep-alive (slow): a trivial query so the server does not drop idle
      connections; on failure the pool is replaced and retested.
    - health check (fast): ping one connection; on failure the context is
      flagged disconnected and asked to recover.
    """

    def __init__(
        self,
        db: DatabaseContext,
        *,
        keep_alive_seconds: int = KEEP_ALIVE_INTERVAL_SECONDS,
        health_check_seconds: int = HEALTH_CHECK_INTERVAL_SECONDS,
        scheduler: Optional[schedule.Scheduler] = None,
        tick_seconds: float = 1.0,
    ):
        self._db = db
        self._keep_alive_seconds = int(keep_alive_seconds)
        self._health_check_seconds = int(health_check_seconds)
        self._scheduler = scheduler or schedule.Scheduler()
        self._tick_seconds = tick_seconds
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def keep_alive(self) -> bool:
        try:
            self._db.pool.fetch_all("SELECT 1")
            logger.debug("Database keep-alive ping successful")
            self._db.mark_connected()
            return True
        except Exception as exc:
            logger.error("Database keep-alive failed: %s", exc)
        return self._db.reconnect()

    def health_check(self) -> bool:
        try:
            self._db.pool.ping()
            self._db.mark_connected()
            return True
        except Exception as exc:
            logger.warning("Database health check failed: %s", exc)
        self._db.mark_disconnected()
        return self._db.ensure_connection()

    def schedule_jobs(self) -> None:
        self._scheduler.clear("db-monitor")
        self._scheduler.every(self._keep_alive_seconds).seconds.do(self.keep_alive).tag("db-monitor")
        self._scheduler.every(self._health_check_seconds).seconds.do(self.health_check).tag("db-monitor")

    def run_pending(self) -> None:
        try:
            self._scheduler.run_pending()
        except Exception:
            # A failing job must not kill the monitor thread.
            logger.exception("Database monitor job raised")

    def _run(self) -> None:
        while not self._stop.wait(self._tick_seconds):
            self.run_pending()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self.schedule_jobs()
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="db-monitor", daemon=True)
        self._thread.start()
        logger.info(
            "Database monitor started (keep-alive every %ss, health check every %ss)",
            self._keep_alive_seconds,
            self._health_check_seconds,
        )

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        self._scheduler.clear("db-monitor")
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
