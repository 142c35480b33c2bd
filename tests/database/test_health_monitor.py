from __future__ import annotations

import schedule

from src.visitor_management.visitor_management.database.connection import DBConfig
from src.visitor_management.visitor_management.database.context import DatabaseContext
from src.visitor_management.visitor_management.database.health import HealthMonitor

CONFIG = DBConfig(host="db", port=3306, user="root", password="", database="visitor_management")


def _connected_db(pool_factory) -> DatabaseContext:
    db = DatabaseContext(CONFIG, pool_factory=pool_factory)
    assert db.ensure_connection()
    return db


def test_jobs_use_configured_intervals(pool_factory):
    scheduler = schedule.Scheduler()
    monitor = HealthMonitor(_connected_db(pool_factory), keep_alive_seconds=120, health_check_seconds=30, scheduler=scheduler)

    monitor.schedule_jobs()
    monitor.schedule_jobs()

    assert sorted(job.interval for job in scheduler.jobs) == [30, 120]
    assert all(job.unit == "seconds" for job in scheduler.jobs)


def test_keep_alive_success_keeps_pool(pool_factory):
    db = _connected_db(pool_factory)
    pool = db.pool

    assert HealthMonitor(db).keep_alive() is True
    assert db.pool is pool
    assert pool.statements == [("SELECT 1", ())]


def test_keep_alive_failure_replaces_pool_and_retests(pool_factory, lost_connection):
    db = _connected_db(pool_factory)
    stale = db.pool
    stale.failures = [lost_connection()]

    assert HealthMonitor(db).keep_alive() is True

    assert stale.closed is True
    assert db.pool is not stale
    assert db.pool.pings == 1
    assert db.is_connected is True


def test_health_check_failure_flags_disconnected_and_recovers_pool(pool_factory):
    db = _connected_db(pool_factory)
    stale = db.pool
    stale.healthy = False

    assert HealthMonitor(db).health_check() is False

    assert db.is_connected is False
    assert db.retry_count == 1
    assert stale.closed is True
    assert db.pool is not stale


def test_request_after_failed_health_check_is_served_by_fresh_pool(pool_factory):
    db = _connected_db(pool_factory)
    db.pool.healthy = False
    HealthMonitor(db).health_check()
    assert db.is_connected is False

    # The next caller reconnects immediately instead of waiting for the next check.
    assert db.ensure_connection() is True
    db.pool.rows = [{"id": 3, "name": "Jane"}]
    assert db.safe_query("SELECT * FROM visitors WHERE id=%s", (3,)) == [{"id": 3, "name": "Jane"}]


class ExplodingScheduler(schedule.Scheduler):
    def run_pending(self):
        raise RuntimeError("job blew up")


def test_failing_job_does_not_stop_the_monitor(pool_factory):
    monitor = HealthMonitor(_connected_db(pool_factory), scheduler=ExplodingScheduler())

    monitor.run_pending()


def test_start_and_stop_background_thread(pool_factory):
    monitor = HealthMonitor(_connected_db(pool_factory), tick_seconds=0.01)

    monitor.start()
    assert monitor._thread is not None and monitor._thread.is_alive()

    monitor.stop()
    assert monitor._thread is None


def test_successful_checks_restore_the_connected_flag(pool_factory):
    db = _connected_db(pool_factory)
    monitor = HealthMonitor(db)

    db.mark_disconnected()
    assert monitor.health_check() is True
    assert db.is_connected is True

    db.mark_disconnected()
    assert monitor.keep_alive() is True
    assert db.is_connected is True
    assert db.stats()["connected"] is True
