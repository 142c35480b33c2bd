from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .core.constants import HEALTH_CHECK_INTERVAL_SECONDS, KEEP_ALIVE_INTERVAL_SECONDS
from .database.connection import DBConfig
from .database.context import DatabaseContext, Pool
from .database.health import HealthMonitor
from .hosts.mysql_host_repository import MySQLHostRepository
from .hosts.service import HostService
from .lookups.mysql_lookup_repository import MySQLLookupRepository
from .lookups.service import LookupService
from .settings.mysql_setting_repository import MySQLSettingRepository
from .settings.service import SettingService
from .statistics.mysql_statistics_repository import MySQLStatisticsRepository
from .statistics.service import StatisticsService
from .visitors.mysql_visitor_repository import MySQLVisitorRepository
from .visitors.service import VisitorService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    db: DatabaseContext
    monitor: HealthMonitor

    visitor_service: VisitorService
    host_service: HostService
    lookup_service: LookupService
    setting_service: SettingService
    statistics_service: StatisticsService


def build_container(
    *,
    db_config: dict,
    keep_alive_seconds: int = KEEP_ALIVE_INTERVAL_SECONDS,
    health_check_seconds: int = HEALTH_CHECK_INTERVAL_SECONDS,
    pool_factory: Optional[Callable[[], Pool]] = None,
    check_connection: bool = True,
) -> Container:
    db = DatabaseContext(DBConfig.from_dict(db_config), pool_factory=pool_factory)
    if check_connection and not db.ensure_connection():
        # Not fatal: the monitor and the request gate keep trying.
        logger.error("Initial database connection failed; check DB_* settings and that MySQL is running")

    monitor = HealthMonitor(db, keep_alive_seconds=keep_alive_seconds, health_check_seconds=health_check_seconds)

    return Container(
        db=db,
        monitor=monitor,
        visitor_service=VisitorService(MySQLVisitorRepository(db)),
        host_service=HostService(MySQLHostRepository(db)),
        lookup_service=LookupService(
            MySQLLookupRepository(db, table="departments"),
            MySQLLookupRepository(db, table="visit_purposes"),
        ),
        setting_service=SettingService(MySQLSettingRepository(db)),
        statistics_service=StatisticsService(MySQLStatisticsRepository(db)),
    )
