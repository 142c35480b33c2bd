from __future__ import annotations

from enum import Enum
from typing import Optional

from mysql.connector import errorcode
from mysql.connector.errors import InterfaceError


class RecoverableError(str, Enum):
    """Transport failures worth one reconnect-and-retry."""

    CONNECTION_RESET = "connection_reset"
    CONNECTION_REFUSED = "connection_refused"
    CONNECTION_LOST = "connection_lost"
    TIMED_OUT = "timed_out"


class PoolClosedError(InterfaceError):
    """Raised by a pool that was replaced while a caller was still waiting on it."""

    def __init__(self, pool_name: str):
        super().__init__(msg=f"Connection pool {pool_name} is closed", errno=errorcode.CR_CONNECTION_ERROR)


_MYSQL_ERRNO_TAGS = {
    errorcode.CR_CONNECTION_ERROR: RecoverableError.CONNECTION_REFUSED,
    errorcode.CR_CONN_HOST_ERROR: RecoverableError.CONNECTION_REFUSED,
    errorcode.CR_SERVER_GONE_ERROR: RecoverableError.CONNECTION_LOST,
    errorcode.CR_SERVER_LOST: RecoverableError.CONNECTION_LOST,
    errorcode.CR_SERVER_LOST_EXTENDED: RecoverableError.CONNECTION_RESET,
}

# Order matters: TimeoutError and the Connection*Error classes are all OSError.
_OS_ERROR_TAGS = (
    (ConnectionResetError, RecoverableError.CONNECTION_RESET),
    (ConnectionAbortedError, RecoverableError.CONNECTION_RESET),
    (ConnectionRefusedError, RecoverableError.CONNECTION_REFUSED),
    (TimeoutError, RecoverableError.TIMED_OUT),
)


def classify_error(exc: BaseException) -> Optional[RecoverableError]:
    """Map a driver/socket exception to a recoverable tag, or None.

    Only transport-level failures are tagged. Query errors (bad SQL,
    constraint violations) and pool exhaustion return None.
    """

    if isinstance(exc, PoolClosedError):
        return RecoverableError.CONNECTION_LOST

    for exc_type, tag in _OS_ERROR_TAGS:
        if isinstance(exc, exc_type):
            return tag

    errno = getattr(exc, "errno", None)
    if isinstance(errno, int) and errno in _MYSQL_ERRNO_TAGS:
        return _MYSQL_ERRNO_TAGS[errno]

    # mysql-connector wraps socket failures; the original is kept as __cause__/__context__.
    inner = exc.__cause__ or exc.__context__
    if inner is not None and inner is not exc and isinstance(inner, OSError):
        for exc_type, tag in _OS_ERROR_TAGS:
            if isinstance(inner, exc_type):
                return tag

    return None
