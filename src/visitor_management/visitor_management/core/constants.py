"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_POOL_SIZE = 10
MAX_POOL_SIZE = 32
CONNECTION_TIMEOUT_SECONDS = 30

KEEP_ALIVE_INTERVAL_SECONDS = 120
HEALTH_CHECK_INTERVAL_SECONDS = 30

BACKOFF_BASE_MS = 1000
BACKOFF_MAX_MS = 30000

DEFAULT_SHUTDOWN_TIMEOUT_SECONDS = 10

# Version 2 added the laptop fields.
VISITOR_SCHEMA_VERSION = 2
