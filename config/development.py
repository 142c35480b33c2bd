from config.config import *  # noqa: F401,F403
from config.config import db_config, env_bool

# XAMPP's MySQL ships with an empty root password.
DB_CONFIG = db_config(default_password="")

DEBUG = True
LOG_LEVEL = "DEBUG"

START_MONITOR = env_bool("START_MONITOR", "1")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
# Optional: also seed lookup data on startup
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
