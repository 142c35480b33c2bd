from config.config import *  # noqa: F401,F403
from config.config import db_config, env_bool

DB_CONFIG = db_config()

DEBUG = False

START_MONITOR = True

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
