from config.config import *  # noqa: F401,F403
from config.config import db_config

DB_CONFIG = db_config(default_password="12345")

DEBUG = False
TESTING = True

# Tests inject their own container; never touch a real server from here.
START_MONITOR = False
AUTO_INIT_DB = False
AUTO_SEED_DB = False

ALLOWED_ORIGINS = ["http://localhost:5173"]
