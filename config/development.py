import os

from .config import Config, db_config

SECRET_KEY = Config.SECRET_KEY or "dev-secret-key"

DB_CONFIG = db_config()

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

TOKEN_EXPIRY_DAYS = Config.TOKEN_EXPIRY_DAYS
LOG_LEVEL = Config.LOG_LEVEL
TIMETABLE_PATH = Config.TIMETABLE_PATH
ROTATIONS_PATH = Config.ROTATIONS_PATH
ALLOWED_ORIGINS = Config.ALLOWED_ORIGINS
