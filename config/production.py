from .config import Config, db_config

if not Config.SECRET_KEY:
    raise RuntimeError("SECRET_KEY (or JWT_SECRET) must be set in production")

SECRET_KEY = Config.SECRET_KEY

DB_CONFIG = db_config()

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
TOKEN_EXPIRY_DAYS = Config.TOKEN_EXPIRY_DAYS
LOG_LEVEL = Config.LOG_LEVEL
TIMETABLE_PATH = Config.TIMETABLE_PATH
ROTATIONS_PATH = Config.ROTATIONS_PATH
ALLOWED_ORIGINS = Config.ALLOWED_ORIGINS
