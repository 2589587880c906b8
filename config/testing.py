from .config import Config, db_config

SECRET_KEY = "test-secret"

DB_CONFIG = db_config()

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
TOKEN_EXPIRY_DAYS = 7
LOG_LEVEL = "WARNING"
TIMETABLE_PATH = Config.TIMETABLE_PATH
ROTATIONS_PATH = Config.ROTATIONS_PATH
ALLOWED_ORIGINS = Config.ALLOWED_ORIGINS
