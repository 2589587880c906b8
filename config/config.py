import os
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = REPO_ROOT / "data"

DEFAULT_ORIGINS = ["http://localhost:5173", "http://localhost:3000"]


def _flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


def _origins() -> list[str]:
    origins = list(DEFAULT_ORIGINS)
    extra = os.environ.get("ALLOWED_ORIGINS", "")
    origins.extend(o.strip() for o in extra.split(",") if o.strip())
    frontend = os.environ.get("FRONTEND_URL", "").strip()
    if frontend and frontend not in origins:
        origins.append(frontend)
    return origins


class Config:
    # JWT_SECRET is accepted as an alias for deployments that already set it.
    SECRET_KEY = os.environ.get("SECRET_KEY") or os.environ.get("JWT_SECRET") or ""

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "class_attendance")

    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    TOKEN_EXPIRY_DAYS = int(os.environ.get("TOKEN_EXPIRY_DAYS", "7"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    TIMETABLE_PATH = os.environ.get("TIMETABLE_PATH", str(DATA_DIR / "academic_timetable.json"))
    ROTATIONS_PATH = os.environ.get("ROTATIONS_PATH", str(DATA_DIR / "rotations.json"))

    ALLOWED_ORIGINS = _origins()


def db_config() -> dict:
    return {
        "host": Config.DB_HOST,
        "port": Config.DB_PORT,
        "user": Config.DB_USER,
        "password": Config.DB_PASSWORD,
        "database": Config.DB_NAME,
    }
