import os
import logging
import logging.config
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent  # <project>
INSTANCE_DIR = BASE_DIR / "instance"
INSTANCE_DIR.mkdir(parents=True, exist_ok=True)

def _default_sqlite_uri():
    return f"sqlite:///{(INSTANCE_DIR / 'hisab.db').as_posix()}"

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL") or _default_sqlite_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    HISAB_CURRENCY = os.getenv("HISAB_CURRENCY", "PKR")
    HISAB_COMPANY = os.getenv("HISAB_COMPANY", "HisabWeb")
    HISAB_API_PREFIX = os.getenv("HISAB_API_PREFIX", "/api")
    HISAB_EXPORT_VERSION = "1.0"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("LOG_FILE", "")

def ensure_instance(app):
    # Flask instance path
    os.makedirs(app.instance_path, exist_ok=True)


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"


def configure_logging(app) -> None:
    level = app.config.get("LOG_LEVEL", "INFO")
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": level,
        },
    }
    log_file = app.config.get("LOG_FILE")
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "standard",
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,  # 5 MB
            "backupCount": 5,
            "level": level,
            "encoding": "utf-8",
        }
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": {"format": LOG_FORMAT}},
        "handlers": handlers,
        "loggers": {
            "hisab": {"handlers": list(handlers), "level": level, "propagate": False},
        },
    })
