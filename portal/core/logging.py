import logging
import logging.config
from pathlib import Path
from typing import Optional

from portal.core.config import settings

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "default",
            "stream": "ext://sys.stdout"
        }
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"]
    },
    "loggers": {
        "portal": {
            "level": "INFO",
            "handlers": ["console"],
            "propagate": False
        },
        "httpx": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False
        }
    }
}

def _file_handlers(log_dir: str) -> dict:
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    return {
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "INFO",
            "formatter": "default",
            "filename": str(log_path / "portal.log"),
            "maxBytes": 10485760,
            "backupCount": 5
        },
        "error_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "default",
            "filename": str(log_path / "error.log"),
            "maxBytes": 10485760,
            "backupCount": 5
        }
    }

def build_logging_config(level: Optional[str] = None, log_dir: Optional[str] = None) -> dict:
    level = (level or settings.LOG_LEVEL).upper()
    log_dir = log_dir if log_dir is not None else settings.LOG_DIR

    config = {
        **LOGGING_CONFIG,
        "handlers": dict(LOGGING_CONFIG["handlers"]),
        "root": dict(LOGGING_CONFIG["root"], level=level),
        "loggers": {name: dict(cfg) for name, cfg in LOGGING_CONFIG["loggers"].items()},
    }
    config["loggers"]["portal"]["level"] = level

    if log_dir:
        config["handlers"].update(_file_handlers(log_dir))
        config["root"]["handlers"] = ["console", "file", "error_file"]
        config["loggers"]["portal"]["handlers"] = ["console", "file", "error_file"]

    return config

def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None):
    logging.config.dictConfig(build_logging_config(level, log_dir))
