import logging.config
from typing import Any

from .settings import get_settings


def build_logging_config(level: str, log_file: str | None = None) -> dict[str, Any]:
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
            "console": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "level": level,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }
    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "standard",
            "filename": log_file,
            "maxBytes": 10**7,
            "backupCount": 5,
            "level": "DEBUG",
        }
        config["root"]["handlers"].append("file")
        config["root"]["level"] = "DEBUG"
    return config


def configure_logging(level: str | None = None) -> None:
    settings = get_settings()
    logging.config.dictConfig(
        build_logging_config((level or settings.log_level).upper(), settings.log_file)
    )
