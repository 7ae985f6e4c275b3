import logging
import logging.config

from yandex_model_provider.config import get_settings


def setup_logging(level: str | None = None):
    """
    Configure log format for the provider.
    Standardize output of the package loggers and httpx.
    """
    settings = get_settings()
    log_level = level or ("DEBUG" if settings.DEBUG else "INFO")

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "yandex_model_provider": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
            "httpx": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)
