import logging
import logging.config

from httpstat.config import get_settings


def setup_logging():
    """
    Configure log format for command-line consumers of the library.
    The library itself only emits records; it never calls this on import.
    """
    settings = get_settings()
    log_level = "DEBUG" if settings.DEBUG else "INFO"

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
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "root": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": True,
            },
            # Transport internals are noisy at DEBUG; trace events cover them
            "httpx": {
                "level": "WARNING",
            },
            "httpcore": {
                "level": "WARNING",
            },
            "httpstat": {
                "level": log_level,
            },
        },
    }

    logging.config.dictConfig(logging_config)
