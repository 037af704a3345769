import logging.config
import sys
from pathlib import Path
from typing import Optional

from .config_loader import LoggingConfig


def configure_logging(logging_config: Optional[LoggingConfig] = None) -> None:
    """
    Configure the root logger from a LoggingConfig.

    Console output always; a rotating file handler when log_file is set.
    """
    logging_config = logging_config or LoggingConfig()
    level = logging_config.level.upper()

    handlers = {
        "console": {
            "level": level,
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": sys.stdout,
        },
    }
    if logging_config.log_file:
        Path(logging_config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "level": level,
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "standard",
            "filename": logging_config.log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers),
                "level": level,
                "propagate": True
            },
        }
    })
