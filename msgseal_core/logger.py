import logging, json, sys, time, os
from typing import Optional

from .config import Settings


def get_logger(name="msgseal", level: Optional[int] = None, to_file: Optional[str] = None):
    """Unified structured logger for all msgseal components.

    level/to_file default to MSGSEAL_LOG_LEVEL / MSGSEAL_LOG_FILE.
    """
    settings = Settings.from_env()
    if level is None:
        level = settings.log_level
    if to_file is None:
        to_file = settings.log_file

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt=json.dumps({
                "ts": "%(asctime)s",
                "level": "%(levelname)s",
                "name": "%(name)s",
                "msg": "%(message)s"
            }),
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
        formatter.converter = time.gmtime  # UTC
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
