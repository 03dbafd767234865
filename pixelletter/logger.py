import os
import logging
from logging.handlers import RotatingFileHandler

from pixelletter.config import LOG_DIR, LOG_FILE, LOG_LEVEL


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(f"pixelletter.{name}")
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    if LOG_DIR and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        os.makedirs(LOG_DIR, exist_ok=True)
        handler = RotatingFileHandler(
            os.path.join(LOG_DIR, LOG_FILE),
            maxBytes=5 * 1024 * 1024,   # 5 MB
            backupCount=5               # keep 5 logs
        )
        fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        handler.setFormatter(fmt)
        logger.addHandler(handler)

    return logger
