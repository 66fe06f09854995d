import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER_NAME = "rank_equivalence"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def get_logger(log_path: Optional[str] = None, level: str = "INFO", max_bytes: int = 5 * 1024 * 1024,
               backup_count: int = 3, datefmt: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=datefmt)

    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        if log_path:
            Path(log_path).parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(log_path, mode="a", maxBytes=max_bytes,
                                     backupCount=backup_count, encoding="utf-8")
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger


def setup_logging(config: Dict[str, Any]) -> logging.Logger:
    """Configure the package logger from the LOGGING section of the app config."""
    logging_cfg = config.get("LOGGING", {}) or {}

    return get_logger(
        log_path=logging_cfg.get("FILE_NAME"),
        level=logging_cfg.get("LEVEL", "INFO"),
        max_bytes=int(logging_cfg.get("MAX_FILE_SIZE", 5 * 1024 * 1024)),
        backup_count=int(logging_cfg.get("BACKUP_COUNT", 3)),
        datefmt=logging_cfg.get("TIMESTAMP_FORMAT"),
    )
