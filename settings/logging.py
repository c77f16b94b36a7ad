"""Logging configuration."""

import sys
from pathlib import Path

from loguru import logger

import settings


def setup_logging(level: str = "WARNING", to_file: bool = False, log_dir: Path | None = None):
    """Console sink at ``level``; with ``to_file`` also a full DEBUG trace per day."""
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if to_file:
        log_dir = Path(log_dir or settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "deploy_time_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            rotation="00:00",
            retention="7 days",
            compression="gz",
        )
        logger.debug("Writing scan trace to {}", log_dir)

    return logger
