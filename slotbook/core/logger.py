"""Logging with Loguru."""

import logging
import sys
from pathlib import Path
from types import FrameType
from typing import Optional, Union

from loguru import logger

__all__ = ["setup_structured_logging", "InterceptHandler"]


class InterceptHandler(logging.Handler):
    """Redirect standard logging records (aiohttp, asyncio) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        level: Union[str, int]
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame: Optional[FrameType] = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_structured_logging(
    level: str = "INFO", json_format: bool = False, logs_dir: Optional[Path] = None
) -> None:
    """
    Setup Loguru logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Serialize file records as JSON lines
        logs_dir: Directory for the file sink (file sink disabled when None)
    """
    # Remove default handler
    logger.remove()

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    logger.add(sys.stderr, format=console_format, level=level, colorize=True)

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        if json_format:
            logger.add(
                logs_dir / "slotbook.jsonl",
                format="{message}",
                level=level,
                rotation="10 MB",
                retention="30 days",
                serialize=True,
            )
        else:
            logger.add(
                logs_dir / "slotbook.log",
                format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
                level=level,
                rotation="10 MB",
                retention="30 days",
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.root.setLevel(getattr(logging, level))
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    logger.info(f"Logging initialized (level={level}, json={json_format})")
