"""Loguru sinks for load engine entry points.

Engine modules only emit records tagged by stage ([LOAD], [LOAD_RANGE],
[BREAKDOWN], [PIPELINE], [BASELINE], [SETTINGS]). Nothing is configured at
import time; the CLI calls ``setup_logger`` once per invocation.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> <cyan>{name}</cyan> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} {level} {name}:{function}:{line} {message}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "5 MB",
    retention: int = 5,
) -> list[int]:
    """Replace every loguru sink with a stderr sink and an optional file sink.

    The file sink keeps the last ``retention`` rotated files and is always
    written at DEBUG so a run can be diagnosed after the fact, whatever the
    console level is.

    Returns:
        Handler ids of the added sinks, console first.
    """
    logger.remove()

    handler_ids = [
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=level,
            colorize=None,
            backtrace=False,
            diagnose=False,
        )
    ]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler_ids.append(
            logger.add(
                log_path,
                format=FILE_FORMAT,
                level="DEBUG",
                rotation=rotation,
                retention=retention,
                encoding="utf-8",
            )
        )

    logger.debug(f"[LOGGER] console level={level} file={log_file or '-'}")
    return handler_ids
