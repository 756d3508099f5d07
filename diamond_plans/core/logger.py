"""Logger configuration for Diamond Plans.

Planner, timer and session events carry their data as loguru ``extra``
fields. The console sink shows those fields after the message; the optional
file sink writes one JSON object per event so practice logs can be replayed
or grepped by field.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def _console_format(record) -> str:
    # Events without structured fields keep a plain line
    if record["extra"]:
        return CONSOLE_FORMAT + " | <dim>{extra}</dim>\n{exception}"
    return CONSOLE_FORMAT + "\n{exception}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru with a console sink and an optional JSON-lines file sink.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path for the JSON-lines log. If None, console only.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    logger.remove()

    logger.add(sys.stderr, format=_console_format, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            level=level,
            serialize=True,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
        )

    logger.debug("Logger initialized", level=level, log_file=log_file)
