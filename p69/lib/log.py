"""
Debug logging for P69.

The engine logs every reported token failure and the file processor logs
files it cannot list, read or write. Output goes to stderr through one loguru
sink bound to `app="P69"`, so it never mixes with CSS written to stdout.

Usage:
    from p69.lib.log import LOG
    LOG(f"Processing {p69File} failed: {e}")

Environment:
- Set `P69_BEQUIET=True` to silence these messages; reports printed by the
  default error sink are not affected.
"""

from loguru import logger
from typing import Any
import sys

# Create a distinct logger instance for the app
app_logger = logger.bind(app="P69")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >24}</yellow>::"
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Application-specific logging function.

    Logs at debug level unless `appsettings.beQuiet` is set.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    try:
        from p69.config.settings import appsettings

        if not appsettings.beQuiet:
            app_logger.opt(depth=1).debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}")
