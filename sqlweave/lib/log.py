"""
Centralized application-specific logging using Loguru.

This module provides a function-based logging mechanism (`LOG`) that dynamically
respects the `beQuiet` flag from application settings.

Features:
- A custom `LOG` function for application-specific debug logging.
- Dynamic checking of the `beQuiet` flag to suppress logs when necessary.
- Consistent and customizable logging format.

Importing this module leaves the loguru configuration of the host process
alone. The sqlweave stderr sink is added the first time `LOG` emits, and only
receives records bound with ``app="SQLWEAVE"``.

Example:
    from sqlweave.lib.log import LOG
    LOG("Tokenized template into 12 top-level tokens")

Environment:
- Set `SQW_BEQUIET=False` to show detailed logging output.
"""

from loguru import logger
from typing import Any
import sys

APP_NAME = "SQLWEAVE"

# Create a distinct logger instance for the app
app_logger = logger.bind(app=APP_NAME)

# Configure the app-specific logger
logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <30}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

_sink_id: int | None = None


def _record_isApp(record: dict) -> bool:
    return record["extra"].get("app") == APP_NAME


def _stderr_write(message: str) -> None:
    sys.stderr.write(message)


def sink_ensure() -> None:
    """Add the sqlweave stderr sink, once."""
    global _sink_id
    if _sink_id is None:
        _sink_id = logger.add(_stderr_write, format=logger_format, filter=_record_isApp)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Application-specific logging function.

    This function checks the `beQuiet` flag in `appsettings` and logs the message
    only if logging is enabled.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    from sqlweave.config.settings import appsettings  # Ensure up-to-date settings

    if not appsettings.beQuiet:
        sink_ensure()
        app_logger.opt(depth=1).debug(*args, **kwargs)
