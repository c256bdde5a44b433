"""Loguru sinks for the engine's own log records.

Library modules only emit through ``loguru.logger``. ``setup_logging`` adds
sinks that receive the records emitted from ``voting_engine`` modules, text
or JSON on stderr plus an optional rotating file. Calling it again replaces
the engine sinks and leaves any sink the host installed untouched.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from voting_engine.core.config import Settings

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
_LOG_FILE = "voting-engine.log"

_handler_ids: list[int] = []


def _engine_records(record: dict[str, Any]) -> bool:
    return (record["name"] or "").startswith("voting_engine")


def remove_logging() -> None:
    """Remove the sinks installed by :func:`setup_logging`."""
    while _handler_ids:
        logger.remove(_handler_ids.pop())


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, *, json_output: bool = False) -> None:
    """Install the engine sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files.  When set, a rotating
            file sink is added (rotated every 24 hours, retained 7 days).
        json_output: Serialize stderr records as JSON lines.
    """
    remove_logging()
    level = log_level.upper()
    _handler_ids.append(
        logger.add(
            sys.stderr,
            level=level,
            format=_LOG_FORMAT,
            serialize=json_output,
            filter=_engine_records,
        )
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        _handler_ids.append(
            logger.add(
                log_path / _LOG_FILE,
                level=level,
                format=_LOG_FORMAT,
                filter=_engine_records,
                rotation="24h",
                retention="7 days",
            )
        )


def setup_logging_from_settings(settings: Settings) -> None:
    """Install the engine sinks described by ``settings``."""
    setup_logging(settings.log_level, settings.log_dir, json_output=settings.log_json)
