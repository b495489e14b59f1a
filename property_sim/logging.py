"""Structured logging configuration for property-sim.

Every record passing through the configured handler is stamped with the
simulated date of the game being played (``game_date``), so log lines can
be lined up with the in-game calendar as well as the wall clock.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, TextIO

from property_sim.models.base import GameDate

_current_game_date: ContextVar[GameDate | None] = ContextVar("current_game_date", default=None)

NO_GAME_DATE = "----------"


def set_game_date(date: GameDate | None) -> None:
    """Record the simulated date to stamp on subsequent log records."""
    _current_game_date.set(date)


class GameDateFilter(logging.Filter):
    """Attach the current simulated date to each record as ``game_date``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "game_date"):
            date = _current_game_date.get()
            record.game_date = str(date) if date is not None else NO_GAME_DATE
        return True


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> None:
    """Configure logging for property-sim.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    stream : TextIO | None
        Output stream. Defaults to stdout.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(game_date)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(GameDateFilter())
    root_logger.addHandler(console_handler)

    logging.getLogger("property_sim").setLevel(log_level)

    # Faker logs locale fallbacks at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, carrying both wall-clock and game dates."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "game_date": getattr(record, "game_date", None),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data.update(record.extra)

        return json.dumps(log_data)
