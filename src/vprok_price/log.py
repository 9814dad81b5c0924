from __future__ import annotations

import logging
from logging import FATAL, getLogger

import structlog
from structlog import get_logger


def setup_logging(level: str = "INFO") -> None:
  """Configure logging for the application."""
  numeric_level = logging.getLevelName(level.strip().upper())
  if not isinstance(numeric_level, int):
    raise ValueError(f"Unknown log level: {level}")

  logging.basicConfig(level=numeric_level, format="%(message)s")
  structlog.configure(
    processors=[
      structlog.contextvars.merge_contextvars,
      structlog.processors.add_log_level,
      structlog.processors.TimeStamper(fmt="iso"),
      structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
    cache_logger_on_first_use=False,
  )
  get_logger().debug("Logging initialized", level=level)

  getLogger("markdown_it").setLevel(FATAL)
  getLogger("asyncio").setLevel(FATAL)
