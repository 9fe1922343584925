"""Structured logging configuration."""

import sys
import logging
from pathlib import Path
from typing import List, Optional
import structlog

# Applied to structlog events and to records from plain stdlib loggers alike
SHARED_PROCESSORS: List = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _formatter(renderer, with_exc_info: bool) -> structlog.stdlib.ProcessorFormatter:
    processors = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if with_exc_info:
        processors.append(structlog.processors.format_exc_info)
    processors.append(renderer)
    return structlog.stdlib.ProcessorFormatter(
        processors=processors,
        foreign_pre_chain=SHARED_PROCESSORS,
    )


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    json_format: bool = False
):
    """Configure structured logging for a dirlens run.

    Console output goes to stderr so ``dirlens analyze --json`` stays
    parseable. A log file, when given, always receives one JSON object per
    line regardless of ``json_format``.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a JSON-lines log file
        json_format: Render console logs as JSON instead of coloured text
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    if json_format:
        console = _formatter(structlog.processors.JSONRenderer(ensure_ascii=False), True)
    else:
        console = _formatter(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()), False)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].setFormatter(console)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            _formatter(structlog.processors.JSONRenderer(ensure_ascii=False), True)
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setLevel(numeric_level)
        root.addHandler(handler)
    root.setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None, **context) -> structlog.stdlib.BoundLogger:
    """Get a logger, optionally bound to run context such as ``project``."""
    logger = structlog.get_logger(name)
    return logger.bind(**context) if context else logger
