"""
COSMICCLOCK Logging Configuration

One place that wires the ``cosmicclock`` logger tree:
- console output plus an optional size-rotated log file
- per-package levels (``services.ephemeris`` is the chatty one)
- tick correlation: every log line emitted while an ephemeris refresh is
  running carries ``tick-<generation>``
- helpers for logging caught exceptions and timing provider fetches

Usage:
    from cosmicclock.config import load_config
    from cosmicclock.logging_config import configure_logging, get_logger, tick_context

    configure_logging(load_config().logging)
    logger = get_logger(__name__)

    with tick_context(7):
        logger.info("Requesting state vectors")   # ... [tick-7]: Requesting ...
"""

import logging
import sys
import time
import traceback
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Generator, Optional

from cosmicclock.constants import LOG_BACKUP_COUNT, LOG_DATE_FORMAT, LOG_MAX_BYTES

if TYPE_CHECKING:
    from cosmicclock.config import LoggingConfig

ROOT_LOGGER_NAME = "cosmicclock"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_FORMAT_WITH_TICK = "%(asctime)s %(levelname)-7s %(name)s [%(correlation_id)s]: %(message)s"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _level(name: str) -> int:
    return LOG_LEVELS.get(name.upper(), logging.INFO)


# =============================================================================
# Tick Correlation
# =============================================================================

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    """Stamp records with the correlation ID of the running task ("-" if none).

    Installed on handlers, since logger filters skip records propagated from
    child loggers.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or "-"
        return True


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


@contextmanager
def correlation_context(correlation_id: str) -> Generator[str, None, None]:
    """Set the correlation ID for the enclosed block, restoring the outer one on exit.

    ContextVar scoping keeps overlapping refresh tasks apart: a slow tick-3
    fetch still logs as tick-3 after tick-4 has started.
    """
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


def tick_id(generation: int) -> str:
    return f"tick-{generation}"


def tick_context(generation: int):
    """correlation_context for one ephemeris refresh generation."""
    return correlation_context(tick_id(generation))


# =============================================================================
# Setup
# =============================================================================


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str | Path] = None,
    enable_correlation: bool = True,
) -> logging.Logger:
    """Install handlers on the ``cosmicclock`` logger, replacing any previous ones.

    Args:
        log_level: Level name; unknown names fall back to INFO
        log_file: Optional log file, rotated at LOG_MAX_BYTES; parents are created
        enable_correlation: Add the tick correlation ID to every line

    Returns:
        The configured ``cosmicclock`` logger
    """
    level = _level(log_level)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT_WITH_TICK if enable_correlation else LOG_FORMAT, LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        if enable_correlation:
            handler.addFilter(CorrelationIdFilter())
        root.addHandler(handler)
    return root


def configure_logging(config: "LoggingConfig") -> logging.Logger:
    """Apply the ``logging`` section of the configuration."""
    root = setup_logging(config.level, config.file, config.correlation)
    for package, level in config.packages.items():
        set_service_level(package, level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``cosmicclock`` namespace.

    ``services.ephemeris.source`` becomes ``cosmicclock.services.ephemeris.source``
    so service modules inherit the same handlers as the core package.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_service_level(package: str, level: str) -> None:
    """Set the level of one package, e.g. ``set_service_level("ephemeris", "DEBUG")``.

    Bare names resolve under ``services``; dotted names are taken as given
    (``cosmicclock.engine``, ``services.ephemeris.source``).
    """
    if "." not in package:
        package = f"services.{package}"
    get_logger(package).setLevel(_level(level))


# =============================================================================
# Helpers
# =============================================================================


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    level: int = logging.ERROR,
    include_traceback: bool = True,
) -> None:
    """Log a caught exception as ``message: [Type] text``, optionally with its traceback."""
    exc_type = type(exc).__name__
    line = f"{message}: [{exc_type}] {exc}"
    extra = {"exception_type": exc_type, "exception_message": str(exc)}
    if include_traceback:
        extra["traceback"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        line = f"{line}\n{extra['traceback']}"
    logger.log(level, line, extra=extra)


@dataclass
class Timing:
    """Elapsed wall time of a log_timing block, filled in on exit."""

    operation: str
    elapsed: float = 0.0
    slow: bool = False


@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    warn_threshold_sec: Optional[float] = None,
) -> Generator[Timing, None, None]:
    """Log start and duration of a block; WARNING when it ran past warn_threshold_sec.

    Example:
        with log_timing(logger, "spice-http fetch", warn_threshold_sec=provider.timeout) as timing:
            result = await provider.fetch_states(now, bodies)
        timing.elapsed  # seconds
    """
    timing = Timing(operation)
    logger.log(level, f"{operation} started")
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.elapsed = time.perf_counter() - start
        timing.slow = warn_threshold_sec is not None and timing.elapsed > warn_threshold_sec
        extra = {"operation": operation, "elapsed_seconds": round(timing.elapsed, 3)}
        if timing.slow:
            logger.warning(
                f"{operation} took {timing.elapsed:.3f}s (over {warn_threshold_sec}s)",
                extra=extra,
            )
        else:
            logger.log(level, f"{operation} completed in {timing.elapsed:.3f}s", extra=extra)
