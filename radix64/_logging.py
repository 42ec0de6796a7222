"""
Structured logging (OpenTelemetry-compliant).

Produces structured log output following the OpenTelemetry Logging Data Model.

Usage::

    from ._logging import logger

    # Info message (no code location)
    logger.info("Engine ready", extra={"scope": "engine", "alphabet": "standard"})

    # Debug message (includes code location automatically)
    logger.debug("Decode failed", extra={"scope": "decode", "offset": 4})

Environment::

    RADIX64_LOG_LEVEL=trace|debug|info|warn|error|fatal|off (default: info)
    RADIX64_LOG_FORMAT=json|human (default: human if tty, json if piped)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Any

__all__ = ["logger", "setup_logging", "scoped_logger"]

# =============================================================================
# Version
# =============================================================================


def _get_version() -> str:
    """Get radix64 version from package metadata."""
    try:
        return get_version("radix64")
    except (ImportError, PackageNotFoundError, AttributeError):
        return "0.0.0"


# =============================================================================
# Level Mapping
# =============================================================================

# Map Python levels to OpenTelemetry severity text
_LEVEL_TO_SEVERITY = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}

# Map string names to Python levels (case-insensitive)
_NAME_TO_LEVEL = {
    "trace": logging.DEBUG,  # Python doesn't have TRACE, use DEBUG
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "err": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "off": logging.CRITICAL + 10,  # Higher than any level
    "none": logging.CRITICAL + 10,
}

# Levels that include code location
_CODE_LOCATION_LEVELS = {logging.DEBUG, logging.ERROR, logging.CRITICAL}


def _infer_scope(logger_name: str) -> str:
    """Infer scope from logger name when not explicitly provided."""
    if "engine" in logger_name or "prelude" in logger_name:
        return "engine"
    if "alphabet" in logger_name or "table" in logger_name:
        return "alphabet"
    if "stream" in logger_name:
        return "stream"
    if "decode" in logger_name:
        return "decode"
    if "encode" in logger_name:
        return "encode"
    return logger_name.split(".")[-1] if logger_name else "radix64"


def _strip_path_prefix(filepath: str) -> str:
    """Strip common prefixes from filepath for cleaner log output."""
    for prefix in ("radix64/", "src/"):
        if prefix in filepath:
            return filepath[filepath.index(prefix) + len(prefix) :]
    return filepath


# =============================================================================
# Formatters
# =============================================================================

# Standard LogRecord fields, never copied into attributes
_STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "scope",
        "message",
    }
)


class JsonFormatter(logging.Formatter):
    """OpenTelemetry-compliant JSON formatter."""

    def __init__(self) -> None:
        super().__init__()
        self._version = _get_version()

    def format(self, record: logging.LogRecord) -> str:
        # Timestamp with nanosecond precision (RFC3339)
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        # Python's timestamp has microsecond precision, pad to nanoseconds
        timestamp = dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{int(dt.microsecond * 1000):09d}Z"

        severity = _LEVEL_TO_SEVERITY.get(record.levelno, "INFO")

        attributes: dict[str, Any] = {}

        # Scope from extra or infer from logger name
        scope = getattr(record, "scope", None) or _infer_scope(record.name)
        attributes["scope"] = scope

        for key, value in record.__dict__.items():
            if key not in _STANDARD_FIELDS and not key.startswith("_"):
                attributes[key] = value

        # Code location for DEBUG/ERROR/FATAL
        if record.levelno in _CODE_LOCATION_LEVELS:
            attributes["code.filepath"] = _strip_path_prefix(record.pathname)
            attributes["code.lineno"] = record.lineno

        log_record = {
            "timestamp": timestamp,
            "severityText": severity,
            "body": record.getMessage(),
            "attributes": attributes,
            "resource": {
                "service.name": "radix64",
                "service.version": self._version,
            },
        }

        return json.dumps(log_record, separators=(",", ":"), default=repr)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for terminal output."""

    # ANSI color codes
    _RESET = "\x1b[0m"
    _DIM = "\x1b[2m"
    _RED = "\x1b[31m"
    _YELLOW = "\x1b[33m"
    _CYAN = "\x1b[36m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self._use_colors = use_colors

    def _paint(self, text: str, color: str) -> str:
        if not (self._use_colors and color):
            return text
        return f"{color}{text}{self._RESET}"

    def _level_color(self, levelno: int) -> str:
        if levelno <= logging.DEBUG:
            return self._DIM
        if levelno >= logging.ERROR:
            return self._RED
        if levelno >= logging.WARNING:
            return self._YELLOW
        return ""

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        severity = _LEVEL_TO_SEVERITY.get(record.levelno, "INFO")
        scope = getattr(record, "scope", None) or _infer_scope(record.name)

        line = (
            f"{dt:%H:%M:%S} "
            f"{self._paint(f'{severity:<5}', self._level_color(record.levelno))} "
            f"{self._paint(f'[{scope}]', self._CYAN)} "
            f"{record.getMessage()}"
        )

        engine = getattr(record, "engine", None)
        if engine:
            line += f" ({engine})"

        if record.levelno in _CODE_LOCATION_LEVELS:
            location = f"[{_strip_path_prefix(record.pathname)}:{record.lineno}]"
            line += " " + self._paint(location, self._DIM)

        return line


# =============================================================================
# Logger Setup
# =============================================================================


def _get_log_level() -> int:
    """Get log level from environment."""
    level_name = os.environ.get("RADIX64_LOG_LEVEL") or os.environ.get("RADIX64_LOG", "info")
    return _NAME_TO_LEVEL.get(level_name.lower(), logging.INFO)


def _get_log_format() -> str:
    """Get log format from environment or auto-detect."""
    fmt = os.environ.get("RADIX64_LOG_FORMAT")
    if fmt:
        return fmt.lower()
    # Auto-detect: human for TTY, json for pipe
    return "human" if sys.stderr.isatty() else "json"


def _create_handler() -> logging.Handler:
    """Create appropriate handler based on format."""
    handler = logging.StreamHandler(sys.stderr)
    fmt = _get_log_format()

    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        use_colors = sys.stderr.isatty()
        handler.setFormatter(HumanFormatter(use_colors=use_colors))

    return handler


# Single logger for all of radix64
logger = logging.getLogger("radix64")


def _setup_default_handler() -> None:
    """Configure default logging based on environment."""
    # Don't add handler if user already configured logging
    if logger.handlers:
        return

    handler = _create_handler()
    logger.addHandler(handler)
    logger.setLevel(_get_log_level())


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
) -> None:
    """
    Configure radix64 logging.

    Parameters
    ----------
    level : str or int, default "INFO"
        Log level. Can be "DEBUG", "INFO", "WARNING", "ERROR", "FATAL",
        or a logging constant like ``logging.DEBUG``.

    format : str, optional
        Log format. Either "json" or "human". If not specified,
        uses RADIX64_LOG_FORMAT env var or auto-detects based on TTY.

    Examples
    --------
    JSON output for machine parsing::

        >>> import radix64
        >>> radix64.setup_logging("INFO", format="json")

    Human-readable output::

        >>> radix64.setup_logging("DEBUG", format="human")
    """
    if isinstance(level, str):
        level = _NAME_TO_LEVEL.get(level.lower(), logging.INFO)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # Set format in environment for child processes
    if format:
        os.environ["RADIX64_LOG_FORMAT"] = format

    handler = _create_handler()
    logger.addHandler(handler)
    logger.setLevel(level)


class _ScopedLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges extra attributes with scope."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        # Merge extra from call with our defaults (scope)
        extra: dict[str, Any] = dict(self.extra) if self.extra else {}
        if "extra" in kwargs:
            extra.update(kwargs["extra"])
        kwargs["extra"] = extra
        return msg, kwargs


def scoped_logger(scope: str) -> logging.LoggerAdapter:
    """
    Create a logger adapter with a fixed scope.

    This is useful for modules that always log with the same scope.

    Parameters
    ----------
    scope : str
        The scope name (e.g., "engine", "decode", "stream").

    Returns
    -------
    logging.LoggerAdapter
        A logger adapter that automatically adds scope to all messages.

    Examples
    --------
    ::

        from radix64._logging import scoped_logger
        log = scoped_logger("engine")
        log.debug("Built engine", extra={"engine": "standard"})
    """
    return _ScopedLoggerAdapter(logger, {"scope": scope})


# Initialize on import
_setup_default_handler()
