# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - Structured logging with probe context
# PURPOSE: Consistent, queryable probe diagnostics
# CREATED: 18 OCT 2026
# ============================================================================
"""
Structured Logging

Provides structured, JSON-formatted or human-readable logging for the
dashboard service.

Features:
- Contextual fields (sweep_id, database, instance, address)
- Context kept per asyncio task (contextvars), so concurrent probes of
  different databases never see each other's fields
- JSON output for log aggregation
- Optional rotating log file

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("services.evaluator")

    with log_context(database="ERP_DB", instance="Production"):
        logger.warning("Port check failed")
"""

import json
import logging
import os
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass
class LogContext:
    """Contextual fields attached to every record logged inside a probe."""
    sweep_id: Optional[str] = None
    database: Optional[str] = None
    instance: Optional[str] = None
    address: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


_current_context: ContextVar[Optional[LogContext]] = ContextVar(
    "log_context", default=None
)


def get_current_context() -> LogContext:
    """Get current logging context."""
    return _current_context.get() or LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(database="ERP_DB", instance="Disaster Recovery"):
            logger.info("Fetching lag")
    """
    parent = get_current_context()
    new_context = LogContext(
        sweep_id=kwargs.get("sweep_id", parent.sweep_id),
        database=kwargs.get("database", parent.database),
        instance=kwargs.get("instance", parent.instance),
        address=kwargs.get("address", parent.address),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    token = _current_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_context.reset(token)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for easy parsing by log aggregators.
    """

    def __init__(self, include_context: bool = True):
        super().__init__()
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            context_dict = get_current_context().to_dict()
            if context_dict:
                log_data["context"] = context_dict

        if hasattr(record, "extra") and record.extra:
            log_data["data"] = record.extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Includes probe context inline for easy reading.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        context_parts = []
        if context.database:
            context_parts.append(f"db={context.database}")
        if context.instance:
            context_parts.append(f"instance={context.instance}")
        if context.address:
            context_parts.append(f"addr={context.address}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        result = f"{timestamp} {level} {record.name}{context_str}: {record.getMessage()}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes context in log records.

    Automatically includes the current task's context in all log messages.
    """

    def process(self, msg, kwargs):
        extra = kwargs.get("extra", {})
        extra.update(get_current_context().to_dict())
        kwargs["extra"] = {"extra": extra}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "services.evaluator")

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), {})


class AgeLimitedRotatingFileHandler(RotatingFileHandler):
    """
    Size-rotated log file that also deletes backups older than max_age_days.

    Backups are the `<file>.1 .. <file>.N` siblings RotatingFileHandler
    creates. Pruning runs at startup and after every rollover; 0 disables it.
    """

    def __init__(self, filename, max_age_days: int = 0, **kwargs):
        super().__init__(filename, **kwargs)
        self.max_age_days = max_age_days
        self.prune()

    def doRollover(self):
        super().doRollover()
        self.prune()

    def prune(self) -> int:
        """Delete expired backups. Returns how many were removed."""
        if self.max_age_days <= 0:
            return 0

        cutoff = time.time() - self.max_age_days * 86400
        base = Path(self.baseFilename)
        removed = 0
        for backup in base.parent.glob(f"{base.name}.*"):
            if not backup.name[len(base.name) + 1:].isdigit():
                continue
            try:
                if backup.stat().st_mtime < cutoff:
                    backup.unlink()
                    removed += 1
            except OSError:
                continue
        return removed


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
    filename: Optional[str] = None,
    max_size_mb: int = 100,
    max_backups: int = 5,
    max_age_days: int = 0,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (for production)
        filename: Log file path; stdout when empty
        max_size_mb: Rotate the log file at this size
        max_backups: Rotated files to keep
        max_age_days: Delete rotated files older than this (0 keeps all)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter(include_context=True)
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    if filename:
        handler = AgeLimitedRotatingFileHandler(
            filename,
            max_age_days=max_age_days,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=max_backups,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "AgeLimitedRotatingFileHandler",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
