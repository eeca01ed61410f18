"""
CyberVault Structured Logger
=============================

:class:`ToolkitLogger` wraps a stdlib logger with a Rich handler on stderr
and an optional rotating file handler (plain text or JSON lines).

Secrets never reach a handler: structured fields whose name looks like key
material (``key``, ``passphrase``, ``password``, ``plaintext``...) are
replaced with ``"[redacted]"`` before the record is built. Messages
themselves should only carry algorithm names, sizes and outcomes.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_ROOT_LOGGER_NAME = "cybervault"

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
    }
)

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(operation)s | %(message)s"
_TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

_SECRET_FIELDS = frozenset(
    {"key", "passphrase", "password", "plaintext", "secret", "default_key"}
)
_RECORD_KEYWORDS = frozenset({"exc_info", "stack_info", "stacklevel"})

# Per task, so concurrent coroutines sharing a logger keep their own tag
_OPERATION: ContextVar[Optional[str]] = ContextVar("cybervault_operation", default=None)


def redact(fields: dict[str, Any]) -> dict[str, Any]:
    """Return *fields* with secret-looking values masked."""
    return {
        name: "[redacted]" if name.lower() in _SECRET_FIELDS else value
        for name, value in fields.items()
    }


class _JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, component,
    operation, message, structured fields and traceback when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": getattr(record, "component", None),
            "operation": getattr(record, "operation", None),
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if fields:
            entry["fields"] = fields
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _console_handler(level: int) -> RichHandler:
    # stderr keeps stdout clean for JSON output and piping
    return RichHandler(
        level=level,
        console=Console(theme=_LOG_THEME, stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )


def _file_handler(path: Path, level: int, json_lines: bool,
                  max_bytes: int, backup_count: int) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    if json_lines:
        handler.setFormatter(_JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt=_TEXT_DATEFMT))
    return handler


class ToolkitLogger:
    """Logger bound to one CyberVault component.

    Usage::

        log = ToolkitLogger("vault.engine", log_file="vault.log", json_logs=True)
        with log.operation("hash_file"), log.timed("SHA256 of image.iso"):
            log.debug("Reading file", size=4096)

    Keyword arguments other than ``exc_info``/``stack_info``/``stacklevel``
    become structured ``fields`` on the record (redacted, see :func:`redact`).

    Args:
        tool_name: Component name, appended to the ``cybervault`` logger.
        log_level: Minimum level name; unknown names fall back to WARNING.
        log_file: Rotating log file path, ``None`` to disable.
        json_logs: Write JSON lines instead of text to the file.
        max_bytes: Rotation threshold for the log file.
        backup_count: Rotated files kept.
        console_output: Attach the Rich stderr handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name

        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

        self._logger = logging.getLogger(f"{_ROOT_LOGGER_NAME}.{tool_name}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        for old in list(self._logger.handlers):
            self._logger.removeHandler(old)
            old.close()

        if console_output:
            self._logger.addHandler(_console_handler(level))
        if log_file:
            self._logger.addHandler(
                _file_handler(Path(log_file), level, json_logs, max_bytes, backup_count)
            )

    @classmethod
    def from_config(cls, tool_name: str, config: Any) -> ToolkitLogger:
        """Build a logger from the ``[global]`` section of a ToolkitConfig."""
        settings = config.global_settings
        return cls(
            tool_name,
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
        )

    # ------------------------------------------------------------------ #
    #  Scopes
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[ToolkitLogger]:
        """Tag every record emitted inside the block with *name*."""
        token = _OPERATION.set(name)
        try:
            yield self
        finally:
            _OPERATION.reset(token)

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        """Log the duration of the block at DEBUG, and whether it raised."""
        start = time.perf_counter()
        outcome = "failed"
        try:
            yield
            outcome = "done"
        finally:
            self.debug("%s %s in %.3f sec", label, outcome, time.perf_counter() - start)

    # ------------------------------------------------------------------ #
    #  Emit
    # ------------------------------------------------------------------ #

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        passthrough = {k: kwargs.pop(k) for k in list(kwargs) if k in _RECORD_KEYWORDS}
        passthrough.setdefault("stacklevel", 3)
        extra = {
            "component": self._tool_name,
            "operation": _OPERATION.get() or "-",
            "fields": redact(kwargs),
        }
        self._logger.log(level, msg, *args, extra=extra, **passthrough)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, args, kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """ERROR with the active traceback attached."""
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, kwargs)

    @property
    def current_operation(self) -> Optional[str]:
        """Operation tag active in the calling task, if any."""
        return _OPERATION.get()

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """The wrapped :class:`logging.Logger`."""
        return self._logger
