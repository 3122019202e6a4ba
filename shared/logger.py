"""
EnigmaCore Structured Logger
=============================

Provides :class:`EnigmaLogger`, a small facade over :mod:`logging` that
writes colour-coded Rich output to the console and, optionally,
plain-text or JSON-lines records to a rotating log file.

Every record carries the tool name the logger is bound to and the
operation active at the time it was emitted.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)

_STANDARD_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


# ========================== JSON Formatter =================================


class _JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line.

    Output fields::

        {"timestamp": "...", "level": "INFO", "logger": "enigmacore.enigma.engine",
         "message": "...", "tool_name": "enigma.engine",
         "operation": "convert", "extra": {...}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in ("tool_name", "operation"):
            value = getattr(record, attr, None)
            if value is not None:
                entry[attr] = value

        extra = getattr(record, "enigma_extra", None)
        if extra is not None:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


# ========================== EnigmaLogger ===================================


class EnigmaLogger:
    """Context-aware logger bound to one EnigmaCore component.

    Usage::

        log = EnigmaLogger("enigma.engine")
        with log.operation("configure"):
            log.info("Inserting rotors %s", names, slots=5)

    Keyword arguments other than the stdlib ones (``exc_info``,
    ``stack_info``, ``stacklevel``) are collected into the record's
    ``extra`` field.

    Args:
        tool_name:      Component name, e.g. ``"enigma.machine"``.
        log_level:      Minimum severity name.
        log_file:       Rotating log file path; ``None`` disables it.
        json_logs:      Emit JSON lines to the file instead of plain text.
        max_bytes:      File size at which the log rotates.
        backup_count:   Rotated files to keep.
        console_output: Attach the Rich console handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 5_242_880,
        backup_count: int = 3,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operation: str | None = None

        level = getattr(logging, log_level.upper(), logging.INFO)
        self._logger = logging.getLogger(f"enigmacore.{tool_name}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        self.close()

        if console_output:
            self._logger.addHandler(
                RichHandler(
                    console=Console(theme=_LOG_THEME, stderr=True),
                    level=level,
                    show_path=False,
                    rich_tracebacks=True,
                    markup=False,
                )
            )

        if log_file is not None:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                filename=str(path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            handler.setLevel(level)
            handler.setFormatter(
                _JSONFormatter()
                if json_logs
                else logging.Formatter(
                    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                    datefmt="%Y-%m-%dT%H:%M:%S%z",
                )
            )
            self._logger.addHandler(handler)

    @classmethod
    def from_config(cls, tool_name: str, settings: Any) -> EnigmaLogger:
        """Build a logger from a :class:`~shared.config.GlobalConfig`."""
        return cls(
            tool_name,
            log_level=settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
            console_output=settings.console_output,
        )

    # ------------------------------------------------------------------ #
    #  Operation scope
    # ------------------------------------------------------------------ #

    class _OperationContext:
        """Binds an operation name for the duration of a ``with`` block."""

        def __init__(self, parent: EnigmaLogger, operation: str) -> None:
            self._parent = parent
            self._operation = operation
            self._prev: str | None = None

        def __enter__(self) -> EnigmaLogger:
            self._prev = self._parent._operation
            self._parent._operation = self._operation
            return self._parent

        def __exit__(self, *exc: Any) -> None:
            self._parent._operation = self._prev

    def operation(self, name: str) -> _OperationContext:
        """Return a context manager stamping ``operation=<name>`` on records."""
        return self._OperationContext(self, name)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _enrich(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        extra = kwargs.pop("extra", None) or {}
        fields = {
            key: kwargs.pop(key) for key in list(kwargs) if key not in _STANDARD_KWARGS
        }
        extra["tool_name"] = self._tool_name
        extra["operation"] = self._operation
        if fields:
            extra["enigma_extra"] = fields
        kwargs["extra"] = extra
        return kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **self._enrich(kwargs))

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(msg, *args, **self._enrich(kwargs))

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(msg, *args, **self._enrich(kwargs))

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(msg, *args, **self._enrich(kwargs))

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log at ERROR with the active exception's traceback."""
        kwargs.setdefault("exc_info", True)
        self._logger.error(msg, *args, **self._enrich(kwargs))

    def close(self) -> None:
        """Close and detach every handler bound to the underlying logger."""
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def current_operation(self) -> str | None:
        return self._operation

    @property
    def underlying(self) -> logging.Logger:
        """Direct access to the stdlib :class:`logging.Logger`."""
        return self._logger
