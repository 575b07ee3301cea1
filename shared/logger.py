"""
PassGuard Structured Logger
============================

:class:`GuardLogger` binds a stdlib logger to one PassGuard component
(``engine``, ``cli``, ...). Records go to a Rich handler on stderr, so
CLI stdout stays parseable, and optionally to a rotating file as plain
text or JSON lines.

Keyword arguments passed to the log methods become structured fields::

    log = GuardLogger("engine")
    with log.operation("validate"):
        log.debug("Candidate rejected", rule_ids=["min_length"])

Password candidates must never reach a log record. Callers log rule ids,
counts and scores only, and :class:`_RedactFilter` masks any structured
field whose name suggests a secret.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - OWASP Logging Cheat Sheet (data to exclude from logs).
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_SENSITIVE_FIELDS = frozenset({"password", "candidate", "secret", "token"})
_REDACTED = "[redacted]"
_PASSTHROUGH_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})
_TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(component)s] %(message)s"

# Operation tag of the current thread or task; see GuardLogger.operation.
_OPERATION: ContextVar[str | None] = ContextVar("passguard_operation", default=None)


# ========================== Filters and formatters =========================


class _RedactFilter(logging.Filter):
    """Replace secret-looking structured fields before any handler runs."""

    def filter(self, record: logging.LogRecord) -> bool:
        fields = getattr(record, "guard_extra", None)
        if fields:
            record.guard_extra = {
                key: _REDACTED if key.lower() in _SENSITIVE_FIELDS else value
                for key, value in fields.items()
            }
        return True


class _JSONLinesFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``timestamp``, ``level``, ``logger``, ``message``, then
    ``component``, ``operation``, ``extra`` and ``exc_info`` when set.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = dict(
            timestamp=created.isoformat(),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )
        optional = {
            "component": getattr(record, "component", None),
            "operation": getattr(record, "operation", None),
            "extra": getattr(record, "guard_extra", None),
        }
        entry.update({k: v for k, v in optional.items() if v is not None})
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _console_handler(level: int) -> RichHandler:
    theme = Theme(
        {
            "log.level.debug": "dim",
            "log.level.info": "cyan",
            "log.level.warning": "yellow",
            "log.level.error": "bold red",
            "log.level.critical": "reverse red",
        }
    )
    return RichHandler(
        level=level,
        console=Console(theme=theme, stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )


def _file_handler(
    path: Path, level: int, json_lines: bool, max_bytes: int, backups: int
) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(
        _JSONLinesFormatter() if json_lines else logging.Formatter(_TEXT_FORMAT)
    )
    return handler


@dataclass
class Stopwatch:
    """Elapsed-time holder yielded by :meth:`GuardLogger.timed`."""

    started: float
    stopped: float | None = None

    @property
    def elapsed(self) -> float:
        end = self.stopped if self.stopped is not None else time.perf_counter()
        return end - self.started


# ========================== GuardLogger ====================================


class GuardLogger:
    """Component-bound logger with structured fields.

    Args:
        component: Component name; the stdlib logger is ``passguard.<component>``.
        log_level: Minimum level name.
        log_file: Rotating log file; ``None`` or ``""`` disables it.
        json_logs: Write JSON lines instead of plain text to the file.
        max_bytes: Rotation size of the log file.
        backup_count: Rotated files to keep.
        console_output: Attach the Rich stderr handler.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
        console_output: bool = True,
    ) -> None:
        self._component = component
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

        logger = logging.getLogger(f"passguard.{component}")
        logger.setLevel(level)
        logger.propagate = False

        # Rebuilding a component replaces its handlers.
        for old in logger.handlers[:]:
            logger.removeHandler(old)
            old.close()
        for old in logger.filters[:]:
            logger.removeFilter(old)
        logger.addFilter(_RedactFilter())

        if console_output:
            logger.addHandler(_console_handler(level))
        if log_file:
            logger.addHandler(
                _file_handler(Path(log_file), level, json_logs, max_bytes, backup_count)
            )
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        self._logger = logger

    @classmethod
    def from_config(cls, component: str, config: Any) -> GuardLogger:
        """Build from the ``global_settings`` of a ``GuardConfig``."""
        settings = config.global_settings
        return cls(
            component,
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
        )

    # ------------------------------------------------------------------ #
    #  Context
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[GuardLogger]:
        """Tag records emitted inside the block with *name*.

        The tag lives in a context variable, so it is private to the
        calling thread or asyncio task. A single record can also be tagged
        with an ``operation=`` keyword instead.
        """
        token = _OPERATION.set(name)
        try:
            yield self
        finally:
            _OPERATION.reset(token)

    @contextmanager
    def timed(self, label: str) -> Iterator[Stopwatch]:
        """Log how long the block took, at INFO level."""
        watch = Stopwatch(started=time.perf_counter())
        self.debug("Started: %s", label)
        try:
            yield watch
        finally:
            watch.stopped = time.perf_counter()
            self.info("Completed: %s (%.3f sec)", label, watch.elapsed)

    # ------------------------------------------------------------------ #
    #  Logging
    # ------------------------------------------------------------------ #

    def _log(self, level: int, msg: str, args: tuple[Any, ...], fields: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        passthrough = {k: fields.pop(k) for k in list(fields) if k in _PASSTHROUGH_KWARGS}
        passthrough.setdefault("stacklevel", 3)
        extra = dict(fields.pop("extra", None) or {})
        operation = fields.pop("operation", None) or _OPERATION.get()
        extra.update(component=self._component, operation=operation)
        if fields:
            extra["guard_extra"] = fields
        self._logger.log(level, msg, *args, extra=extra, **passthrough)

    def debug(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, args, fields)

    def info(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.INFO, msg, args, fields)

    def warning(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.WARNING, msg, args, fields)

    def error(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.ERROR, msg, args, fields)

    def exception(self, msg: str, *args: Any, **fields: Any) -> None:
        """ERROR record with the active exception's traceback."""
        fields.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, fields)

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def component(self) -> str:
        return self._component

    @property
    def underlying(self) -> logging.Logger:
        return self._logger
