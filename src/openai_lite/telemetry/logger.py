"""
Structured logging for openai-lite-python.

Provides library loggers with sensitive data masking, so API keys and
bearer tokens never reach log output.
"""

from __future__ import annotations

import json
import logging
import re
import sys
import time
from typing import Any, ClassVar

_REDACTED = "***REDACTED***"


class SensitiveDataMasker:
    """Masks credentials in log messages and structured fields."""

    DEFAULT_PATTERNS: ClassVar[list[tuple[str, str]]] = [
        (r"sk-[a-zA-Z0-9_-]{20,}", f"sk-{_REDACTED}"),
        (r"(Bearer\s+)\S+", rf"\1{_REDACTED}"),
        (r"((?:api[_-]?key|authorization|OPENAI_API_KEY)[\"']?\s*[:=]\s*[\"']?)[^\"'\s]+", rf"\1{_REDACTED}"),
    ]
    SENSITIVE_KEYS: ClassVar[tuple[str, ...]] = ("key", "token", "secret", "password", "auth")

    def __init__(self, patterns: list[tuple[str, str]] | None = None) -> None:
        self._patterns = [
            (re.compile(p, re.IGNORECASE), r) for p, r in (patterns or self.DEFAULT_PATTERNS)
        ]

    def mask(self, text: str) -> str:
        """Mask sensitive data in text."""
        for pattern, replacement in self._patterns:
            text = pattern.sub(replacement, text)
        return text

    def mask_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask a field dict; credential-like keys are redacted wholesale."""
        result: dict[str, Any] = {}
        for key, value in data.items():
            if any(s in key.lower() for s in self.SENSITIVE_KEYS):
                result[key] = _REDACTED
            elif isinstance(value, str):
                result[key] = self.mask(value)
            elif isinstance(value, dict):
                result[key] = self.mask_dict(value)
            else:
                result[key] = value
        return result


class _MaskingFormatter(logging.Formatter):
    def __init__(self, masker: SensitiveDataMasker | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._masker = masker or SensitiveDataMasker()

    def _fields(self, record: logging.LogRecord) -> dict[str, Any]:
        return self._masker.mask_dict(getattr(record, "extra_fields", {}))


class JsonFormatter(_MaskingFormatter):
    """One JSON object per record, extra fields merged at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": self._masker.mask(record.getMessage()),
            **self._fields(record),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class TextFormatter(_MaskingFormatter):
    """Human-readable lines with extra fields appended as key=value."""

    def __init__(self, masker: SensitiveDataMasker | None = None) -> None:
        super().__init__(
            masker,
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = self._masker.mask(super().format(record))
        fields = self._fields(record)
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


class LibLogger:
    """Logger with keyword fields, e.g. ``logger.debug("Request sent", url=url)``.

    Loggers are quiet (WARNING) and write masked text to stderr until
    :meth:`configure` is called.
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[int] = logging.WARNING
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(
        cls,
        level: int | str = logging.INFO,
        format: str = "text",
        stream: Any = None,
        masker: SensitiveDataMasker | None = None,
    ) -> None:
        """Configure every library logger.

        Args:
            level: Standard logging level, as int or name ("DEBUG", ...)
            format: 'json' or 'text'
            stream: Output stream (default: stderr)
            masker: Sensitive data masker
        """
        cls._level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        formatter = JsonFormatter(masker) if format == "json" else TextFormatter(masker)
        cls._handler = logging.StreamHandler(stream or sys.stderr)
        cls._handler.setFormatter(formatter)
        for logger in cls._loggers.values():
            cls._attach(logger)

    @classmethod
    def _attach(cls, logger: logging.Logger) -> None:
        logger.handlers.clear()
        if cls._handler is None:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(TextFormatter())
            logger.addHandler(handler)
        else:
            logger.addHandler(cls._handler)
        logger.setLevel(cls._level)
        logger.propagate = False

    @classmethod
    def get_logger(cls, name: str) -> LibLogger:
        """Get or create a logger."""
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            cls._attach(logger)
            cls._loggers[name] = logger
        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _log(self, level: int, msg: str, exc_info: bool = False, **fields: Any) -> None:
        self._logger.log(level, msg, exc_info=exc_info, extra={"extra_fields": fields})

    def debug(self, msg: str, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, **fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, **fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, **fields)

    def error(self, msg: str, exc_info: bool = False, **fields: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=exc_info, **fields)


def get_logger(name: str) -> LibLogger:
    """Get a library logger by name."""
    return LibLogger.get_logger(name)
