"""
Telemetry module for openai-lite-python.

Provides structured logging with sensitive data masking.
"""

from openai_lite.telemetry.logger import (
    JsonFormatter,
    LibLogger,
    SensitiveDataMasker,
    TextFormatter,
    get_logger,
)

__all__ = [
    "JsonFormatter",
    "LibLogger",
    "SensitiveDataMasker",
    "TextFormatter",
    "get_logger",
]
