"""错误体系：提供结构化错误类型。

Error hierarchy for openai-lite-python.
"""

from openai_lite.errors.base import (
    DecodeError,
    DownloadError,
    ErrorContext,
    OpenAILiteError,
    RemoteError,
    TransportError,
    UnsupportedModeError,
    ValidationError,
)
from openai_lite.errors.classification import (
    ErrorClass,
    classify_http_error,
    extract_error_message,
    is_retryable,
)

__all__ = [
    "DecodeError",
    "DownloadError",
    # Classification
    "ErrorClass",
    "ErrorContext",
    # Base errors
    "OpenAILiteError",
    "RemoteError",
    "TransportError",
    "UnsupportedModeError",
    "ValidationError",
    "classify_http_error",
    "extract_error_message",
    "is_retryable",
]
