"""错误分类模块：将 HTTP 状态码和响应体映射到标准错误类别。

Error classification for OpenAI API error responses.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorClass(str, Enum):
    """Standard error classification."""

    INVALID_REQUEST = "invalid_request"
    """Malformed request body, invalid parameters, or unsupported operation."""

    AUTHENTICATION = "authentication"
    """Missing/invalid credentials (API key/token)."""

    PERMISSION_DENIED = "permission_denied"
    """Caller is authenticated but not permitted to access the resource."""

    NOT_FOUND = "not_found"
    """Requested resource or model not found."""

    QUOTA_EXHAUSTED = "quota_exhausted"
    """Account quota/billing limit exceeded."""

    RATE_LIMITED = "rate_limited"
    """Throttled due to request/token limits; typically retryable with backoff."""

    REQUEST_TOO_LARGE = "request_too_large"
    """Payload too large (e.g., context too long, audio file too big)."""

    TIMEOUT = "timeout"
    """Request timed out or deadline exceeded."""

    SERVER_ERROR = "server_error"
    """Transient server-side failure (5xx)."""

    OVERLOADED = "overloaded"
    """Service overloaded / temporarily unavailable."""

    OTHER = "other"
    """Unknown classification."""


_RETRYABLE_CLASSES: set[ErrorClass] = {
    ErrorClass.RATE_LIMITED,
    ErrorClass.TIMEOUT,
    ErrorClass.SERVER_ERROR,
    ErrorClass.OVERLOADED,
}

_DEFAULT_STATUS_MAPPING: dict[int, ErrorClass] = {
    400: ErrorClass.INVALID_REQUEST,
    401: ErrorClass.AUTHENTICATION,
    403: ErrorClass.PERMISSION_DENIED,
    404: ErrorClass.NOT_FOUND,
    408: ErrorClass.TIMEOUT,
    413: ErrorClass.REQUEST_TOO_LARGE,
    422: ErrorClass.INVALID_REQUEST,
    429: ErrorClass.RATE_LIMITED,
    500: ErrorClass.SERVER_ERROR,
    502: ErrorClass.SERVER_ERROR,
    503: ErrorClass.OVERLOADED,
    504: ErrorClass.TIMEOUT,
}


def classify_http_error(
    status_code: int,
    body: dict[str, Any] | None = None,
) -> ErrorClass:
    """Classify an HTTP error into a standard error class.

    Args:
        status_code: HTTP status code
        body: Response body (parsed JSON)

    Returns:
        ErrorClass representing the error type
    """
    # Body hints are more specific than the status alone
    if status_code == 400 and body:
        error_obj = body.get("error")
        if isinstance(error_obj, dict):
            code_val = error_obj.get("code") or error_obj.get("type") or ""
            if isinstance(code_val, str) and "context_length" in code_val.lower():
                return ErrorClass.REQUEST_TOO_LARGE

    # 429 is either a rate limit or an exhausted quota
    if status_code == 429 and body:
        error_obj = body.get("error")
        error_type = error_obj.get("type", "") if isinstance(error_obj, dict) else ""
        error_msg = extract_error_message(body) or ""
        for pattern in ("quota", "billing", "insufficient_quota"):
            if pattern in error_msg.lower() or pattern in str(error_type).lower():
                return ErrorClass.QUOTA_EXHAUSTED

    if status_code in _DEFAULT_STATUS_MAPPING:
        return _DEFAULT_STATUS_MAPPING[status_code]

    if 400 <= status_code < 500:
        return ErrorClass.INVALID_REQUEST
    if 500 <= status_code < 600:
        return ErrorClass.SERVER_ERROR

    return ErrorClass.OTHER


def is_retryable(error_class: ErrorClass) -> bool:
    """Check if an error class is retryable by default.

    The library itself never retries; this only informs the caller.
    """
    return error_class in _RETRYABLE_CLASSES


def extract_error_message(body: dict[str, Any] | None) -> str | None:
    """Extract error message from response body.

    Supports:
    - OpenAI style: {"error": {"message": "..."}}
    - Simple: {"message": "..."} or {"error": "..."}

    Args:
        body: Response body (parsed JSON)

    Returns:
        Error message if found, None otherwise
    """
    if not body:
        return None

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            msg = error.get("message")
            if isinstance(msg, str):
                return msg
        elif isinstance(error, str):
            return error

    if "message" in body:
        msg = body["message"]
        if isinstance(msg, str):
            return msg

    return None
