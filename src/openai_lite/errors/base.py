"""错误基类：提供分层错误体系和结构化错误上下文。

Base error classes for openai-lite-python.

Provides a layered error hierarchy:
- OpenAILiteError: Base class for all library errors
- ValidationError: Request parameters rejected before any I/O
- UnsupportedModeError: Request asks for a mode this client does not serve
- TransportError: HTTP/network errors
- RemoteError: Remote API errors with classification
- DecodeError: Response body could not be decoded
- DownloadError: Binary download stage failed
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from openai_lite.errors.classification import ErrorClass


@dataclass
class ErrorContext:
    """Structured error context for diagnostics.

    Provides actionable information for debugging and error handling.
    """

    field_path: str | None = None
    """Path to the problematic field (e.g., 'audio_format')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'validation', 'transport', 'remote')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class OpenAILiteError(Exception):
    """Base class for all openai-lite-python errors.

    All errors from this library inherit from this class, making it easy
    to catch all library errors with a single except clause.

    Attributes:
        message: Human-readable error message
        context: Optional structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> OpenAILiteError:
        """Add a hint to this error."""
        self.context.hint = hint
        return self


class ValidationError(OpenAILiteError):
    """Request parameters failed validation.

    Raised before any network call when:
    - A required field is missing (audio format, voice)
    - A value has the wrong shape (non-image media type)
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        field: str | None = None,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        ctx = context or ErrorContext(source="validation")
        if field:
            ctx.field_path = field
        if expected is not None:
            ctx.details["expected"] = expected
        if actual is not None:
            ctx.details["actual"] = actual
        super().__init__(message, ctx)
        self.field = field
        self.expected = expected
        self.actual = actual


class UnsupportedModeError(OpenAILiteError):
    """The request asks for a mode this client cannot serve.

    Raised when streaming is requested on a non-streaming completion call.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        mode: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="client")
        if mode:
            ctx.details["mode"] = mode
        super().__init__(message, ctx)
        self.mode = mode


class TransportError(OpenAILiteError):
    """Error during HTTP transport.

    Raised when:
    - Network connection failure
    - Timeout
    - SSL/TLS errors
    - Proxy errors
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="transport")
        if url:
            ctx.details["url"] = url
        if status_code:
            ctx.details["status_code"] = status_code
        super().__init__(message, ctx)
        self.url = url
        self.status_code = status_code
        self.__cause__ = cause


class DecodeError(OpenAILiteError):
    """Response body was not valid JSON or did not match the expected shape."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="decode")
        if url:
            ctx.details["url"] = url
        super().__init__(message, ctx)
        self.url = url
        self.__cause__ = cause


class DownloadError(OpenAILiteError):
    """A binary download stage failed.

    Wraps whatever the session raised; the original error is kept
    as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context)
        self.__cause__ = cause


class RemoteError(OpenAILiteError):
    """Error from remote API.

    Represents errors returned by the provider API, with structured
    classification so callers can decide whether to retry.

    Attributes:
        status_code: HTTP status code
        error_class: Standardized error classification
        retryable: Whether the error is retryable
        raw_error: Raw error response from the API
        retry_after: Suggested retry delay in seconds (from header)
        request_id: Provider request identifier, when present
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_class: ErrorClass,
        retryable: bool = False,
        raw_error: dict[str, Any] | None = None,
        retry_after: float | None = None,
        request_id: str | None = None,
    ) -> None:
        ctx = ErrorContext(source="remote")
        ctx.details["status_code"] = status_code
        ctx.details["error_class"] = error_class.value
        ctx.details["retryable"] = retryable
        if request_id:
            ctx.details["request_id"] = request_id

        super().__init__(message, ctx)

        self.status_code = status_code
        self.error_class = error_class
        self.retryable = retryable
        self.raw_error = raw_error or {}
        self.retry_after = retry_after
        self.request_id = request_id

    @classmethod
    def from_response(
        cls,
        status_code: int,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> RemoteError:
        """Create RemoteError from HTTP response.

        Args:
            status_code: HTTP status code
            body: Response body (parsed JSON)
            headers: Response headers

        Returns:
            RemoteError with appropriate classification
        """
        from openai_lite.errors.classification import (
            classify_http_error,
            extract_error_message,
            is_retryable,
        )

        error_class = classify_http_error(status_code, body)
        message = extract_error_message(body) or f"HTTP {status_code}"

        retry_after = None
        if headers:
            retry_after_str = headers.get("retry-after") or headers.get("Retry-After")
            if retry_after_str:
                with contextlib.suppress(ValueError):
                    retry_after = float(retry_after_str)

        request_id = None
        if headers:
            request_id = headers.get("x-request-id") or headers.get("X-Request-Id")

        return cls(
            message=message,
            status_code=status_code,
            error_class=error_class,
            retryable=is_retryable(error_class),
            raw_error=body,
            retry_after=retry_after,
            request_id=request_id,
        )
