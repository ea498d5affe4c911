"""会话传输层：基于 httpx 的异步会话，负责 JSON 请求、文件上传与二进制下载。

HTTP session shared by the chat and audio clients.

Provides:
- JSON request/response exchange (make_request)
- Multipart file upload with JSON response (upload)
- JSON request with raw byte download into a sink (download)
- Configurable timeouts and proxy
- Automatic auth header management
"""

from __future__ import annotations

import importlib.util
import mimetypes
import os
import time
from contextlib import suppress
from importlib.metadata import PackageNotFoundError, version
from typing import IO, TYPE_CHECKING, Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from openai_lite.errors import DecodeError, RemoteError, TransportError
from openai_lite.telemetry import get_logger
from openai_lite.transport.auth import get_auth_headers

if TYPE_CHECKING:
    from collections.abc import Mapping

ModelT = TypeVar("ModelT", bound=BaseModel)

_DEFAULT_TIMEOUT = 60.0
_DEFAULT_CONNECT_TIMEOUT = 10.0

_UA_VERSION: str | None = None

logger = get_logger(__name__)


class BinarySink(Protocol):
    """Anything bytes can be written to (open file, BytesIO, ...)."""

    def write(self, data: bytes, /) -> Any: ...


def _http2_enabled() -> bool:
    """Enable HTTP/2 only when optional dependency is present."""
    return importlib.util.find_spec("h2") is not None


def _trust_env_enabled() -> bool:
    """Use env proxy settings only when explicitly enabled."""
    return os.getenv("OPENAI_HTTP_TRUST_ENV", "0") == "1"


def _get_ua_version() -> str:
    """Get package version for User-Agent (cached)."""
    global _UA_VERSION
    if _UA_VERSION is None:
        try:
            _UA_VERSION = version("openai-lite-python")
        except PackageNotFoundError:
            _UA_VERSION = "0.0.0"
    return _UA_VERSION


class Session:
    """Authenticated HTTP session for the OpenAI API.

    One session can back any number of clients; it owns the connection
    pool and the credentials. Requests are made exactly once: there is
    no retry layer here.

    Example:
        >>> async with Session() as session:
        ...     chat = ChatClient(session, "gpt-4o")
        ...     response = await chat.create_completion(params)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        organization: str | None = None,
        timeout: float | None = None,
        proxy: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            api_key: Explicit API key (overrides env/keyring)
            organization: Organization id sent as OpenAI-Organization
            timeout: Request timeout in seconds
            proxy: Proxy URL
            http_client: Pre-built httpx client to use instead of a private one
        """
        self._timeout = timeout
        if self._timeout is None:
            env_timeout = os.getenv("OPENAI_TIMEOUT_SECS")
            if env_timeout:
                with suppress(ValueError):
                    self._timeout = float(env_timeout)
        if self._timeout is None:
            self._timeout = _DEFAULT_TIMEOUT

        if proxy is not None:
            self._proxy = proxy
        elif _trust_env_enabled():
            self._proxy = os.getenv("OPENAI_PROXY_URL")
        else:
            self._proxy = None

        self._auth_headers = get_auth_headers(api_key, organization)
        if "Authorization" not in self._auth_headers:
            logger.warning("No API key found; requests will be sent unauthenticated")

        self._client = http_client
        self._owns_client = http_client is None

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self._timeout  # type: ignore[return-value]

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout, connect=_DEFAULT_CONNECT_TIMEOUT),
                proxy=self._proxy,
                http2=_http2_enabled(),
                trust_env=_trust_env_enabled(),
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this session created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _build_headers(self) -> dict[str, str]:
        """Build request headers (httpx fills Content-Type per body kind)."""
        headers = {
            "Accept": "application/json",
            "User-Agent": f"openai-lite-python/{_get_ua_version()}",
        }
        headers.update(self._auth_headers)
        return headers

    async def _post(self, url: str, **kwargs: Any) -> httpx.Response:
        """POST and map failures onto the library error hierarchy."""
        client = self._get_client()
        started = time.perf_counter()
        try:
            response = await client.post(url, headers=self._build_headers(), **kwargs)
        except httpx.ConnectError as e:
            raise TransportError(f"Connection failed: {e}", url=url, cause=e) from e
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}", url=url, cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}", url=url, cause=e) from e

        latency_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            "Response received",
            url=url,
            status=response.status_code,
            latency_ms=round(latency_ms, 1),
        )
        if response.status_code >= 400:
            raise self._remote_error(response, url)
        return response

    def _remote_error(self, response: httpx.Response, url: str) -> RemoteError:
        body = None
        with suppress(ValueError):
            body = response.json()
        error = RemoteError.from_response(
            status_code=response.status_code,
            body=body if isinstance(body, dict) else None,
            headers=dict(response.headers),
        )
        logger.warning(
            "Request failed",
            url=url,
            status=response.status_code,
            error_class=error.error_class.value,
        )
        return error

    @staticmethod
    def _decode(response: httpx.Response, response_type: type[ModelT], url: str) -> ModelT:
        """Decode a JSON body into response_type."""
        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"Response is not valid JSON: {e}", url=url, cause=e) from e
        try:
            return response_type.model_validate(data)
        except PydanticValidationError as e:
            raise DecodeError(
                f"Response does not match {response_type.__name__}: {e}",
                url=url,
                cause=e,
            ) from e

    async def make_request(
        self,
        url: str,
        payload: dict[str, Any],
        response_type: type[ModelT],
    ) -> ModelT:
        """POST a JSON body and decode the JSON response.

        Args:
            url: Endpoint URL
            payload: JSON-serializable request body
            response_type: Model to validate the response into

        Returns:
            Decoded response

        Raises:
            TransportError: On network/connection errors
            RemoteError: On API errors (4xx, 5xx)
            DecodeError: On malformed or unexpected response bodies
        """
        logger.debug("Sending JSON request", url=url, model=payload.get("model"))
        response = await self._post(url, json=payload)
        return self._decode(response, response_type, url)

    async def upload(
        self,
        url: str,
        file: bytes | IO[bytes],
        file_format: str,
        fields: Mapping[str, str],
        response_type: type[ModelT],
    ) -> ModelT:
        """POST a multipart form with one file part and decode the JSON response.

        The file part is named ``file`` with filename ``audio.<file_format>``;
        the provider infers the codec from that extension.

        Args:
            url: Endpoint URL
            file: Raw bytes or a readable binary stream
            file_format: File extension such as "mp3" or "wav"
            fields: Extra form fields
            response_type: Model to validate the response into

        Returns:
            Decoded response
        """
        filename = f"audio.{file_format}"
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        logger.debug("Uploading file", url=url, filename=filename, content_type=content_type)
        response = await self._post(
            url,
            files={"file": (filename, file, content_type)},
            data=dict(fields),
        )
        return self._decode(response, response_type, url)

    async def download(
        self,
        url: str,
        payload: dict[str, Any],
        sink: BinarySink,
    ) -> int:
        """POST a JSON body and stream the raw response bytes into sink.

        Args:
            url: Endpoint URL
            payload: JSON-serializable request body
            sink: Destination for the response bytes

        Returns:
            Number of bytes written
        """
        client = self._get_client()
        written = 0
        logger.debug("Starting download", url=url, model=payload.get("model"))
        try:
            async with client.stream(
                "POST", url, json=payload, headers=self._build_headers()
            ) as response:
                if response.status_code >= 400:
                    await response.aread()
                    raise self._remote_error(response, url)
                async for chunk in response.aiter_bytes():
                    sink.write(chunk)
                    written += len(chunk)
        except httpx.ConnectError as e:
            raise TransportError(f"Connection failed: {e}", url=url, cause=e) from e
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}", url=url, cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}", url=url, cause=e) from e

        logger.debug("Download finished", url=url, bytes=written)
        return written

    async def __aenter__(self) -> Session:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
