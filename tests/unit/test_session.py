"""Tests for transport module."""

import io
import os
from unittest.mock import patch

import httpx
import pytest
from pydantic import BaseModel

from openai_lite.errors import DecodeError, ErrorClass, RemoteError, TransportError
from openai_lite.transport import Session, get_auth_headers, resolve_api_key


class _Echo(BaseModel):
    text: str


class TestResolveApiKey:
    """Tests for API key resolution."""

    def test_explicit_key(self) -> None:
        """Test explicit API key takes precedence."""
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-env"}):
            assert resolve_api_key("sk-explicit") == "sk-explicit"

    def test_env_variable(self) -> None:
        """Test the OPENAI_API_KEY environment variable."""
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-env"}):
            assert resolve_api_key() == "sk-env"

    def test_no_key_found(self) -> None:
        """Test when no key is found."""
        with patch.dict(os.environ, {}, clear=True), patch(
            "openai_lite.transport.auth._try_keyring", return_value=None
        ):
            assert resolve_api_key() is None


class TestGetAuthHeaders:
    """Tests for auth header generation."""

    def test_bearer_and_org(self) -> None:
        """Test bearer and organization headers."""
        headers = get_auth_headers("sk-test", "org-1")
        assert headers == {"Authorization": "Bearer sk-test", "OpenAI-Organization": "org-1"}

    def test_org_from_env(self) -> None:
        """Test OPENAI_ORG_ID is picked up."""
        with patch.dict(os.environ, {"OPENAI_ORG_ID": "org-env"}):
            assert get_auth_headers("sk-test")["OpenAI-Organization"] == "org-env"

    def test_no_key(self) -> None:
        """Test when no key is available."""
        with patch.dict(os.environ, {}, clear=True), patch(
            "openai_lite.transport.auth._try_keyring", return_value=None
        ):
            assert get_auth_headers() == {}


class TestSessionConfig:
    """Tests for Session construction."""

    def test_timeout_explicit(self) -> None:
        """Test explicit timeout wins."""
        assert Session(api_key="sk-test", timeout=5.0).timeout == 5.0

    def test_timeout_from_env(self) -> None:
        """Test OPENAI_TIMEOUT_SECS is honored."""
        with patch.dict(os.environ, {"OPENAI_TIMEOUT_SECS": "12.5"}):
            assert Session(api_key="sk-test").timeout == 12.5

    def test_timeout_bad_env_falls_back(self) -> None:
        """Test an unparsable timeout falls back to the default."""
        with patch.dict(os.environ, {"OPENAI_TIMEOUT_SECS": "soon"}):
            assert Session(api_key="sk-test").timeout == 60.0


class TestMakeRequest:
    """Tests for Session.make_request."""

    @pytest.mark.asyncio
    async def test_json_exchange(self, make_session) -> None:
        """Test the JSON body, headers and decoded result."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"text": "ok"})

        session = make_session(handler)
        result = await session.make_request("https://api.test/v1/echo", {"model": "m"}, _Echo)

        assert result == _Echo(text="ok")
        request = seen[0]
        assert request.method == "POST"
        assert request.headers["authorization"] == "Bearer sk-test"
        assert request.headers["content-type"] == "application/json"
        assert request.headers["user-agent"].startswith("openai-lite-python/")

    @pytest.mark.asyncio
    async def test_error_status_raises_remote_error(self, make_session) -> None:
        """Test 4xx/5xx responses become RemoteError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                429,
                json={"error": {"message": "Rate limit reached", "type": "requests"}},
                headers={"retry-after": "2", "x-request-id": "req-1"},
            )

        session = make_session(handler)
        with pytest.raises(RemoteError) as exc_info:
            await session.make_request("https://api.test/v1/echo", {}, _Echo)

        error = exc_info.value
        assert error.status_code == 429
        assert error.error_class == ErrorClass.RATE_LIMITED
        assert error.retryable
        assert error.retry_after == 2.0
        assert error.request_id == "req-1"
        assert error.message == "Rate limit reached"

    @pytest.mark.asyncio
    async def test_error_status_without_json(self, make_session) -> None:
        """Test non-JSON error bodies still produce RemoteError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        session = make_session(handler)
        with pytest.raises(RemoteError, match="HTTP 502"):
            await session.make_request("https://api.test/v1/echo", {}, _Echo)

    @pytest.mark.asyncio
    async def test_malformed_json(self, make_session) -> None:
        """Test a non-JSON success body raises DecodeError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        session = make_session(handler)
        with pytest.raises(DecodeError, match="not valid JSON"):
            await session.make_request("https://api.test/v1/echo", {}, _Echo)

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, make_session) -> None:
        """Test a body that does not fit the model raises DecodeError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        session = make_session(handler)
        with pytest.raises(DecodeError, match="does not match _Echo"):
            await session.make_request("https://api.test/v1/echo", {}, _Echo)

    @pytest.mark.asyncio
    async def test_connect_error(self, make_session) -> None:
        """Test connection failures become TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        session = make_session(handler)
        with pytest.raises(TransportError, match="Connection failed") as exc_info:
            await session.make_request("https://api.test/v1/echo", {}, _Echo)

        assert exc_info.value.url == "https://api.test/v1/echo"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout(self, make_session) -> None:
        """Test timeouts become TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        session = make_session(handler)
        with pytest.raises(TransportError, match="timed out"):
            await session.make_request("https://api.test/v1/echo", {}, _Echo)


class TestUpload:
    """Tests for Session.upload."""

    @pytest.mark.asyncio
    async def test_file_part_and_fields(self, make_session) -> None:
        """Test the file part name, filename, content type and extra fields."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"text": "ok"})

        session = make_session(handler)
        result = await session.upload(
            "https://api.test/v1/upload", b"RIFFdata", "wav", {"model": "whisper-1"}, _Echo
        )

        assert result.text == "ok"
        body = seen[0].content
        assert b'name="file"; filename="audio.wav"' in body
        assert b"RIFFdata" in body
        assert b'name="model"' in body
        assert "authorization" in seen[0].headers


class TestDownload:
    """Tests for Session.download."""

    @pytest.mark.asyncio
    async def test_streams_into_sink(self, make_session) -> None:
        """Test bytes are written and counted."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"0123456789")

        session = make_session(handler)
        sink = io.BytesIO()
        written = await session.download("https://api.test/v1/speech", {"input": "x"}, sink)

        assert written == 10
        assert sink.getvalue() == b"0123456789"

    @pytest.mark.asyncio
    async def test_error_status(self, make_session) -> None:
        """Test an error status raises RemoteError and writes nothing."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": {"message": "boom"}})

        session = make_session(handler)
        sink = io.BytesIO()
        with pytest.raises(RemoteError, match="boom") as exc_info:
            await session.download("https://api.test/v1/speech", {}, sink)

        assert exc_info.value.error_class == ErrorClass.SERVER_ERROR
        assert sink.getvalue() == b""

    @pytest.mark.asyncio
    async def test_connect_error(self, make_session) -> None:
        """Test connection failures during download become TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        session = make_session(handler)
        with pytest.raises(TransportError):
            await session.download("https://api.test/v1/speech", {}, io.BytesIO())


class TestLifecycle:
    """Tests for session lifecycle."""

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self) -> None:
        """Test aclose does not close a client the caller owns."""
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"text": "x"}))
        )
        async with Session(api_key="sk-test", http_client=http_client):
            pass
        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_private_client_closed(self) -> None:
        """Test aclose closes the lazily created client."""
        session = Session(api_key="sk-test")
        client = session._get_client()
        await session.aclose()
        assert client.is_closed
