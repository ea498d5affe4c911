"""Chat 客户端：用于（多模态）对话补全调用。

Chat completions client.
"""

from __future__ import annotations

from typing import Any, TypeVar

from openai_lite.chat.types import (
    CompletionParams,
    CompletionResponse,
    MMCompletionParams,
)
from openai_lite.config import ClientConfig
from openai_lite.errors import UnsupportedModeError
from openai_lite.transport import Session

DEFAULT_MODEL = "gpt-3.5-turbo"

ParamsT = TypeVar("ParamsT", CompletionParams, MMCompletionParams)


class ChatClient:
    """Client for chat completions (text and multi-modal).

    Streaming is not served here: params with ``stream=True`` are
    rejected before anything is sent.

    Example:
        >>> client = ChatClient(session, "gpt-4o")
        >>> response = await client.create_completion(
        ...     CompletionParams(messages=[Message.user("Hello!")])
        ... )
        >>> print(response.first_content)
    """

    def __init__(
        self,
        session: Session,
        model: str | None = None,
        *,
        config: ClientConfig | None = None,
        owns_session: bool = False,
    ) -> None:
        self._session = session
        self._owns_session = owns_session
        self._model = model or DEFAULT_MODEL
        self._config = config or ClientConfig()

    @classmethod
    def builder(cls) -> ChatClientBuilder:
        """Get a builder for creating chat clients."""
        return ChatClientBuilder()

    @property
    def model(self) -> str:
        """Get the default model identifier."""
        return self._model

    @property
    def config(self) -> ClientConfig:
        """Get the endpoint configuration."""
        return self._config

    async def close(self) -> None:
        """Close the session if this client opened it."""
        if self._owns_session:
            await self._session.aclose()

    async def __aenter__(self) -> ChatClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    def _prepare(self, params: ParamsT) -> ParamsT:
        if not params.model:
            params = params.model_copy(update={"model": self._model})
        if params.stream:
            raise UnsupportedModeError("use StreamingClient instead", mode="stream")
        return params

    async def create_completion(self, params: CompletionParams) -> CompletionResponse:
        """Create a chat completion.

        Args:
            params: Completion parameters; the caller's object is not modified

        Returns:
            Decoded completion response

        Raises:
            UnsupportedModeError: If params.stream is set
            TransportError, RemoteError, DecodeError: Propagated from the session
        """
        request = self._prepare(params)
        return await self._session.make_request(
            self._config.completions_endpoint,
            request.to_payload(),
            CompletionResponse,
        )

    async def create_mm_completion(self, params: MMCompletionParams) -> CompletionResponse:
        """Multi-modal version of create_completion, against the same endpoint."""
        request = self._prepare(params)
        return await self._session.make_request(
            self._config.completions_endpoint,
            request.to_payload(),
            CompletionResponse,
        )


class ChatClientBuilder:
    """Builder for ChatClient."""

    def __init__(self) -> None:
        self._session: Session | None = None
        self._api_key: str | None = None
        self._model: str | None = None
        self._base_url: str | None = None
        self._completions_endpoint: str | None = None

    def session(self, session: Session) -> ChatClientBuilder:
        self._session = session
        return self

    def api_key(self, api_key: str | None) -> ChatClientBuilder:
        self._api_key = api_key
        return self

    def model(self, model: str | None) -> ChatClientBuilder:
        self._model = model
        return self

    def base_url(self, url: str | None) -> ChatClientBuilder:
        self._base_url = url
        return self

    def completions_endpoint(self, url: str | None) -> ChatClientBuilder:
        self._completions_endpoint = url
        return self

    def build(self) -> ChatClient:
        """Build the chat client, opening a new Session when none was given."""
        config = ClientConfig.for_base_url(self._base_url) if self._base_url else ClientConfig.from_env()
        config = config.with_overrides(completions_endpoint=self._completions_endpoint)
        if self._session is not None:
            return ChatClient(self._session, self._model, config=config)
        return ChatClient(
            Session(api_key=self._api_key), self._model, config=config, owns_session=True
        )
