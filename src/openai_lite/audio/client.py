"""Audio 客户端：用于语音转文本与文本转语音调用。

Audio client: transcription (speech-to-text) and speech synthesis
(text-to-speech).
"""

from __future__ import annotations

from typing import Any

from openai_lite.audio.types import (
    SpeechParams,
    TranscriptionParams,
    TranscriptionResponse,
)
from openai_lite.config import ClientConfig
from openai_lite.errors import DownloadError, OpenAILiteError, ValidationError
from openai_lite.transport import BinarySink, Session

DEFAULT_MODEL = "whisper-1"


class AudioClient:
    """Client for audio transcription and speech synthesis."""

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
    def builder(cls) -> AudioClientBuilder:
        """Get a builder for creating audio clients."""
        return AudioClientBuilder()

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

    async def __aenter__(self) -> AudioClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def create_transcription(self, params: TranscriptionParams) -> TranscriptionResponse:
        """Transcribe audio to text.

        Args:
            params: Transcription parameters

        Returns:
            Transcription result

        Raises:
            ValidationError: If params.audio_format is missing
        """
        if not params.audio_format:
            raise ValidationError("audio format is required", field="audio_format")

        fields: dict[str, str] = {"model": params.model or self._model}
        if params.language:
            fields["language"] = params.language
        if params.prompt:
            fields["prompt"] = params.prompt
        if params.temperature is not None:
            fields["temperature"] = str(params.temperature)

        return await self._session.upload(
            self._config.transcription_endpoint,
            params.audio,
            params.audio_format,
            fields,
            TranscriptionResponse,
        )

    async def create_speech(self, params: SpeechParams, sink: BinarySink) -> None:
        """Synthesize speech and write the audio bytes into sink.

        Args:
            params: Speech parameters; the caller's object is not modified
            sink: Writable binary destination (open file, BytesIO, ...)

        Raises:
            ValidationError: If params.voice is missing
            DownloadError: If the download fails; the cause is chained
        """
        if not params.voice:
            raise ValidationError("voice is required", field="voice")
        if not params.model:
            params = params.model_copy(update={"model": self._model})

        try:
            await self._session.download(
                self._config.speech_endpoint,
                params.to_payload(),
                sink,
            )
        except (OpenAILiteError, OSError) as e:
            raise DownloadError(f"failed to download speech: {e}", cause=e) from e


class AudioClientBuilder:
    """Builder for AudioClient."""

    def __init__(self) -> None:
        self._session: Session | None = None
        self._api_key: str | None = None
        self._model: str | None = None
        self._base_url: str | None = None
        self._transcription_endpoint: str | None = None
        self._speech_endpoint: str | None = None

    def session(self, session: Session) -> AudioClientBuilder:
        self._session = session
        return self

    def api_key(self, api_key: str | None) -> AudioClientBuilder:
        self._api_key = api_key
        return self

    def model(self, model: str | None) -> AudioClientBuilder:
        self._model = model
        return self

    def base_url(self, url: str | None) -> AudioClientBuilder:
        self._base_url = url
        return self

    def transcription_endpoint(self, url: str | None) -> AudioClientBuilder:
        self._transcription_endpoint = url
        return self

    def speech_endpoint(self, url: str | None) -> AudioClientBuilder:
        self._speech_endpoint = url
        return self

    def build(self) -> AudioClient:
        """Build the audio client, opening a new Session when none was given."""
        config = ClientConfig.for_base_url(self._base_url) if self._base_url else ClientConfig.from_env()
        config = config.with_overrides(
            transcription_endpoint=self._transcription_endpoint,
            speech_endpoint=self._speech_endpoint,
        )
        if self._session is not None:
            return AudioClient(self._session, self._model, config=config)
        return AudioClient(
            Session(api_key=self._api_key), self._model, config=config, owns_session=True
        )
