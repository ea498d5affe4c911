"""客户端配置：提供不可变的端点配置。

Client configuration.

Endpoints are fixed when a client is constructed and never change
afterwards, so one client can be shared by concurrent tasks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

DEFAULT_BASE_URL = "https://api.openai.com"

DEFAULT_COMPLETIONS_ENDPOINT = f"{DEFAULT_BASE_URL}/v1/chat/completions"
DEFAULT_TRANSCRIPTION_ENDPOINT = f"{DEFAULT_BASE_URL}/v1/audio/transcriptions"
DEFAULT_SPEECH_ENDPOINT = f"{DEFAULT_BASE_URL}/v1/audio/speech"


@dataclass(frozen=True)
class ClientConfig:
    """Endpoint URLs used by the chat and audio clients.

    Attributes:
        completions_endpoint: Chat (and multi-modal chat) completions URL
        transcription_endpoint: Audio transcription URL
        speech_endpoint: Speech synthesis URL
    """

    completions_endpoint: str = DEFAULT_COMPLETIONS_ENDPOINT
    transcription_endpoint: str = DEFAULT_TRANSCRIPTION_ENDPOINT
    speech_endpoint: str = DEFAULT_SPEECH_ENDPOINT

    @classmethod
    def for_base_url(cls, base_url: str) -> ClientConfig:
        """Point every endpoint at another host (e.g. a proxy or mock server).

        Args:
            base_url: Scheme and host, optionally with a path prefix

        Returns:
            ClientConfig with the standard paths under base_url
        """
        base = base_url.rstrip("/")
        return cls(
            completions_endpoint=f"{base}/v1/chat/completions",
            transcription_endpoint=f"{base}/v1/audio/transcriptions",
            speech_endpoint=f"{base}/v1/audio/speech",
        )

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build from OPENAI_BASE_URL, or the defaults when it is unset."""
        base_url = os.getenv("OPENAI_BASE_URL")
        if base_url:
            return cls.for_base_url(base_url)
        return cls()

    def with_overrides(
        self,
        *,
        completions_endpoint: str | None = None,
        transcription_endpoint: str | None = None,
        speech_endpoint: str | None = None,
    ) -> ClientConfig:
        """Return a copy with the given endpoints replaced."""
        changes = {
            "completions_endpoint": completions_endpoint,
            "transcription_endpoint": transcription_endpoint,
            "speech_endpoint": speech_endpoint,
        }
        return replace(self, **{k: v for k, v in changes.items() if v})
