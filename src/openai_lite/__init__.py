"""OpenAI 轻量 Python 客户端：对话补全、多模态、语音转写与语音合成。

openai-lite-python: thin async clients for the OpenAI HTTP API.

Each client turns typed parameters into one HTTP request through a shared
Session and decodes the response into typed results.
"""
from __future__ import annotations

from openai_lite.audio import (
    AudioClient,
    SpeechFormat,
    SpeechParams,
    TranscriptionParams,
    TranscriptionResponse,
)
from openai_lite.chat import (
    ChatClient,
    CompletionParams,
    CompletionResponse,
    ImageContent,
    Message,
    MessageRole,
    MMCompletionParams,
    MMMessage,
    TextContent,
    new_content_from_image,
    new_content_from_image_url,
    new_content_from_text,
)
from openai_lite.config import ClientConfig
from openai_lite.errors import (
    DecodeError,
    DownloadError,
    OpenAILiteError,
    RemoteError,
    TransportError,
    UnsupportedModeError,
    ValidationError,
)
from openai_lite.transport import Session
from openai_lite.types import Usage

__version__ = "0.3.0"

__all__ = [
    # Clients
    "AudioClient",
    "ChatClient",
    "ClientConfig",
    "Session",
    # Chat types
    "CompletionParams",
    "CompletionResponse",
    "ImageContent",
    "MMCompletionParams",
    "MMMessage",
    "Message",
    "MessageRole",
    "TextContent",
    "Usage",
    "new_content_from_image",
    "new_content_from_image_url",
    "new_content_from_text",
    # Audio types
    "SpeechFormat",
    "SpeechParams",
    "TranscriptionParams",
    "TranscriptionResponse",
    # Errors
    "DecodeError",
    "DownloadError",
    "OpenAILiteError",
    "RemoteError",
    "TransportError",
    "UnsupportedModeError",
    "ValidationError",
    # Version
    "__version__",
]
