"""Audio 模块：封装语音转文本与文本转语音能力。

Audio module.

Provides transcription of audio to text (e.g. Whisper) and synthesis of
text to audio (e.g. TTS) via the provider API.
"""

from openai_lite.audio.client import DEFAULT_MODEL, AudioClient, AudioClientBuilder
from openai_lite.audio.types import (
    SpeechFormat,
    SpeechParams,
    TranscriptionParams,
    TranscriptionResponse,
)

__all__ = [
    "DEFAULT_MODEL",
    "AudioClient",
    "AudioClientBuilder",
    "SpeechFormat",
    "SpeechParams",
    "TranscriptionParams",
    "TranscriptionResponse",
]
