"""
Audio request and response types for transcription and speech synthesis.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import IO

from pydantic import Field

from openai_lite.types import ApiModel


class SpeechFormat(str, Enum):
    """Output audio format for speech synthesis."""

    Mp3 = "mp3"
    Opus = "opus"
    Aac = "aac"
    Flac = "flac"
    Wav = "wav"
    Pcm = "pcm"


@dataclass
class TranscriptionParams:
    """Parameters for audio transcription.

    Attributes:
        audio: Raw audio bytes or a readable binary stream (e.g. an open file)
        audio_format: Container format such as "mp3" or "wav"; required
        model: Model id; client default when unset
        language: ISO-639-1 hint for the spoken language
        prompt: Text to guide style or continue a previous segment
        temperature: Sampling temperature between 0 and 1
    """

    audio: bytes | IO[bytes]
    audio_format: str | None = None
    model: str | None = None
    language: str | None = None
    prompt: str | None = None
    temperature: float | None = None


class TranscriptionResponse(ApiModel):
    """Transcription result."""

    text: str = ""


class SpeechParams(ApiModel):
    """Parameters for speech synthesis."""

    input: str = Field(description="Text to speak")
    voice: str | None = Field(default=None, description="Voice id, e.g. 'nova'; required")
    model: str | None = Field(default=None, description="Model id; client default when unset")
    response_format: SpeechFormat | None = Field(default=None, description="Output audio format")
    speed: float | None = Field(default=None, description="Playback speed factor")
