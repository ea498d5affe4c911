#!/usr/bin/env python3
"""
Audio round trip example.

Transcribes an audio file, then reads the transcript back out loud into
speech.aac.

Usage:
    export OPENAI_API_KEY="your-api-key"
    export AUDIO_FILE_PATH="path/to/recording.mp3"
    python examples/audio_roundtrip.py
"""

import asyncio
import os
import sys
from pathlib import Path

from openai_lite import (
    AudioClient,
    OpenAILiteError,
    Session,
    SpeechParams,
    TranscriptionParams,
)


async def main() -> int:
    file_path = os.getenv("AUDIO_FILE_PATH")
    if not file_path:
        print("must provide an AUDIO_FILE_PATH env var")
        return 1

    async with Session() as session:
        client = AudioClient(session)

        try:
            with Path(file_path).open("rb") as audio:
                transcript = await client.create_transcription(
                    TranscriptionParams(audio=audio, audio_format="mp3", language="en")
                )
        except OpenAILiteError as e:
            print(f"error transcribing file: {e}")
            return 1

        print(transcript.text)

        output = Path("speech.aac")
        try:
            with output.open("wb") as sink:
                await client.create_speech(
                    SpeechParams(
                        model="tts-1",
                        voice="nova",
                        response_format="aac",
                        input=transcript.text,
                    ),
                    sink,
                )
        except OpenAILiteError as e:
            print(f"error creating speech: {e}")
            return 1

    print(f"saved speech file to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
