#!/usr/bin/env python3
"""
Multi-modal (vision) example.

Sends a local image together with a text prompt and prints every choice.

Usage:
    export OPENAI_API_KEY="your-api-key"
    python examples/vision.py path/to/image.png
"""

import asyncio
import sys
from pathlib import Path

from openai_lite import (
    ChatClient,
    MessageRole,
    MMCompletionParams,
    MMMessage,
    OpenAILiteError,
    Session,
    new_content_from_image,
    new_content_from_text,
)

_MEDIA_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


async def main(image_path: str) -> int:
    path = Path(image_path)
    media_type = _MEDIA_TYPES.get(path.suffix.lower(), "image/png")

    async with Session() as session:
        client = ChatClient(session, "gpt-4o")
        try:
            image = new_content_from_image(media_type, path.read_bytes())
            response = await client.create_mm_completion(
                MMCompletionParams(
                    max_tokens=255,
                    messages=[
                        MMMessage(
                            role=MessageRole.USER,
                            content=[image, new_content_from_text("please describe the image")],
                        )
                    ],
                )
            )
        except OpenAILiteError as e:
            print(f"Failed to complete: {e}")
            return 1

    for choice in response.choices:
        if choice.message is not None:
            print(f"role={choice.message.role!r}, content={choice.message.content!r}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1])))
