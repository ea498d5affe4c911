"""Chat 模块：封装（多模态）对话补全能力。

Chat module.

Provides chat and multi-modal chat completions via the provider API.
"""

from openai_lite.chat.client import DEFAULT_MODEL, ChatClient, ChatClientBuilder
from openai_lite.chat.types import (
    Choice,
    CompletionParams,
    CompletionResponse,
    Content,
    Function,
    FunctionCall,
    ImageContent,
    ImageURL,
    Message,
    MessageRole,
    MMCompletionParams,
    MMMessage,
    TextContent,
    new_content_from_image,
    new_content_from_image_url,
    new_content_from_text,
)

__all__ = [
    "DEFAULT_MODEL",
    "ChatClient",
    "ChatClientBuilder",
    "Choice",
    "CompletionParams",
    "CompletionResponse",
    "Content",
    "Function",
    "FunctionCall",
    "ImageContent",
    "ImageURL",
    "MMCompletionParams",
    "MMMessage",
    "Message",
    "MessageRole",
    "TextContent",
    "new_content_from_image",
    "new_content_from_image_url",
    "new_content_from_text",
]
